"""
Application package for the Camp Registration API.

Resources (districts, camps, campites) each have a schema module, a
service and a router under ``api/v1/endpoints``.  List endpoints share
the bracket-notation query translator in ``query``.
"""

from .main import app  # noqa: F401
