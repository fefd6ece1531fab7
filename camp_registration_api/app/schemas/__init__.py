"""
Pydantic schema definitions for API payloads.

Each resource (districts, camps, campites) defines its own request and
response models.  Schemas are kept separate from the table metadata so
the API representation can evolve independently of storage.
"""
