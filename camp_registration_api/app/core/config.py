"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can be
started without any configuration at all; override them via environment
variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Camp Registration API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  A relative path is resolved against
    # the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "camp_registration.db")

    # Page size used by list endpoints that do not configure their own.
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "25"))

    # Hard ceiling for ``per_page``.  Endpoint-level maxima above this
    # value are capped to it.
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "1000"))

    # How many random registration numbers to try before giving up.
    registration_no_attempts: int = int(os.getenv("REGISTRATION_NO_ATTEMPTS", "5"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must be
# set before this module is imported.
settings = Settings()
