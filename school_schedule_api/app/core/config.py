"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables, with defaults for every field.  Two persistence backends are
supported: a flat JSON document (the default) and a SQLite database with
one table per collection.  Override the values via environment
variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "School Schedule API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")

    # ``json`` keeps the four collections in a single document, ``sqlite``
    # keeps them in four tables of one database file.
    store_backend: str = os.getenv("STORE_BACKEND", "json")

    # Location of the JSON document used by the ``json`` backend.
    database_path: str = os.getenv("DATABASE_PATH", "/tmp/database.json")

    # Path of the SQLite database used by the ``sqlite`` backend.  A
    # relative path is resolved against the project root by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "school_schedule.db")

    # Comma-separated list of origins allowed by CORS.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
