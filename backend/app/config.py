"""
Product Catalog Backend: Application Configuration
==================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the database layer, the app factory, and `python -m app`.
When:  Loaded once at module import time; validated before the app starts.

Environment variables keep the names the service has always used:
PORT (listen port, default 3000) and NAME (greeting, default "World").
"""

from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running the service locally
    with a SQLite file and an `uploads/` directory next to it.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Single-file SQLite database, accessed through the aiosqlite driver
    database_url: str = Field(
        default="sqlite+aiosqlite:///./database.sqlite",
        description="Async SQLAlchemy URL of the product database",
    )

    # ── Uploads ───────────────────────────────────────────────────────────
    # Directory holding uploaded product images, relative to the CWD
    upload_dir: str = Field(default="./uploads")

    # Public URL prefix under which upload_dir is served read-only
    upload_url_prefix: str = Field(default="/uploads")

    # multipart: create/update accept an `image` file part
    # url_only:  only a body `image_url` string is used
    upload_mode: Literal["multipart", "url_only"] = Field(default="multipart")

    # When enabled, create and update reject requests without name + image_url
    require_product_fields: bool = Field(default=False)

    @field_validator("upload_url_prefix")
    @classmethod
    def validate_upload_url_prefix(cls, v: str) -> str:
        """Normalizes the prefix to a leading slash and no trailing slash."""
        stripped = v.strip().strip("/")
        if not stripped:
            raise ValueError("upload_url_prefix must not be empty")
        return f"/{stripped}"

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Name used by the GET / greeting
    name: str = Field(default="World")

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }

    @property
    def accepts_uploads(self) -> bool:
        return self.upload_mode == "multipart"


# Singleton instance: imported throughout the application
settings = Settings()
