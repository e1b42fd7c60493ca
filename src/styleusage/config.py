"""Run configuration using pydantic-settings.

Every field can be set through a ``STYLE_USAGE_`` prefixed environment
variable or a ``.env`` file, e.g. ``STYLE_USAGE_CONTENT_ROOT=/content/site``.
"""

from __future__ import annotations

import posixpath
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from styleusage.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Report settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STYLE_USAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Report roots
    content_root: str = "/content"
    catalog_root: str = "/conf"

    # Store
    store_url: str = "http://localhost:4502"
    store_username: str = "admin"
    store_password: str = "admin"
    store_file: Path | None = None  # Read a JSON export instead of HTTP
    timeout: float = 60.0

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("content_root", "catalog_root")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"must be an absolute repository path, got {value!r}")
        return posixpath.normpath("/" + value.lstrip("/"))

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def load_settings(**overrides: object) -> Settings:
    """Build settings, reporting invalid values as a ConfigurationError."""
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
