"""Runtime configuration for the hotel catalog.

Relies on pydantic-settings so that environment variables (prefixed with
``HOTEL_CATALOG_``) can override defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CATALOG_URL = "https://sgerges.s3-eu-west-1.amazonaws.com/iostesttaskhotels.json"


class Settings(BaseSettings):
    """Captures runtime configuration for the catalog screen."""

    catalog_url: str = Field(default=CATALOG_URL, description="Endpoint serving the hotels JSON document")
    request_timeout_s: float = Field(default=10.0, description="Timeout applied to catalog and thumbnail requests")
    user_agent: str = Field(default="hotel-catalog/0.1.0")
    locale: str = Field(default="en", description="Locale used when picking names, addresses and review text")
    default_currency: str = Field(default="AED", description="Currency assumed when a record omits one")
    screen_title: str = Field(default="Dubai, United Arab Emirates")
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    download_dir: Path = Field(default=Path("data/downloads"))

    model_config = SettingsConfigDict(
        env_prefix="HOTEL_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_dir", "download_dir", mode="before")
    def _expand_path(cls, value: str | Path) -> Path:  # noqa: D401
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("request_timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_s must be positive")
        return value

    @field_validator("locale", "default_currency")
    def _strip_code(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("locale and default_currency must not be empty")
        return stripped

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.download_dir.mkdir(parents=True, exist_ok=True)
