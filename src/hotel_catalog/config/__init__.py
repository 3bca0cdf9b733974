"""Configuration models."""

from .settings import CATALOG_URL, Settings

__all__ = ["CATALOG_URL", "Settings"]
