"""Thumbnail fetching and caching."""

from .cache import ThumbnailCache

__all__ = ["ThumbnailCache"]
