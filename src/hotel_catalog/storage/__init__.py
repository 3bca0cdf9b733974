"""Persistence helpers for snapshots and thumbnails."""

from .json_writer import JsonStore
from .thumbnails import save_thumbnails, thumbnail_filename

__all__ = ["JsonStore", "save_thumbnails", "thumbnail_filename"]
