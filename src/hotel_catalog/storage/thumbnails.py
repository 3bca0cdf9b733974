"""Write downloaded thumbnails to disk."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List

from hotel_catalog.hotels.models import Hotel

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def thumbnail_filename(hotel: Hotel, *, suffix: str = ".jpg") -> str:
    stem = _UNSAFE_CHARS.sub("_", hotel.hotel_id).strip("._") or "hotel"
    return f"{stem}{suffix}"


def save_thumbnails(hotels: Iterable[Hotel], directory: Path) -> List[Path]:
    """Persist every downloaded thumbnail and return the written paths."""
    directory.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for hotel in hotels:
        if hotel.thumbnail is None:
            continue
        path = directory / thumbnail_filename(hotel)
        path.write_bytes(hotel.thumbnail)
        written.append(path)
    logger.info("Wrote %s thumbnails to %s", len(written), directory)
    return written
