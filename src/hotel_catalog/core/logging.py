"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path


def configure_logging(level: str, log_dir: Path, *, filename: str = "hotel_catalog.log") -> None:
    """Configure basic logging for CLI usage."""
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_dir / filename),
        ],
    )
    # httpx logs every request at INFO; keep it out of CLI output unless debugging.
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
