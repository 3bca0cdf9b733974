"""JSON export of rendered hotel list snapshots."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from hotel_catalog.screen.render import HotelListSnapshot


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JsonStore:
    """Writes ``{"generated_at": ..., "items": [...]}`` documents under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _target(self, filename: str, subdir: str | None) -> Path:
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        return target_dir / filename

    async def write(
        self,
        data: Iterable[dict[str, object]],
        *,
        filename: str,
        subdir: str | None = None,
    ) -> Path:
        path = self._target(filename, subdir)
        document = {"generated_at": _utc_timestamp(), "items": list(data)}
        path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    async def write_snapshot(
        self,
        snapshot: "HotelListSnapshot",
        *,
        filename: str = "hotels.json",
        subdir: str | None = None,
    ) -> Path:
        """Export one snapshot; cards become the items, title and sort mode ride along."""
        path = self._target(filename, subdir)
        document = {
            "generated_at": _utc_timestamp(),
            "title": snapshot.title,
            "sort_mode": snapshot.sort_mode.value if snapshot.sort_mode else None,
            "items": [card.to_dict() for card in snapshot.cards],
        }
        path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        return path
