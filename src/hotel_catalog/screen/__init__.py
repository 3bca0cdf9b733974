"""Hotel list screen state and rendering."""

from .controller import HotelListController
from .render import (
    DEFAULT_TITLE,
    HotelCard,
    HotelListSnapshot,
    ReviewBadge,
    render_snapshot,
)

__all__ = [
    "DEFAULT_TITLE",
    "HotelCard",
    "HotelListController",
    "HotelListSnapshot",
    "ReviewBadge",
    "render_snapshot",
]
