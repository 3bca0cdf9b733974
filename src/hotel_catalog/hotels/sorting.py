"""Orderings offered by the "Sort by" menu."""
from __future__ import annotations

import enum
import logging
from typing import Callable, List, Tuple

from .models import Hotel

logger = logging.getLogger(__name__)


class SortBy(enum.Enum):
    RECOMMENDED = "recommended"
    LOWEST_PRICE = "lowest_price"
    STAR_RATING = "star_rating"
    DISTANCE = "distance"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "SortBy":
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            known = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown sort mode '{value}'. Known modes: {known}") from exc


_LABELS = {
    SortBy.RECOMMENDED: "Recommended",
    SortBy.LOWEST_PRICE: "Lowest price",
    SortBy.STAR_RATING: "Star rating",
    SortBy.DISTANCE: "Distance",
}


def _price_key(hotel: Hotel) -> Tuple[bool, float]:
    # Unpriced hotels share one key, so their relative order is whatever the sort leaves.
    if hotel.price is None:
        return True, 0.0
    return False, hotel.price.amount


def _star_key(hotel: Hotel) -> float:
    return hotel.star_rating or 0.0


_ORDERINGS: dict[SortBy, Tuple[Callable[[Hotel], object], bool]] = {
    SortBy.RECOMMENDED: (lambda hotel: hotel.priority_score, True),
    SortBy.LOWEST_PRICE: (_price_key, False),
    SortBy.STAR_RATING: (_star_key, True),
    SortBy.DISTANCE: (lambda hotel: hotel.distance_in_meters, False),
}


def sort_hotels(hotels: List[Hotel], mode: SortBy) -> None:
    """Reorder ``hotels`` in place according to ``mode``."""
    key, descending = _ORDERINGS[mode]
    hotels.sort(key=key, reverse=descending)
    logger.debug("Sorted %s hotels by %s", len(hotels), mode.value)


def sort_options() -> List[Tuple[str, SortBy]]:
    return [(mode.label, mode) for mode in SortBy]
