"""Immutable view state handed to the display layer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from hotel_catalog.hotels.models import Hotel, Review
from hotel_catalog.hotels.sorting import SortBy

DEFAULT_TITLE = "Dubai, United Arab Emirates"


@dataclass(frozen=True, slots=True)
class ReviewBadge:
    score_label: str
    description: Optional[str]
    count_label: str


@dataclass(frozen=True, slots=True)
class HotelCard:
    """Everything one list cell needs to draw itself."""

    hotel_id: str
    title: str
    price_label: Optional[str]
    address: Optional[str]
    distance_label: str
    review: Optional[ReviewBadge] = None
    thumbnail: Optional[bytes] = None

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_id": self.hotel_id,
            "title": self.title,
            "price_label": self.price_label,
            "address": self.address,
            "distance_label": self.distance_label,
            "review": (
                {
                    "score_label": self.review.score_label,
                    "description": self.review.description,
                    "count_label": self.review.count_label,
                }
                if self.review
                else None
            ),
            "has_thumbnail": self.has_thumbnail,
        }


@dataclass(frozen=True, slots=True)
class HotelListSnapshot:
    title: str
    sort_mode: Optional[SortBy]
    cards: Tuple[HotelCard, ...] = ()

    def __len__(self) -> int:
        return len(self.cards)

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "sort_mode": self.sort_mode.value if self.sort_mode else None,
            "cards": [card.to_dict() for card in self.cards],
        }


def format_distance(meters: float) -> str:
    rounded = round(meters)
    if rounded < 1000:
        return f"{rounded} m"
    return f"{meters / 1000:.1f} km"


def build_review_badge(review: Optional[Review], locale: str) -> Optional[ReviewBadge]:
    if review is None or review.is_empty:
        return None
    noun = "review" if review.count == 1 else "reviews"
    return ReviewBadge(
        score_label=f"{review.score:g}",
        description=review.description(locale),
        count_label=f"{review.count:,} {noun}",
    )


def build_card(hotel: Hotel, locale: str = "en") -> HotelCard:
    return HotelCard(
        hotel_id=hotel.hotel_id,
        title=hotel.attributed_name(locale),
        price_label=hotel.price_with_currency,
        address=hotel.address_text(locale),
        distance_label=format_distance(hotel.distance_in_meters),
        review=build_review_badge(hotel.review, locale),
        thumbnail=hotel.thumbnail,
    )


def render_snapshot(
    hotels: Iterable[Hotel],
    *,
    title: str = DEFAULT_TITLE,
    sort_mode: Optional[SortBy] = None,
    locale: str = "en",
) -> HotelListSnapshot:
    """Project the current hotel list into a frozen snapshot."""
    return HotelListSnapshot(
        title=title,
        sort_mode=sort_mode,
        cards=tuple(build_card(hotel, locale) for hotel in hotels),
    )
