"""Dataclasses for decoded hotel catalog entries."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

STAR_GLYPH = "★"


def _pick_locale(values: Dict[str, str], locale: str) -> Optional[str]:
    if not values:
        return None
    if locale in values:
        return values[locale]
    if "en" in values:
        return values["en"]
    return next(iter(values.values()))


def format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


@dataclass(frozen=True, slots=True)
class Price:
    """Nightly price quoted for a hotel."""

    amount: float
    currency: str

    def label(self) -> str:
        return f"{self.currency} {format_amount(self.amount)}"


@dataclass(frozen=True, slots=True)
class Review:
    """Aggregated guest review score."""

    score: float
    count: int
    score_description: Dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def description(self, locale: str = "en") -> Optional[str]:
        return _pick_locale(self.score_description, locale)

    def to_dict(self) -> dict[str, object]:
        return {
            "score": self.score,
            "count": self.count,
            "score_description": dict(self.score_description),
        }


@dataclass(slots=True)
class Hotel:
    """A hotel as shown on the list screen.

    Everything except ``thumbnail`` is fixed once the catalog is decoded. The
    thumbnail arrives later and is attached in place, which is what flips
    ``downloaded``.
    """

    hotel_id: str
    name: Dict[str, str]
    thumbnail_url: str
    priority_score: float
    distance_in_meters: float
    address: Dict[str, str] = field(default_factory=dict)
    price: Optional[Price] = None
    star_rating: Optional[float] = None
    review: Optional[Review] = None
    thumbnail: Optional[bytes] = field(default=None, repr=False)

    @property
    def downloaded(self) -> bool:
        return self.thumbnail is not None

    def attach_thumbnail(self, data: bytes) -> None:
        self.thumbnail = bytes(data)

    def display_name(self, locale: str = "en") -> str:
        return _pick_locale(self.name, locale) or self.hotel_id

    def attributed_name(self, locale: str = "en") -> str:
        name = self.display_name(locale)
        stars = int(self.star_rating or 0)
        if stars <= 0:
            return name
        return f"{name} {STAR_GLYPH * stars}"

    def address_text(self, locale: str = "en") -> Optional[str]:
        return _pick_locale(self.address, locale)

    @property
    def price_with_currency(self) -> Optional[str]:
        if self.price is None:
            return None
        return self.price.label()

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_id": self.hotel_id,
            "name": dict(self.name),
            "thumbnail_url": self.thumbnail_url,
            "priority_score": self.priority_score,
            "distance_in_meters": self.distance_in_meters,
            "address": dict(self.address),
            "price": self.price.amount if self.price else None,
            "currency": self.price.currency if self.price else None,
            "star_rating": self.star_rating,
            "review": self.review.to_dict() if self.review else None,
            "downloaded": self.downloaded,
        }

    @classmethod
    def from_iterable(cls, hotels: Iterable["Hotel"]) -> List[dict[str, object]]:
        return [hotel.to_dict() for hotel in hotels]


@dataclass(slots=True)
class CatalogPage:
    """Successfully decoded catalog document."""

    hotels: List[Hotel] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hotels)
