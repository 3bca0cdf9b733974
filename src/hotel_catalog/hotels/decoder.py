"""Turn the raw catalog JSON document into :class:`Hotel` records."""
from __future__ import annotations

import enum
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from .models import CatalogPage, Hotel, Price, Review

logger = logging.getLogger(__name__)


class DecodeErrorKind(str, enum.Enum):
    INVALID_JSON = "invalid_json"
    UNEXPECTED_SHAPE = "unexpected_shape"
    INVALID_RECORD = "invalid_record"


class CatalogDecodeError(ValueError):
    """Raised when the catalog payload cannot be decoded."""

    def __init__(self, kind: DecodeErrorKind, message: str, *, hotel_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.hotel_id = hotel_id


def _record_error(hotel_id: str, message: str) -> CatalogDecodeError:
    return CatalogDecodeError(
        DecodeErrorKind.INVALID_RECORD,
        f"Hotel '{hotel_id}': {message}",
        hotel_id=hotel_id,
    )


def _number(record: Mapping[str, Any], key: str, hotel_id: str, *, required: bool) -> Optional[float]:
    value = record.get(key)
    if value is None:
        if required:
            raise _record_error(hotel_id, f"missing required field '{key}'")
        return None
    # bool is an int subclass but never a valid score/price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _record_error(hotel_id, f"field '{key}' must be a number, got {type(value).__name__}")
    return float(value)


def _string(record: Mapping[str, Any], key: str, hotel_id: str) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise _record_error(hotel_id, f"field '{key}' must be a string")
    return value


def _localized(value: Any, key: str, hotel_id: str, *, required: bool = True) -> Dict[str, str]:
    if value is None:
        if required:
            raise _record_error(hotel_id, f"missing required field '{key}'")
        return {}
    if isinstance(value, str):
        return {"en": value}
    if not isinstance(value, dict):
        raise _record_error(hotel_id, f"field '{key}' must be an object keyed by locale")
    localized: Dict[str, str] = {}
    for locale, text in value.items():
        if text is None:
            continue
        if not isinstance(text, str):
            raise _record_error(hotel_id, f"field '{key}.{locale}' must be a string")
        localized[str(locale)] = text
    return localized


def _extract_review(value: Any, hotel_id: str) -> Optional[Review]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise _record_error(hotel_id, "field 'review' must be an object")
    score = _number(value, "score", hotel_id, required=True)
    count = _number(value, "count", hotel_id, required=True)
    if not count.is_integer() or count < 0:
        raise _record_error(hotel_id, "field 'review.count' must be a non-negative integer")
    return Review(
        score=score,
        count=int(count),
        score_description=_localized(
            value.get("scoreDescription"), "review.scoreDescription", hotel_id, required=False
        ),
    )


def _extract_price(record: Mapping[str, Any], hotel_id: str, default_currency: str) -> Optional[Price]:
    amount = _number(record, "price", hotel_id, required=False)
    if amount is None:
        return None
    currency = record.get("currency") or default_currency
    if not isinstance(currency, str):
        raise _record_error(hotel_id, "field 'currency' must be a string")
    return Price(amount=amount, currency=currency)


def build_hotel(hotel_id: str, record: Any, *, default_currency: str = "AED") -> Hotel:
    """Build a single :class:`Hotel` from its JSON object."""
    if not isinstance(record, dict):
        raise _record_error(hotel_id, "record must be a JSON object")
    return Hotel(
        hotel_id=hotel_id,
        name=_localized(record.get("name"), "name", hotel_id),
        thumbnail_url=_string(record, "thumbnailUrl", hotel_id),
        priority_score=_number(record, "priorityScore", hotel_id, required=True),
        distance_in_meters=_number(record, "distanceInMeters", hotel_id, required=True),
        address=_localized(record.get("address"), "address", hotel_id),
        price=_extract_price(record, hotel_id, default_currency),
        star_rating=_number(record, "starRating", hotel_id, required=False),
        review=_extract_review(record.get("review"), hotel_id),
    )


def decode_catalog(payload: bytes | str, *, default_currency: str = "AED") -> CatalogPage:
    """Decode ``{"hotels": {<id>: <record>}}`` into a :class:`CatalogPage`.

    Hotels come back in the order the document lists them; the keys only
    survive as ``hotel_id``. Any malformed record fails the whole document.
    """
    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogDecodeError(DecodeErrorKind.INVALID_JSON, f"Catalog is not valid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise CatalogDecodeError(
            DecodeErrorKind.UNEXPECTED_SHAPE,
            f"Catalog root must be an object, got {type(document).__name__}",
        )
    entries = document.get("hotels")
    if not isinstance(entries, dict):
        raise CatalogDecodeError(
            DecodeErrorKind.UNEXPECTED_SHAPE,
            "Catalog must contain a 'hotels' object keyed by hotel id",
        )

    hotels: List[Hotel] = [
        build_hotel(str(hotel_id), record, default_currency=default_currency)
        for hotel_id, record in entries.items()
    ]
    return CatalogPage(hotels=hotels)


def try_decode_catalog(payload: bytes | str, *, default_currency: str = "AED") -> Optional[CatalogPage]:
    """Like :func:`decode_catalog` but logs and returns ``None`` on failure."""
    try:
        return decode_catalog(payload, default_currency=default_currency)
    except CatalogDecodeError as exc:
        logger.warning("Discarding catalog payload (%s): %s", exc.kind.value, exc)
        return None
