from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from hotel_catalog.hotels import Hotel, Review, SortBy, decode_catalog
from hotel_catalog.screen import render_snapshot
from hotel_catalog.screen.render import build_card, build_review_badge, format_distance

FIXTURE = Path(__file__).parent / "fixtures" / "hotels.json"


def _hotels() -> list[Hotel]:
    return decode_catalog(FIXTURE.read_bytes()).hotels


def test_card_binds_hotel_fields():
    card = build_card(_hotels()[0])

    assert card.hotel_id == "1001"
    assert card.title == "Palm Jumeirah Resort ★★★★★"
    assert card.price_label == "AED 200"
    assert card.address == "Crescent Road, Palm Jumeirah"
    assert card.distance_label == "15.4 km"
    assert card.review is not None
    assert card.review.score_label == "8.6"
    assert card.review.description == "Excellent"
    assert card.review.count_label == "1,024 reviews"
    assert card.thumbnail is None


def test_card_uses_requested_locale():
    card = build_card(_hotels()[0], locale="ar")
    assert card.address == "طريق الهلال، نخلة جميرا"
    assert card.review is not None and card.review.description == "ممتاز"


def test_unrated_unpriced_hotel_has_plain_title_and_no_price():
    card = build_card(_hotels()[1])
    assert card.title == "Deira Budget Inn"
    assert card.price_label is None
    assert card.distance_label == "850 m"


def test_review_with_zero_count_or_missing_is_hidden():
    assert build_review_badge(None, "en") is None
    assert build_review_badge(Review(score=9.0, count=0), "en") is None
    badge = build_review_badge(Review(score=9.0, count=1), "en")
    assert badge is not None
    assert badge.score_label == "9"
    assert badge.count_label == "1 review"
    assert badge.description is None


@pytest.mark.parametrize(("meters", "label"), [(0, "0 m"), (999.4, "999 m"), (999.5, "1.0 km"), (999.99, "1.0 km"), (1000, "1.0 km"), (2345, "2.3 km")])
def test_format_distance(meters, label):
    assert format_distance(meters) == label


def test_snapshot_is_frozen_and_reflects_later_thumbnail_only_on_rerender():
    hotels = _hotels()
    before = render_snapshot(hotels, sort_mode=SortBy.DISTANCE)
    hotels[0].attach_thumbnail(b"jpeg")
    after = render_snapshot(hotels, sort_mode=SortBy.DISTANCE)

    assert before.cards[0].thumbnail is None
    assert after.cards[0].thumbnail == b"jpeg"
    assert after.title == "Dubai, United Arab Emirates"
    with pytest.raises(dataclasses.FrozenInstanceError):
        after.title = "Elsewhere"  # type: ignore[misc]


def test_snapshot_to_dict_is_json_ready():
    snapshot = render_snapshot(_hotels(), title="Dubai", sort_mode=SortBy.LOWEST_PRICE)
    payload = snapshot.to_dict()

    assert payload["title"] == "Dubai"
    assert payload["sort_mode"] == "lowest_price"
    assert payload["cards"][0]["has_thumbnail"] is False
    assert payload["cards"][2]["review"] is None
