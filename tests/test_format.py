"""Tests for display formatting."""

from datetime import date

from campus_housing.format import (
    format_amenities,
    format_beds_baths,
    format_date_range,
    format_price,
    format_room_type,
    slugify,
)
from campus_housing.models import RoomType


def test_format_price() -> None:
    assert format_price(2400) == "$2,400"
    assert format_price(0) == "$0"


def test_format_date_range() -> None:
    start, end = date(2025, 9, 1), date(2026, 5, 31)
    assert format_date_range() == "Flexible dates"
    assert format_date_range(None, end) == "Until May 31, 2026"
    assert format_date_range(start) == "From Sep 1, 2025"
    assert format_date_range(start, end) == "Sep 1, 2025 - May 31, 2026"


def test_format_room_type() -> None:
    assert format_room_type(RoomType.ENTIRE) == "Entire place"
    assert format_room_type("shared") == "Shared room"
    assert format_room_type("loft") == "loft"


def test_format_beds_baths() -> None:
    assert format_beds_baths(2, 1) == "2 beds, 1 bath"
    assert format_beds_baths(1, 1.5) == "1 bed, 1.5 baths"
    assert format_beds_baths(None, None) == "Studio"
    assert format_beds_baths(0, 2) == "2 baths"


def test_format_amenities() -> None:
    assert format_amenities([]) == ""
    assert format_amenities(["wifi"]) == "wifi"
    assert format_amenities(["wifi", "gym"]) == "wifi and gym"
    assert format_amenities(["wifi", "gym", "pool"]) == "wifi, gym, and pool"


def test_slugify() -> None:
    assert slugify("University of California, Berkeley") == "university-of-california-berkeley"
    assert slugify("  Texas A&M -- College Station ") == "texas-am-college-station"
