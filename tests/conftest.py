"""Pytest fixtures."""

from datetime import datetime
from typing import Callable

import pytest

from campus_housing.campuses import CampusDirectory
from campus_housing.models import Listing, RoomType


@pytest.fixture
def listing_factory() -> Callable[..., Listing]:
    """Build listings with sensible Cambridge, MA defaults."""

    def make(id: str, price: int = 1500, room_type: RoomType = RoomType.ENTIRE, **kwargs) -> Listing:
        kwargs.setdefault("user_id", "host-1")
        kwargs.setdefault("title", f"Listing {id}")
        kwargs.setdefault("city", "Cambridge")
        kwargs.setdefault("state", "MA")
        return Listing(id=id, price=price, room_type=room_type, **kwargs)

    return make


@pytest.fixture
def directory() -> CampusDirectory:
    return CampusDirectory()


@pytest.fixture
def mock_listings(listing_factory) -> list[Listing]:
    """Mixed listings around Boston and the Bay Area."""
    return [
        listing_factory(
            "harvard-studio",
            price=2400,
            bedrooms=1,
            bathrooms=1,
            lat=42.3761,
            lng=-71.1152,
            amenities=frozenset({"wifi", "laundry", "furnished"}),
            created_at=datetime(2025, 6, 2, 10, 15),
        ),
        listing_factory(
            "mit-shared",
            price=1200,
            room_type=RoomType.SHARED,
            bedrooms=4,
            bathrooms=2,
            lat=42.3622,
            lng=-71.0968,
            amenities=frozenset({"wifi", "kitchen", "parking"}),
            created_at=datetime(2025, 6, 5, 8, 0),
        ),
        listing_factory(
            "bu-private",
            price=1800,
            room_type=RoomType.PRIVATE,
            city="Boston",
            bedrooms=1,
            bathrooms=1,
            lat=42.3489,
            lng=-71.1002,
            amenities=frozenset({"laundry"}),
            created_at=datetime(2025, 5, 28, 16, 30),
        ),
        listing_factory(
            "stanford-apt",
            price=3200,
            city="Stanford",
            state="CA",
            bedrooms=2,
            bathrooms=2,
            lat=37.4251,
            lng=-122.1660,
            amenities=frozenset({"gym", "parking"}),
            created_at=datetime(2025, 6, 10, 12, 0),
        ),
    ]
