"""Data models for campuses, listings and search requests/results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


class RoomType(str, Enum):
    ENTIRE = "entire"
    PRIVATE = "private"
    SHARED = "shared"


class SortOption(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DISTANCE = "distance"
    NEWEST = "newest"


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned lat/lng box (degrees)."""

    north: float
    south: float
    east: float
    west: float


@dataclass(frozen=True)
class Campus:
    """Reference campus record (immutable)."""

    id: str
    name: str
    city: str | None = None
    state: str | None = None
    country: str | None = None
    lat: float | None = None
    lng: float | None = None
    slug: str | None = None

    @property
    def location(self) -> LatLng | None:
        if self.lat is None or self.lng is None:
            return None
        return LatLng(self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "lat": self.lat,
            "lng": self.lng,
            "slug": self.slug,
        }


def _parse_date(val: Any) -> date | None:
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    return date.fromisoformat(str(val)[:10])


def _parse_datetime(val: Any) -> datetime:
    """Naive UTC datetime. Aware values are converted to UTC before the zone is dropped."""
    if isinstance(val, datetime):
        dt = val
    elif isinstance(val, date):
        return datetime(val.year, val.month, val.day)
    elif not val:
        return datetime.utcnow()
    else:
        dt = datetime.fromisoformat(str(val).replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


@dataclass
class Listing:
    """Housing listing as stored by the listing store (read-only to search)."""

    id: str
    user_id: str
    title: str
    price: int
    room_type: RoomType
    description: str = ""
    bedrooms: int | None = None
    bathrooms: float | None = None
    address_line1: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    lat: float | None = None
    lng: float | None = None
    move_in: date | None = None
    move_out: date | None = None
    amenities: frozenset[str] = field(default_factory=frozenset)
    campus_id: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        # created_at is compared across listings, so keep it naive UTC
        self.created_at = _parse_datetime(self.created_at)

    @property
    def location(self) -> LatLng | None:
        if self.lat is None or self.lng is None:
            return None
        return LatLng(self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "room_type": self.room_type.value,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "address_line1": self.address_line1,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "lat": self.lat,
            "lng": self.lng,
            "move_in": self.move_in.isoformat() if self.move_in else None,
            "move_out": self.move_out.isoformat() if self.move_out else None,
            "amenities": sorted(self.amenities),
            "campus_id": self.campus_id,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Listing:
        """Build a listing from a plain dict (seed files, storage rows)."""
        lat = data.get("lat")
        lng = data.get("lng")
        beds = data.get("bedrooms")
        baths = data.get("bathrooms")
        return cls(
            id=str(data["id"]),
            user_id=str(data.get("user_id") or ""),
            title=str(data.get("title") or ""),
            price=int(data.get("price") or 0),
            room_type=RoomType(data.get("room_type") or RoomType.ENTIRE.value),
            description=str(data.get("description") or ""),
            bedrooms=int(beds) if beds is not None else None,
            bathrooms=float(baths) if baths is not None else None,
            address_line1=data.get("address_line1"),
            city=data.get("city"),
            state=data.get("state"),
            postal_code=data.get("postal_code"),
            lat=float(lat) if lat is not None else None,
            lng=float(lng) if lng is not None else None,
            move_in=_parse_date(data.get("move_in")),
            move_out=_parse_date(data.get("move_out")),
            amenities=frozenset(data.get("amenities") or ()),
            campus_id=data.get("campus_id"),
            created_at=_parse_datetime(data.get("created_at")),
        )


@dataclass(frozen=True)
class SearchFilters:
    """Validated search request. Build via ``query.parse_filters`` or directly.

    ``None`` means the constraint is not set.
    """

    campus: str | None = None
    start: date | None = None
    end: date | None = None
    min_price: int | float | None = None
    max_price: int | float | None = None
    room_type: RoomType | None = None
    beds: int | float | None = None
    baths: int | float | None = None
    amenities: frozenset[str] = field(default_factory=frozenset)
    sort: SortOption = SortOption.RELEVANCE


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ScoredListing:
    """A matching listing, annotated with distance from the campus if known."""

    listing: Listing
    distance_miles: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "listing": self.listing.to_dict(),
            "distance_miles": self.distance_miles,
        }


@dataclass(frozen=True)
class MapMarker:
    listing_id: str
    lat: float
    lng: float
    price: int
    title: str


@dataclass
class SearchResult:
    """Ordered search output plus map data and degradation notes."""

    items: list[ScoredListing]
    filters: SearchFilters
    campus: Campus | None = None
    markers: list[MapMarker] = field(default_factory=list)
    center: LatLng | None = None
    bounds: Bounds | None = None
    # Reasons the result is wider or staler than requested
    degraded: list[str] = field(default_factory=list)
    stale: bool = False

    @property
    def listings(self) -> list[Listing]:
        return [i.listing for i in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "campus": self.campus.to_dict() if self.campus else None,
            "count": len(self.items),
            "results": [i.to_dict() for i in self.items],
            "markers": [
                {"listing_id": m.listing_id, "lat": m.lat, "lng": m.lng, "price": m.price, "title": m.title}
                for m in self.markers
            ],
            "center": {"lat": self.center.lat, "lng": self.center.lng} if self.center else None,
            "bounds": (
                {
                    "north": self.bounds.north,
                    "south": self.bounds.south,
                    "east": self.bounds.east,
                    "west": self.bounds.west,
                }
                if self.bounds
                else None
            ),
            "degraded": self.degraded,
            "stale": self.stale,
        }
