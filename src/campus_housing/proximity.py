"""Campus proximity strategies used by the search engine."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .geo import bounds_around, distance, in_bounds
from .models import Campus, Listing


def _same(a: str | None, b: str | None) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


class ProximityFilter(ABC):
    """Decides whether a listing is "near" a resolved campus."""

    @abstractmethod
    def matches(self, listing: Listing, campus: Campus) -> bool:
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        ...


class SameRegion(ProximityFilter):
    """Listing shares the campus city or state (case-insensitive)."""

    @property
    def name(self) -> str:
        return "same_region"

    def matches(self, listing: Listing, campus: Campus) -> bool:
        return _same(listing.city, campus.city) or _same(listing.state, campus.state)


class WithinRadius(ProximityFilter):
    """
    Listing lies within ``radius_miles`` (haversine) of the campus.
    Listings without coordinates never match. Campuses without coordinates
    fall back to same-region matching.
    """

    def __init__(self, radius_miles: float = 5.0) -> None:
        if radius_miles <= 0:
            raise ValueError(f"radius_miles must be positive, got {radius_miles}")
        self.radius_miles = radius_miles
        self._fallback = SameRegion()

    @property
    def name(self) -> str:
        return "within_radius"

    def matches(self, listing: Listing, campus: Campus) -> bool:
        center = campus.location
        if center is None:
            return self._fallback.matches(listing, campus)
        point = listing.location
        if point is None:
            return False
        # Cheap box reject before the trig
        if not in_bounds(point, bounds_around(center, self.radius_miles)):
            return False
        return distance(center, point) <= self.radius_miles


def make_proximity_filter(kind: str, radius_miles: float = 5.0) -> ProximityFilter:
    """Build a strategy from its config name."""
    if kind == "within_radius":
        return WithinRadius(radius_miles)
    if kind == "same_region":
        return SameRegion()
    raise ValueError(f"Unknown proximity strategy: {kind!r}")
