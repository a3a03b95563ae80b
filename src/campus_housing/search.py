"""Search engine: applies SearchFilters to a listing collection."""

from __future__ import annotations

from typing import Iterable, Protocol

from loguru import logger

from .campuses import CampusDirectory
from .geo import bounds_around, distance
from .models import (
    Campus,
    Listing,
    MapMarker,
    ScoredListing,
    SearchFilters,
    SearchResult,
    SortOption,
)
from .proximity import ProximityFilter, SameRegion
from .retry import retry_with_backoff


class ListingSource(Protocol):
    """Anything that can hand over a snapshot of listings."""

    def load_listings(self) -> list[Listing]:
        ...


def _dates_overlap(listing: Listing, filters: SearchFilters) -> bool:
    # Unset ends are open; availability is [move_in, move_out]
    if filters.start and listing.move_out and listing.move_out < filters.start:
        return False
    if filters.end and listing.move_in and listing.move_in > filters.end:
        return False
    return True


class SearchEngine:
    """
    Filters and orders listings for a search request.

    Collaborators are injected by the caller; the engine keeps no per-request
    state, so one instance can serve concurrent searches.
    """

    def __init__(
        self,
        store: ListingSource | None = None,
        directory: CampusDirectory | None = None,
        proximity: ProximityFilter | None = None,
        enforce_date_overlap: bool = False,
        map_radius_miles: float = 5.0,
        store_retries: int = 2,
        store_backoff_seconds: float = 0.5,
    ) -> None:
        self.store = store
        self.directory = directory or CampusDirectory()
        self.proximity = proximity or SameRegion()
        self.enforce_date_overlap = enforce_date_overlap
        self.map_radius_miles = map_radius_miles
        self.store_retries = store_retries
        self.store_backoff_seconds = store_backoff_seconds

    def resolve_campus(self, text: str | None) -> Campus | None:
        # blank text would match the first campus in the directory
        if not text or not text.strip():
            return None
        return self.directory.find_by_name(text)

    def matches(
        self,
        listing: Listing,
        filters: SearchFilters,
        campus: Campus | None = None,
    ) -> bool:
        """True iff the listing satisfies every set constraint."""
        if campus is not None and not self.proximity.matches(listing, campus):
            return False
        if filters.min_price is not None and listing.price < filters.min_price:
            return False
        if filters.max_price is not None and listing.price > filters.max_price:
            return False
        if filters.room_type is not None and listing.room_type != filters.room_type:
            return False
        if filters.beds is not None and (listing.bedrooms or 0) < filters.beds:
            return False
        if filters.baths is not None and (listing.bathrooms or 0) < filters.baths:
            return False
        if filters.amenities and not (filters.amenities & listing.amenities):
            return False
        if self.enforce_date_overlap and not _dates_overlap(listing, filters):
            return False
        return True

    def apply(
        self,
        listings: Iterable[Listing],
        filters: SearchFilters,
        exclude_user_id: str | None = None,
    ) -> SearchResult:
        """Filter and order an in-memory snapshot. No I/O."""
        degraded: list[str] = []
        campus = self.resolve_campus(filters.campus)
        if filters.campus and filters.campus.strip() and campus is None:
            logger.info("Campus {!r} not found; searching without location constraint", filters.campus)
            degraded.append(f"campus not resolved: {filters.campus}")

        center = campus.location if campus else None
        items: list[ScoredListing] = []
        for l in listings:
            if exclude_user_id and l.user_id == exclude_user_id:
                continue
            if not self.matches(l, filters, campus):
                continue
            point = l.location
            dist = distance(center, point) if center and point else None
            items.append(ScoredListing(listing=l, distance_miles=dist))

        items = self._sort(items, filters.sort)
        markers = [
            MapMarker(
                listing_id=i.listing.id,
                lat=i.listing.lat,
                lng=i.listing.lng,
                price=i.listing.price,
                title=i.listing.title,
            )
            for i in items
            if i.listing.location is not None
        ]
        logger.debug(
            "Search matched {} listings (campus={}, sort={})",
            len(items),
            campus.slug if campus else None,
            filters.sort.value,
        )
        return SearchResult(
            items=items,
            filters=filters,
            campus=campus,
            markers=markers,
            center=center,
            bounds=bounds_around(center, self.map_radius_miles) if center else None,
            degraded=degraded,
        )

    def search(self, filters: SearchFilters, exclude_user_id: str | None = None) -> SearchResult:
        """Load one snapshot from the store, then apply the filters."""
        if self.store is None:
            raise RuntimeError("SearchEngine.search needs a listing store; use apply() for in-memory listings")

        campus = self.resolve_campus(filters.campus)
        try:
            listings = retry_with_backoff(
                lambda: self._load_snapshot(campus),
                retries=self.store_retries,
                base_delay=self.store_backoff_seconds,
            )
        except Exception as e:
            logger.warning("Listing store unavailable: {!s}", e)
            return SearchResult(
                items=[],
                filters=filters,
                campus=campus,
                center=campus.location if campus else None,
                degraded=[f"listing store unavailable: {e!s}"],
                stale=True,
            )
        return self.apply(listings, filters, exclude_user_id=exclude_user_id)

    def _load_snapshot(self, campus: Campus | None) -> list[Listing]:
        # Region pre-filter is only safe when it is at least as wide as the proximity check
        by_region = getattr(self.store, "load_listings_by_region", None)
        if campus is not None and isinstance(self.proximity, SameRegion) and callable(by_region):
            return list(by_region(city=campus.city, state=campus.state))
        return list(self.store.load_listings())

    def _sort(self, items: list[ScoredListing], sort: SortOption) -> list[ScoredListing]:
        # sorted() is stable, including with reverse=True
        if sort == SortOption.PRICE_ASC:
            return sorted(items, key=lambda i: i.listing.price)
        if sort == SortOption.PRICE_DESC:
            return sorted(items, key=lambda i: i.listing.price, reverse=True)
        if sort == SortOption.NEWEST:
            return sorted(items, key=lambda i: i.listing.created_at, reverse=True)
        if sort == SortOption.DISTANCE:
            return sorted(
                items,
                key=lambda i: (i.distance_miles is None, i.distance_miles or 0.0),
            )
        return items
