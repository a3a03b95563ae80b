"""Static campus directory with substring lookup."""

from __future__ import annotations

from typing import Iterable

from .models import Campus


def _campus(id: str, name: str, city: str, state: str, lat: float, lng: float) -> Campus:
    return Campus(id=id, name=name, city=city, state=state, country="USA", lat=lat, lng=lng, slug=id)


# Fallback dataset used when no live campus provider is configured or reachable
CAMPUSES: tuple[Campus, ...] = (
    _campus("harvard-university", "Harvard University", "Cambridge", "MA", 42.3744, -71.1169),
    _campus("mit", "Massachusetts Institute of Technology", "Cambridge", "MA", 42.3601, -71.0942),
    _campus("boston-university", "Boston University", "Boston", "MA", 42.3505, -71.1054),
    _campus("northeastern-university", "Northeastern University", "Boston", "MA", 42.3398, -71.0892),
    _campus("stanford-university", "Stanford University", "Stanford", "CA", 37.4275, -122.1697),
    _campus("uc-berkeley", "University of California, Berkeley", "Berkeley", "CA", 37.8719, -122.2585),
    _campus("nyu", "New York University", "New York", "NY", 40.7295, -73.9965),
    _campus("columbia-university", "Columbia University", "New York", "NY", 40.8075, -73.9626),
    _campus("university-of-chicago", "University of Chicago", "Chicago", "IL", 41.7886, -87.5987),
    _campus("northwestern-university", "Northwestern University", "Evanston", "IL", 42.0564, -87.6753),
    _campus("upenn", "University of Pennsylvania", "Philadelphia", "PA", 39.9522, -75.1932),
    _campus("yale-university", "Yale University", "New Haven", "CT", 41.3163, -72.9223),
    _campus("princeton-university", "Princeton University", "Princeton", "NJ", 40.3431, -74.6551),
    _campus("ucla", "University of California, Los Angeles", "Los Angeles", "CA", 34.0689, -118.4452),
    _campus("usc", "University of Southern California", "Los Angeles", "CA", 34.0224, -118.2851),
    _campus("university-of-washington", "University of Washington", "Seattle", "WA", 47.6553, -122.3035),
    _campus("ut-austin", "University of Texas at Austin", "Austin", "TX", 30.2849, -97.7341),
    _campus("georgia-tech", "Georgia Institute of Technology", "Atlanta", "GA", 33.7756, -84.3963),
    _campus("carnegie-mellon", "Carnegie Mellon University", "Pittsburgh", "PA", 40.4435, -79.9436),
    _campus("duke-university", "Duke University", "Durham", "NC", 36.0014, -78.9382),
    _campus("university-of-michigan", "University of Michigan", "Ann Arbor", "MI", 42.2780, -83.7382),
)


def _norm(val: str | None) -> str:
    return (val or "").strip().lower()


class CampusDirectory:
    """
    Read-only campus lookup table.
    Safe to share between concurrent searches: nothing here mutates after init.
    """

    def __init__(self, campuses: Iterable[Campus] | None = None) -> None:
        self._campuses: tuple[Campus, ...] = tuple(campuses) if campuses is not None else CAMPUSES
        self._by_slug = {c.slug: c for c in self._campuses if c.slug}

    def __len__(self) -> int:
        return len(self._campuses)

    def __iter__(self):
        return iter(self._campuses)

    def find_by_name(self, query: str) -> Campus | None:
        """First campus whose name, slug or "city state" contains the query."""
        q = _norm(query)
        for c in self._campuses:
            composite = " ".join(p for p in (_norm(c.city), _norm(c.state)) if p)
            if q in _norm(c.name) or q in _norm(c.slug) or q in composite:
                return c
        return None

    def find_by_slug(self, slug: str) -> Campus | None:
        return self._by_slug.get(slug)

    def search(self, query: str, limit: int = 10) -> list[Campus]:
        """
        Campuses whose name/city/state/slug contains the query.
        Ranked: exact name match, then name prefix, then alphabetical by name.
        """
        q = _norm(query)
        if not q:
            return list(self._campuses[:limit])

        matches = [
            c
            for c in self._campuses
            if q in _norm(c.name) or q in _norm(c.city) or q in _norm(c.state) or q in _norm(c.slug)
        ]
        matches.sort(
            key=lambda c: (
                _norm(c.name) != q,
                not _norm(c.name).startswith(q),
                _norm(c.name),
            )
        )
        return matches[:limit]
