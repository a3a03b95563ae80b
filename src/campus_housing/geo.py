"""Geo math: haversine distance, display formatting and bounding boxes."""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from .models import Bounds, LatLng

EARTH_RADIUS_MILES = 3958.8
MILES_PER_DEGREE_LAT = 69


def distance(a: LatLng, b: LatLng) -> float:
    """Great-circle distance between two points, in miles (haversine)."""
    d_lat = radians(b.lat - a.lat)
    d_lng = radians(b.lng - a.lng)
    h = sin(d_lat / 2) ** 2 + cos(radians(a.lat)) * cos(radians(b.lat)) * sin(d_lng / 2) ** 2
    # float error can push h just past 1 for antipodal points
    h = min(h, 1.0)
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_MILES * c


def format_distance(miles: float) -> str:
    if miles < 0.1:
        return "< 0.1 mi"
    if miles < 1:
        return f"{miles:.1f} mi"
    # round-half-up, not banker's rounding
    return f"{int(miles + 0.5)} mi"


def bounds_around(center: LatLng, radius_miles: float) -> Bounds:
    """
    Box of roughly ``radius_miles`` around ``center``.
    Flat-earth approximation: fine for campus-scale radii, degrades near the poles.
    """
    lat_change = radius_miles / MILES_PER_DEGREE_LAT
    lng_change = radius_miles / (MILES_PER_DEGREE_LAT * cos(radians(center.lat)))
    return Bounds(
        north=center.lat + lat_change,
        south=center.lat - lat_change,
        east=center.lng + lng_change,
        west=center.lng - lng_change,
    )


def in_bounds(point: LatLng, bounds: Bounds) -> bool:
    return (
        bounds.south <= point.lat <= bounds.north
        and bounds.west <= point.lng <= bounds.east
    )
