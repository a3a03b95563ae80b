"""Search filters <-> flat query string, plus validation."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any
from urllib.parse import parse_qs, quote_plus, urlencode

from .models import FieldError, RoomType, SearchFilters, SortOption

RECOGNIZED_KEYS = ("campus", "start", "end", "min", "max", "room", "beds", "baths", "amenities", "sort")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_number(raw: str | None) -> int | float | None:
    """Finite, non-negative number or None. Integral values come back as int."""
    if raw is None:
        return None
    s = raw.strip()
    if not s or "_" in s:
        return None
    try:
        val = float(s)
    except ValueError:
        return None
    if not math.isfinite(val) or val < 0:
        return None
    return int(val) if val.is_integer() else val


def _parse_date(raw: str | None) -> date | None:
    if not raw or not _ISO_DATE.match(raw.strip()):
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        return None


def _parse_enum(enum_cls: Any, raw: str | None) -> Any:
    if not raw:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def _format_number(val: int | float) -> str:
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


def parse_filters(query_string: str = "") -> SearchFilters:
    """
    Parse a query string into SearchFilters.
    Unknown keys are ignored; malformed values are dropped, never raised.
    """
    qs = query_string[1:] if query_string.startswith("?") else query_string
    params = parse_qs(qs, keep_blank_values=False)

    def first(key: str) -> str | None:
        values = params.get(key)
        return values[0] if values else None

    amenities_raw = first("amenities")
    amenities = frozenset(a for a in amenities_raw.split(",") if a) if amenities_raw else frozenset()

    return SearchFilters(
        campus=first("campus") or None,
        start=_parse_date(first("start")),
        end=_parse_date(first("end")),
        min_price=_parse_number(first("min")),
        max_price=_parse_number(first("max")),
        room_type=_parse_enum(RoomType, first("room")),
        beds=_parse_number(first("beds")),
        baths=_parse_number(first("baths")),
        amenities=amenities,
        sort=_parse_enum(SortOption, first("sort")) or SortOption.RELEVANCE,
    )


def to_params(filters: SearchFilters) -> dict[str, str]:
    """Flat key/value pairs for the set fields, in canonical key order."""
    params: dict[str, str] = {}
    if filters.campus:
        params["campus"] = filters.campus
    if filters.start:
        params["start"] = filters.start.isoformat()
    if filters.end:
        params["end"] = filters.end.isoformat()
    if filters.min_price is not None:
        params["min"] = _format_number(filters.min_price)
    if filters.max_price is not None:
        params["max"] = _format_number(filters.max_price)
    if filters.room_type:
        params["room"] = filters.room_type.value
    if filters.beds is not None:
        params["beds"] = _format_number(filters.beds)
    if filters.baths is not None:
        params["baths"] = _format_number(filters.baths)
    if filters.amenities:
        params["amenities"] = ",".join(sorted(filters.amenities))
    if filters.sort != SortOption.RELEVANCE:
        params["sort"] = filters.sort.value
    return params


def serialize_filters(filters: SearchFilters) -> str:
    return urlencode(to_params(filters), quote_via=quote_plus)


def build_search_url(filters: SearchFilters, base_path: str = "/search") -> str:
    """Shareable URL for a search; bare ``base_path`` when nothing is set."""
    qs = serialize_filters(filters)
    return f"{base_path}?{qs}" if qs else base_path


def validate_filters(filters: SearchFilters) -> list[FieldError]:
    """Cross-field checks only. Required fields are up to the caller."""
    errors: list[FieldError] = []
    if (
        filters.min_price is not None
        and filters.max_price is not None
        and filters.min_price > filters.max_price
    ):
        errors.append(FieldError("max", "Maximum price must be greater than or equal to minimum price"))
    if filters.start and filters.end and filters.end <= filters.start:
        errors.append(FieldError("end", "End date must be after start date"))
    return errors
