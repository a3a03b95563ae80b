"""Display formatting for listings and search summaries."""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable

from .models import RoomType

ROOM_TYPE_LABELS = {
    RoomType.ENTIRE: "Entire place",
    RoomType.PRIVATE: "Private room",
    RoomType.SHARED: "Shared room",
}


def format_price(price: float) -> str:
    return f"${price:,.0f}"


def format_date(d: date) -> str:
    """e.g. Sep 1, 2025"""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_date_range(start: date | None = None, end: date | None = None) -> str:
    if not start and not end:
        return "Flexible dates"
    if not start:
        return f"Until {format_date(end)}"
    if not end:
        return f"From {format_date(start)}"
    return f"{format_date(start)} - {format_date(end)}"


def format_room_type(room_type: RoomType | str) -> str:
    try:
        return ROOM_TYPE_LABELS[RoomType(room_type)]
    except ValueError:
        return str(room_type)


def _num(val: float) -> str:
    return str(int(val)) if float(val).is_integer() else str(val)


def format_beds_baths(bedrooms: float | None = None, bathrooms: float | None = None) -> str:
    parts: list[str] = []
    if bedrooms:
        parts.append(f"{_num(bedrooms)} bed{'s' if bedrooms != 1 else ''}")
    if bathrooms:
        parts.append("1 bath" if bathrooms == 1 else f"{_num(bathrooms)} baths")
    return ", ".join(parts) or "Studio"


def format_amenities(amenities: Iterable[str]) -> str:
    """Oxford-comma list: "wifi", "wifi and gym", "wifi, gym, and pool"."""
    items = list(amenities)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return " and ".join(items)
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def slugify(text: str) -> str:
    s = text.lower().strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s_-]+", "-", s)
    return s.strip("-")
