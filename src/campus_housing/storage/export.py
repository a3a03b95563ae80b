"""Export search results to CSV and JSON."""

from __future__ import annotations

import csv
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..geo import format_distance
from ..models import SearchResult
from ..query import serialize_filters


def _serialize(obj: Any) -> Any:
    """JSON serializer for date/datetime objects."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def export_csv(result: SearchResult, path: Path | str) -> None:
    """Export ranked results to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "listing_id",
        "title",
        "price",
        "room_type",
        "bedrooms",
        "bathrooms",
        "city",
        "state",
        "distance_miles",
        "distance",
        "amenities",
    ]

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for i, item in enumerate(result.items, 1):
            l = item.listing
            writer.writerow({
                "rank": i,
                "listing_id": l.id,
                "title": l.title,
                "price": l.price,
                "room_type": l.room_type.value,
                "bedrooms": l.bedrooms,
                "bathrooms": l.bathrooms,
                "city": l.city,
                "state": l.state,
                "distance_miles": (
                    round(item.distance_miles, 3) if item.distance_miles is not None else ""
                ),
                "distance": format_distance(item.distance_miles) if item.distance_miles is not None else "",
                "amenities": ",".join(sorted(l.amenities)),
            })


def export_json(result: SearchResult, path: Path | str) -> None:
    """Export the full result (items, markers, map bounds) to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "run_at": datetime.utcnow().isoformat(),
        "query": serialize_filters(result.filters),
        **result.to_dict(),
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=_serialize)
