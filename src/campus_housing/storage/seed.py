"""Load listing records from a YAML or JSON file."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from ..models import Listing


def load_listings_file(path: Path | str) -> list[Listing]:
    """Read a list of listing dicts. ``.json`` is parsed as JSON, anything else as YAML."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Listings file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = json.load(f) if path.suffix == ".json" else yaml.safe_load(f)
    if isinstance(data, dict):
        data = data.get("listings", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of listings")
    return [Listing.from_dict(item) for item in data]
