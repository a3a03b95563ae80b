"""Storage layer for listings and search exports."""

from .db import Storage
from .export import export_csv, export_json
from .seed import load_listings_file

__all__ = [
    "Storage",
    "export_csv",
    "export_json",
    "load_listings_file",
]
