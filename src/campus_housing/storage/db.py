"""DuckDB listing store."""

from __future__ import annotations

import json
from pathlib import Path

import duckdb

from ..models import Listing

_COLUMNS = [
    "id", "user_id", "title", "description", "price", "room_type", "bedrooms",
    "bathrooms", "address_line1", "city", "state", "postal_code", "lat", "lng",
    "move_in", "move_out", "amenities", "campus_id", "created_at",
]


class Storage:
    """
    DuckDB store for listings.
    Each ``load_*`` call returns an independent list: a consistent snapshot for one search.
    """

    def __init__(self, db_path: Path | str = "campus_housing.duckdb") -> None:
        self.db_path = Path(db_path)
        self._conn: duckdb.DuckDBPyConnection | None = None

    def _connect(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = duckdb.connect(str(self.db_path))
            self._init_schema()
        return self._conn

    def _init_schema(self) -> None:
        conn = self._conn
        conn.execute("""
            CREATE TABLE IF NOT EXISTS listings (
                id TEXT PRIMARY KEY,
                user_id TEXT,
                title TEXT,
                description TEXT,
                price INTEGER,
                room_type TEXT,
                bedrooms INTEGER,
                bathrooms DOUBLE,
                address_line1 TEXT,
                city TEXT,
                state TEXT,
                postal_code TEXT,
                lat DOUBLE,
                lng DOUBLE,
                move_in DATE,
                move_out DATE,
                amenities JSON,
                campus_id TEXT,
                created_at TIMESTAMP
            )
        """)

    def save_listings(self, listings: list[Listing]) -> None:
        """Upsert listings."""
        conn = self._connect()
        placeholders = ", ".join("?" for _ in _COLUMNS)
        for l in listings:
            conn.execute(
                f"INSERT OR REPLACE INTO listings ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                [
                    l.id,
                    l.user_id,
                    l.title,
                    l.description,
                    l.price,
                    l.room_type.value,
                    l.bedrooms,
                    l.bathrooms,
                    l.address_line1,
                    l.city,
                    l.state,
                    l.postal_code,
                    l.lat,
                    l.lng,
                    l.move_in,
                    l.move_out,
                    json.dumps(sorted(l.amenities)),
                    l.campus_id,
                    l.created_at,
                ],
            )

    def load_listings(self) -> list[Listing]:
        """Load all listings."""
        return self._query(f"SELECT {', '.join(_COLUMNS)} FROM listings ORDER BY created_at, id")

    def load_listings_by_region(self, city: str | None = None, state: str | None = None) -> list[Listing]:
        """Listings whose city or state matches (trimmed, case-insensitive)."""
        return self._query(
            f"""
            SELECT {', '.join(_COLUMNS)} FROM listings
            WHERE lower(trim(city)) = lower(trim(?)) OR lower(trim(state)) = lower(trim(?))
            ORDER BY created_at, id
            """,
            [city, state],
        )

    def count(self) -> int:
        return self._connect().execute("SELECT count(*) FROM listings").fetchone()[0]

    def _query(self, sql: str, params: list | None = None) -> list[Listing]:
        conn = self._connect()
        rows = conn.execute(sql, params or []).fetchall()
        listings = []
        for row in rows:
            d = dict(zip(_COLUMNS, row))
            amenities = d.get("amenities")
            if isinstance(amenities, str):
                d["amenities"] = json.loads(amenities)
            listings.append(Listing.from_dict(d))
        return listings

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
