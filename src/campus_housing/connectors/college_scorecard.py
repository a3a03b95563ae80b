"""College Scorecard schools API connector.

Uses api.data.gov/ed/collegescorecard/v1 (U.S. Department of Education).
Endpoint: /schools.json
"""

from __future__ import annotations

import os
from typing import Any

import httpx

from ..format import slugify
from ..models import Campus
from ..retry import retry_with_backoff
from .base import CampusProvider, ProviderResult

FIELDS = "id,school.name,school.city,school.state,location.lat,location.lon"

# Predominantly bachelor's (3) and associate's (2) degree granting schools
DEGREES_PREDOMINANT = "2,3"


class CollegeScorecardProvider(CampusProvider):
    """
    Connector for the College Scorecard API.
    https://collegescorecard.ed.gov/data/api-documentation/

    Requests are bounded by ``timeout_seconds`` and retried ``retries`` times.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = "https://api.data.gov/ed/collegescorecard/v1",
        timeout_seconds: float = 5.0,
        retries: int = 2,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or os.environ.get("SCORECARD_API_KEY", "")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retries = retries
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    @property
    def source_name(self) -> str:
        return "college_scorecard"

    def search(self, query: str, limit: int = 8) -> ProviderResult:
        """Search schools by name."""
        if not self.api_key:
            return ProviderResult(
                campuses=[],
                source=self.source_name,
                errors=["SCORECARD_API_KEY not set. Set env var or pass api_key."],
            )
        if not query.strip():
            return ProviderResult(campuses=[], source=self.source_name)

        try:
            data = retry_with_backoff(
                lambda: self._request(query.strip(), limit),
                retries=self.retries,
                base_delay=self.backoff_seconds,
                retry_exceptions=(httpx.HTTPError,),
            )
        except (httpx.HTTPError, ValueError) as e:
            # ValueError: body was not JSON
            return ProviderResult(
                campuses=[],
                source=self.source_name,
                errors=[f"{query}: {e!s}"],
            )

        return ProviderResult(
            campuses=self._normalize_response(data)[:limit],
            source=self.source_name,
        )

    def _request(self, query: str, limit: int) -> Any:
        params = {
            "school.name": query,
            "school.degrees_awarded.predominant": DEGREES_PREDOMINANT,
            "fields": FIELDS,
            "api_key": self.api_key,
            "_per_page": str(limit),
        }
        with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
            resp = client.get(f"{self.base_url}/schools.json", params=params)
        # 4xx/5xx become HTTPStatusError so they are retried like transport errors
        resp.raise_for_status()
        return resp.json()

    def _normalize_response(self, data: Any) -> list[Campus]:
        """Normalize API response to Campus records. Items without a name are skipped."""
        items = data.get("results") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        campuses: list[Campus] = []
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            name = item.get("school.name")
            if not name:
                continue
            campuses.append(
                Campus(
                    id=f"api-{item.get('id', i)}",
                    name=str(name),
                    city=item.get("school.city"),
                    state=item.get("school.state"),
                    country="USA",
                    lat=self._to_float(item.get("location.lat")),
                    lng=self._to_float(item.get("location.lon")),
                    slug=slugify(str(name)),
                )
            )
        return campuses

    def _to_float(self, val: Any) -> float | None:
        if val is None:
            return None
        try:
            return float(val)
        except (TypeError, ValueError):
            return None
