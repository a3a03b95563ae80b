"""Campus suggestions: static directory first, live provider as a supplement."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from .campuses import CampusDirectory
from .connectors import CampusProvider
from .models import Campus


@dataclass
class Suggestions:
    campuses: list[Campus]
    source: str
    errors: list[str] = field(default_factory=list)


class CampusSuggester:
    """
    Autocomplete for campus names.

    The provider is consulted only when the directory has no match, or first
    when ``prefer_live`` is set. Provider failures fall back to the directory
    and are reported in ``Suggestions.errors``.
    """

    def __init__(
        self,
        directory: CampusDirectory | None = None,
        provider: CampusProvider | None = None,
        limit: int = 8,
        prefer_live: bool = False,
    ) -> None:
        self.directory = directory or CampusDirectory()
        self.provider = provider
        self.limit = limit
        self.prefer_live = prefer_live

    def suggest(self, query: str) -> Suggestions:
        if not query.strip():
            return Suggestions(campuses=[], source="directory")

        local = self.directory.search(query, self.limit)
        if self.provider is None or (local and not self.prefer_live):
            return Suggestions(campuses=local, source="directory")

        result = self.provider.search(query, self.limit)
        if result.errors:
            for e in result.errors:
                logger.warning("Campus provider {} failed: {}", result.source, e)
            return Suggestions(campuses=local, source="directory", errors=list(result.errors))
        if not result.campuses and local:
            return Suggestions(campuses=local, source="directory")
        return Suggestions(campuses=result.campuses[: self.limit], source=result.source)
