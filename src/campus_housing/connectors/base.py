"""Base connector interface for live campus-search providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Campus


@dataclass
class ProviderResult:
    """Result of a provider lookup. Failures land in ``errors``, never raised."""

    campuses: list[Campus]
    source: str
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CampusProvider(ABC):
    """
    Abstract interface for remote campus directories.
    Implementations: College Scorecard.
    """

    @abstractmethod
    def search(self, query: str, limit: int = 8) -> ProviderResult:
        """Look up campuses whose name matches ``query``."""
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Identifier for this provider."""
        ...
