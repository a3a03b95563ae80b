"""Live campus-search connectors."""

from .base import CampusProvider, ProviderResult
from .college_scorecard import CollegeScorecardProvider

__all__ = [
    "CampusProvider",
    "ProviderResult",
    "CollegeScorecardProvider",
]
