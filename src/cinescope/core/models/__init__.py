"""Core data models."""

from .filters import FilterState, SearchRequest
from .movie import MovieSummary, SearchResultPage
from .watchlist import (
    AddOutcome,
    AddResult,
    AddState,
    MembershipState,
    WatchlistEntry,
    WatchlistPage,
    WatchlistStats,
    WatchlistStatus,
)

__all__ = [
    "FilterState",
    "SearchRequest",
    "MovieSummary",
    "SearchResultPage",
    "WatchlistStatus",
    "MembershipState",
    "AddState",
    "AddOutcome",
    "AddResult",
    "WatchlistEntry",
    "WatchlistPage",
    "WatchlistStats",
]
