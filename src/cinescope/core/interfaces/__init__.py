"""Core interfaces for dependency injection."""

from .search_service import ISearchService
from .session_provider import ISessionProvider
from .watchlist_service import IWatchlistService

__all__ = [
    "ISearchService",
    "IWatchlistService",
    "ISessionProvider",
]
