"""Core service implementations."""

from .criteria_compiler import compile_search_request, popular_request
from .movie_service import MovieSearchService
from .pager import Pager
from .search_orchestrator import SearchOrchestrator, SearchPhase
from .session_provider import TokenSessionProvider
from .watchlist_overlay import WatchlistOverlay, WatchlistStatusCache
from .watchlist_service import WatchlistService

__all__ = [
    "compile_search_request",
    "popular_request",
    "MovieSearchService",
    "WatchlistService",
    "TokenSessionProvider",
    "WatchlistStatusCache",
    "WatchlistOverlay",
    "SearchOrchestrator",
    "SearchPhase",
    "Pager",
]
