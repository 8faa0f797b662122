"""Search orchestrator: runs searches and owns the result lifecycle."""

from enum import Enum
from typing import List, Optional, Tuple

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import SearchServiceError
from ..interfaces import ISearchService
from ..models import FilterState, MovieSummary, SearchRequest, SearchResultPage
from .criteria_compiler import compile_search_request, popular_request
from .watchlist_overlay import WatchlistOverlay


class SearchPhase(str, Enum):
    """Lifecycle phase of the current search."""

    IDLE = "idle"
    SEARCHING = "searching"
    SUCCESS = "success"
    FAILED = "failed"


class SearchOrchestrator(LoggerMixin):
    """Issues searches and keeps the result, loading and error state.

    Only the most recently issued search is authoritative. Each search is
    tagged with a sequence number, and a response whose tag is no longer the
    latest is dropped, whether it succeeded or failed.
    """

    def __init__(
        self,
        config: Config,
        search_service: ISearchService,
        watchlist_overlay: WatchlistOverlay,
    ) -> None:
        """Initialize search orchestrator.

        Args:
            config: Application configuration.
            search_service: Remote search service.
            watchlist_overlay: Watchlist status overlay to enrich result pages.
        """
        self._config = config
        self._search_service = search_service
        self._overlay = watchlist_overlay
        self._filters = FilterState(size=config.search.default_page_size)

        self._phase = SearchPhase.IDLE
        self._sequence = 0
        self._result: Optional[SearchResultPage] = None
        self._movies: List[MovieSummary] = []
        self._total_pages = 0
        self._total_results = 0
        self._error_message = ""

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def overlay(self) -> WatchlistOverlay:
        return self._overlay

    @property
    def phase(self) -> SearchPhase:
        return self._phase

    @property
    def is_loading(self) -> bool:
        return self._phase == SearchPhase.SEARCHING

    @property
    def result(self) -> Optional[SearchResultPage]:
        return self._result

    @property
    def movies(self) -> List[MovieSummary]:
        return list(self._movies)

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def total_results(self) -> int:
        return self._total_results

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    async def activate(self) -> bool:
        """Load the first page of popular movies, ignoring the filter selections.

        Returns:
            True if the response was applied.
        """
        return await self.execute(popular_request(self._filters.size))

    async def search(self) -> bool:
        """Search with new criteria, starting from the first page.

        Returns:
            True if the response was applied.
        """
        self._filters.page = 0
        return await self.refresh()

    async def refresh(self) -> bool:
        """Search with the current filter selections as they are.

        Returns:
            True if the response was applied.
        """
        return await self.execute(compile_search_request(self._filters))

    async def clear_filters(self) -> bool:
        """Reset every filter to its neutral default and reload popular movies.

        Returns:
            True if the response was applied.
        """
        self._filters.reset(size=self._config.search.default_page_size)
        return await self.activate()

    async def execute(self, request: SearchRequest) -> bool:
        """Issue a search request and apply its response if still current.

        Prior results stay visible while the request is pending.

        Args:
            request: Search request to send.

        Returns:
            True if the response was applied, False if it failed or was superseded.
        """
        self._sequence += 1
        sequence = self._sequence
        self._phase = SearchPhase.SEARCHING
        self._error_message = ""

        self.logger.debug(f"Issuing search #{sequence}: {request.to_json()}")

        try:
            page = await self._search_service.search(request)
        except SearchServiceError as e:
            if self._is_superseded(sequence):
                return False
            self._apply_failure(str(e))
            return False

        if self._is_superseded(sequence):
            return False
        self._apply_success(page)
        return True

    def results_with_status(self) -> List[Tuple[MovieSummary, bool]]:
        """Get the visible movies paired with their watchlist membership."""
        return [(movie, self._overlay.is_in_watchlist(movie.id)) for movie in self._movies]

    def _is_superseded(self, sequence: int) -> bool:
        if sequence == self._sequence:
            return False
        self.logger.debug(
            f"Discarding response to search #{sequence}; search #{self._sequence} is current"
        )
        return True

    def _apply_success(self, page: SearchResultPage) -> None:
        self._result = page
        self._movies = list(page.movies)
        self._total_pages = page.total_pages
        self._total_results = page.total_results
        self._error_message = ""
        self._phase = SearchPhase.SUCCESS

        self.logger.info(
            f"Search completed: {page.total_results} results "
            f"(page {page.current_page + 1}/{page.total_pages}) in {page.search_time_ms}ms"
        )

        self._overlay.refresh(page.movie_ids)

    def _apply_failure(self, message: str) -> None:
        # Pagination stays as it was so the user can retry.
        self._result = None
        self._movies = []
        self._error_message = message
        self._phase = SearchPhase.FAILED

        self.logger.error(f"Search failed: {message}")
