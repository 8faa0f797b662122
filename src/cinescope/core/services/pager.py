"""Page navigation over the current search results."""

from ...infrastructure.logging import LoggerMixin
from ..models import FilterState
from .search_orchestrator import SearchOrchestrator


class Pager(LoggerMixin):
    """Moves between result pages, clamped to the result set's bounds.

    Every move re-issues the search with the current filter selections.
    """

    def __init__(self, orchestrator: SearchOrchestrator) -> None:
        """Initialize pager.

        Args:
            orchestrator: Search orchestrator owning the filters and results.
        """
        self._orchestrator = orchestrator

    @property
    def filters(self) -> FilterState:
        return self._orchestrator.filters

    @property
    def current_page(self) -> int:
        return self.filters.page

    @property
    def total_pages(self) -> int:
        return self._orchestrator.total_pages

    @property
    def can_go_prev(self) -> bool:
        return self.current_page > 0

    @property
    def can_go_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    async def prev_page(self) -> bool:
        """Go to the previous page.

        Returns:
            True if a search was issued, False if already on the first page.
        """
        if not self.can_go_prev:
            return False
        self.filters.page = self.current_page - 1
        await self._orchestrator.refresh()
        return True

    async def next_page(self) -> bool:
        """Go to the next page.

        Returns:
            True if a search was issued, False if already on the last page.
        """
        if not self.can_go_next:
            return False
        self.filters.page = self.current_page + 1
        await self._orchestrator.refresh()
        return True

    async def change_page_size(self, size: int) -> None:
        """Change the page size and go back to the first page.

        Args:
            size: New page size.
        """
        self.logger.debug(f"Changing page size from {self.filters.size} to {size}")
        self.filters.size = size
        self.filters.page = 0
        await self._orchestrator.refresh()
