"""Watchlist service interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import WatchlistEntry, WatchlistPage, WatchlistStats, WatchlistStatus


class IWatchlistService(ABC):
    """Interface for the remote watchlist service."""

    @abstractmethod
    async def is_member(self, movie_id: int) -> bool:
        """Check if a movie is on the user's watchlist.

        Args:
            movie_id: Catalog movie ID.

        Returns:
            True if the movie is on the watchlist.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        pass

    @abstractmethod
    async def add(
        self, movie_id: int, status: WatchlistStatus = WatchlistStatus.WANT_TO_WATCH
    ) -> WatchlistEntry:
        """Add a movie to the watchlist.

        Args:
            movie_id: Catalog movie ID.
            status: Initial watchlist status.

        Returns:
            Created watchlist entry.

        Raises:
            WatchlistServiceError: If the add fails.
        """
        pass

    @abstractmethod
    async def list_entries(
        self, page: int = 0, size: int = 20, status: Optional[WatchlistStatus] = None
    ) -> WatchlistPage:
        """List watchlist entries, optionally only those with one status.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        pass

    @abstractmethod
    async def get_entry(self, movie_id: int) -> Optional[WatchlistEntry]:
        """Get the watchlist entry for a movie, or None if it is not on the watchlist.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        pass

    @abstractmethod
    async def update_status(self, entry_id: int, status: WatchlistStatus) -> WatchlistEntry:
        """Change the status of a watchlist entry.

        Raises:
            WatchlistServiceError: If the update fails.
        """
        pass

    @abstractmethod
    async def update_details(
        self, entry_id: int, is_public: Optional[bool] = None, notes: Optional[str] = None
    ) -> WatchlistEntry:
        """Change privacy and notes of a watchlist entry.

        Raises:
            WatchlistServiceError: If the update fails.
        """
        pass

    @abstractmethod
    async def remove(self, entry_id: int) -> None:
        """Remove an entry from the watchlist.

        Raises:
            WatchlistServiceError: If the removal fails.
        """
        pass

    @abstractmethod
    async def get_stats(self) -> WatchlistStats:
        """Get watchlist counts per status.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        pass
