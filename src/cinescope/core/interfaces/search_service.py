"""Movie search service interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import MovieSummary, SearchRequest, SearchResultPage


class ISearchService(ABC):
    """Interface for the remote movie search service."""

    @abstractmethod
    async def search(self, request: SearchRequest) -> SearchResultPage:
        """Run a catalog search.

        Args:
            request: Canonical search request.

        Returns:
            One page of results in server order.

        Raises:
            SearchServiceError: If the search fails. The message is user-displayable.
        """
        pass

    @abstractmethod
    async def get_movie(self, movie_id: int) -> Optional[MovieSummary]:
        """Get a single movie by catalog ID.

        Args:
            movie_id: Catalog movie ID.

        Returns:
            Movie or None if not found.

        Raises:
            SearchServiceError: If the request fails.
        """
        pass
