"""Movie search service implementation."""

import asyncio
from typing import Any, Dict, Optional

import aiohttp
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import SearchServiceError
from ..interfaces import ISearchService
from ..models import MovieSummary, SearchRequest, SearchResultPage


class MovieSearchService(ISearchService, LoggerMixin):
    """Catalog search over the movie API (``/movies``)."""

    def __init__(self, config: Config) -> None:
        """Initialize movie search service.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._api_config = config.api
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def base_url(self) -> str:
        return f"{self._api_config.base_url}/movies"

    async def search(self, request: SearchRequest) -> SearchResultPage:
        """Run a catalog search.

        Args:
            request: Canonical search request.

        Returns:
            One page of results in server order.

        Raises:
            SearchServiceError: If the search fails.
        """
        url = f"{self.base_url}/search"
        self.logger.debug(f"Searching movies with request: {request.to_json()}")

        try:
            data = await self._post_json(url, request.to_payload())
        except aiohttp.ClientResponseError as e:
            self.logger.error(f"Search returned HTTP {e.status}: {e.message}")
            raise SearchServiceError(f"Server error: {e.status} - {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Search request failed: {e!r}")
            raise SearchServiceError(f"Network error: {self._describe(e)}") from e

        try:
            page = SearchResultPage.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"Unexpected search response: {e}")
            raise SearchServiceError("Server error: unexpected search response") from e

        self.logger.info(
            f"Search successful: {page.total_results} results found in {page.search_time_ms}ms"
        )
        return page

    async def get_movie(self, movie_id: int) -> Optional[MovieSummary]:
        """Get a single movie by catalog ID.

        Args:
            movie_id: Catalog movie ID.

        Returns:
            Movie or None if not found.

        Raises:
            SearchServiceError: If the request fails.
        """
        url = f"{self.base_url}/{movie_id}"

        try:
            data = await self._get_json(url)
        except aiohttp.ClientResponseError as e:
            raise SearchServiceError(f"Server error: {e.status} - {e.message}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SearchServiceError(f"Network error: {self._describe(e)}") from e

        if data is None:
            return None

        try:
            movie = MovieSummary.model_validate(data)
        except ValidationError as e:
            raise SearchServiceError(f"Server error: unexpected movie data for {movie_id}") from e

        self.logger.debug(f"Movie {movie_id} loaded: {movie.title}")
        return movie

    async def _post_json(self, url: str, payload: Dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        async with self._get_session().post(url, json=payload) as response:
            response.raise_for_status()
            try:
                return await response.json()
            except ValueError as e:
                self.logger.error(f"Malformed JSON from {url}: {e}")
                raise SearchServiceError("Server error: unexpected search response") from e

    async def _get_json(self, url: str) -> Optional[Any]:
        """GET a JSON resource, retrying connection failures.

        Returns:
            Decoded JSON, or None on 404.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._config.app.retry_attempts),
            wait=wait_exponential(multiplier=self._config.app.retry_wait_seconds),
            retry=retry_if_exception_type((aiohttp.ClientConnectionError, asyncio.TimeoutError)),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                async with self._get_session().get(url) as response:
                    if response.status == 404:
                        return None
                    response.raise_for_status()
                    try:
                        return await response.json()
                    except ValueError as e:
                        self.logger.error(f"Malformed JSON from {url}: {e}")
                        raise SearchServiceError("Server error: unexpected movie response") from e
        return None

    @staticmethod
    def _describe(error: BaseException) -> str:
        if isinstance(error, asyncio.TimeoutError):
            return "request timed out"
        return str(error) or error.__class__.__name__

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._api_config.timeout)
            connector = aiohttp.TCPConnector(ssl=self._api_config.verify_ssl)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers={"Content-Type": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "MovieSearchService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
