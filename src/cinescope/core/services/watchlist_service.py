"""Watchlist service implementation."""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import AuthenticationRequiredError, WatchlistServiceError
from ..interfaces import ISessionProvider, IWatchlistService
from ..models import WatchlistEntry, WatchlistPage, WatchlistStats, WatchlistStatus


class WatchlistService(IWatchlistService, LoggerMixin):
    """Watchlist access over the movie API (``/watchlist``).

    Every request carries the session's bearer token, read at request time.
    """

    def __init__(self, config: Config, session: ISessionProvider) -> None:
        """Initialize watchlist service.

        Args:
            config: Application configuration.
            session: Session provider supplying the bearer token.
        """
        self._config = config
        self._api_config = config.api
        self._session = session
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return f"{self._api_config.base_url}/watchlist"

    async def is_member(self, movie_id: int) -> bool:
        """Check if a movie is on the user's watchlist.

        Args:
            movie_id: Catalog movie ID.

        Returns:
            True if the movie is on the watchlist.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        response = await self._request("GET", f"/check/{movie_id}", idempotent=True)
        try:
            in_watchlist = bool(response.json())
        except ValueError as e:
            raise WatchlistServiceError(f"Unexpected watchlist response: {e}") from e
        self.logger.debug(f"Movie {movie_id} in watchlist: {in_watchlist}")
        return in_watchlist

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
        params = {"movieId": str(movie_id), "status": status.value}
        response = await self._request("POST", "", params=params)
        entry = self._parse(WatchlistEntry, response)
        self.logger.info(f"Added movie {movie_id} to watchlist")
        return entry

    async def list_entries(
        self, page: int = 0, size: int = 20, status: Optional[WatchlistStatus] = None
    ) -> WatchlistPage:
        """List watchlist entries, optionally only those with one status.

        Args:
            page: Zero-based page index.
            size: Page size.
            status: Only list entries with this status.

        Returns:
            One page of watchlist entries.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        path = f"/status/{status.value}" if status else ""
        params = {"page": str(page), "size": str(size)}
        response = await self._request("GET", path, params=params, idempotent=True)
        result = self._parse(WatchlistPage, response)
        self.logger.debug(f"Fetched watchlist: {result.total_elements} items")
        return result

    async def get_entry(self, movie_id: int) -> Optional[WatchlistEntry]:
        """Get the watchlist entry for a movie.

        Args:
            movie_id: Catalog movie ID.

        Returns:
            Watchlist entry or None if the movie is not on the watchlist.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        try:
            response = await self._request("GET", f"/movie/{movie_id}", idempotent=True)
        except WatchlistServiceError as e:
            if e.status_code == 404:
                return None
            raise
        return self._parse(WatchlistEntry, response)

    async def update_status(self, entry_id: int, status: WatchlistStatus) -> WatchlistEntry:
        """Change the status of a watchlist entry.

        Args:
            entry_id: Watchlist entry ID.
            status: New status.

        Returns:
            Updated watchlist entry.

        Raises:
            WatchlistServiceError: If the update fails.
        """
        response = await self._request("PUT", f"/{entry_id}", params={"status": status.value})
        self.logger.info(f"Updated watchlist entry {entry_id} to {status.value}")
        return self._parse(WatchlistEntry, response)

    async def update_details(
        self, entry_id: int, is_public: Optional[bool] = None, notes: Optional[str] = None
    ) -> WatchlistEntry:
        """Change privacy and notes of a watchlist entry.

        Only the given fields are sent.

        Raises:
            WatchlistServiceError: If the update fails.
        """
        params: Dict[str, str] = {}
        if is_public is not None:
            params["isPublic"] = "true" if is_public else "false"
        if notes is not None:
            params["notes"] = notes

        response = await self._request("PATCH", f"/{entry_id}/details", params=params)
        return self._parse(WatchlistEntry, response)

    async def remove(self, entry_id: int) -> None:
        """Remove an entry from the watchlist.

        Raises:
            WatchlistServiceError: If the removal fails.
        """
        await self._request("DELETE", f"/{entry_id}")
        self.logger.info(f"Removed watchlist entry {entry_id}")

    async def get_stats(self) -> WatchlistStats:
        """Get watchlist counts per status.

        Raises:
            WatchlistServiceError: If the request fails.
        """
        response = await self._request("GET", "/stats", idempotent=True)
        return self._parse(WatchlistStats, response)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        idempotent: bool = False,
    ) -> httpx.Response:
        """Send an authenticated request and map failures to WatchlistServiceError.

        Idempotent requests are retried on transport errors.
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        attempts = self._config.app.retry_attempts if idempotent else 1

        try:
            retrying = AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential(multiplier=self._config.app.retry_wait_seconds),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            )
            async for attempt in retrying:
                with attempt:
                    response = await self._get_client().request(
                        method, url, params=params, headers=headers
                    )
                    response.raise_for_status()
                    return response
        except httpx.HTTPStatusError as e:
            raise self._status_error(method, url, e.response) from e
        except httpx.TransportError as e:
            self.logger.error(f"HTTP error on {method} {url}: {e!r}")
            raise WatchlistServiceError("Cannot connect to server.") from e
        except httpx.RequestError as e:
            self.logger.error(f"HTTP error on {method} {url}: {e!r}")
            raise WatchlistServiceError(f"Request failed: {e}") from e

        raise WatchlistServiceError(f"No response for {method} {url}")

    def _auth_headers(self) -> Dict[str, str]:
        token = self._session.get_token()
        if not token:
            raise AuthenticationRequiredError("Please login to manage your watchlist")
        return {"Authorization": f"Bearer {token}"}

    def _status_error(
        self, method: str, url: str, response: httpx.Response
    ) -> WatchlistServiceError:
        status = response.status_code
        self.logger.error(f"HTTP error on {method} {url}: {status} {response.text[:200]}")
        if status == 404:
            return WatchlistServiceError("Resource not found.", status_code=status)
        message = f"Error {status}: {response.reason_phrase}"
        return WatchlistServiceError(message, status_code=status)

    def _parse(self, model: Any, response: httpx.Response) -> Any:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise WatchlistServiceError(f"Unexpected watchlist response: {e}") from e

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client.

        Returns:
            HTTP client.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._api_config.timeout,
                verify=self._api_config.verify_ssl,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "WatchlistService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
