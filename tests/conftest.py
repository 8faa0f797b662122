"""Pytest configuration and fixtures."""

import asyncio
from typing import Dict, List, Optional

import pytest

from cinescope.config import ConfigManager
from cinescope.core.interfaces import ISearchService, ISessionProvider, IWatchlistService
from cinescope.core.models import (
    MovieSummary,
    SearchRequest,
    SearchResultPage,
    WatchlistEntry,
    WatchlistPage,
    WatchlistStats,
    WatchlistStatus,
)
from cinescope.infrastructure import Container
from cinescope.utils import SearchServiceError, WatchlistServiceError


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "integration: tests that wire several components")


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = """
api:
  base_url: "http://localhost:8080/api/"
  timeout: 5
  verify_ssl: false

search:
  default_page_size: 20
  max_page_size: 50

logging:
  level: "DEBUG"

app:
  retry_attempts: 2
  retry_wait_seconds: 0
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file, load_env=False)


@pytest.fixture
def config(config_manager):
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    container = Container(config_manager)
    return container


def make_movie(movie_id: int, title: Optional[str] = None, **kwargs) -> MovieSummary:
    """Build a movie summary for tests."""
    data = {"id": movie_id, "title": title or f"Movie {movie_id}", "releaseYear": 2000}
    data.update(kwargs)
    return MovieSummary.model_validate(data)


def make_page(movie_ids: List[int], total_pages: int = 1, current_page: int = 0):
    """Build a search result page for tests."""
    return SearchResultPage(
        movies=[make_movie(movie_id) for movie_id in movie_ids],
        current_page=current_page,
        total_pages=total_pages,
        total_results=len(movie_ids) * total_pages,
        search_time_ms=3,
    )


class FakeSearchService(ISearchService):
    """In-memory search service recording every request."""

    def __init__(self, page: Optional[SearchResultPage] = None) -> None:
        self.requests: List[SearchRequest] = []
        self.page = page or make_page([1, 2, 3], total_pages=3)
        self.error: Optional[str] = None
        self.movies: Dict[int, MovieSummary] = {}
        self.movie_error: Optional[str] = None

    async def search(self, request: SearchRequest) -> SearchResultPage:
        self.requests.append(request)
        if self.error:
            raise SearchServiceError(self.error)
        return self.page

    async def get_movie(self, movie_id: int) -> Optional[MovieSummary]:
        if self.movie_error:
            raise SearchServiceError(self.movie_error)
        return self.movies.get(movie_id)


class ControlledSearchService(ISearchService):
    """Search service whose responses are released by the test, one call at a time."""

    def __init__(self) -> None:
        self.requests: List[SearchRequest] = []
        self._gates: List[asyncio.Event] = []
        self._outcomes: Dict[int, object] = {}

    def release(self, call_index: int, outcome: object) -> None:
        """Let call ``call_index`` finish with a page or an exception."""
        self._outcomes[call_index] = outcome
        self._gates[call_index].set()

    async def search(self, request: SearchRequest) -> SearchResultPage:
        index = len(self.requests)
        self.requests.append(request)
        gate = asyncio.Event()
        self._gates.append(gate)
        await gate.wait()

        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome  # type: ignore[return-value]

    async def get_movie(self, movie_id: int) -> Optional[MovieSummary]:
        return None


class FakeWatchlistService(IWatchlistService):
    """In-memory watchlist service recording every call."""

    def __init__(self, members=(), failing=()) -> None:
        self.members = set(members)
        self.failing = set(failing)
        self.checks: List[int] = []
        self.adds: List[int] = []
        self.add_error: Optional[str] = None
        self.add_gate: Optional[asyncio.Event] = None
        self.entries: Dict[int, WatchlistEntry] = {}

    async def is_member(self, movie_id: int) -> bool:
        self.checks.append(movie_id)
        await asyncio.sleep(0)
        if movie_id in self.failing:
            raise WatchlistServiceError("Cannot connect to server.")
        return movie_id in self.members

    async def add(
        self, movie_id: int, status: WatchlistStatus = WatchlistStatus.WANT_TO_WATCH
    ) -> WatchlistEntry:
        self.adds.append(movie_id)
        if self.add_gate is not None:
            await self.add_gate.wait()
        if self.add_error:
            raise WatchlistServiceError(self.add_error)
        self.members.add(movie_id)
        entry = WatchlistEntry(id=len(self.adds), movie_id=movie_id, status=status)
        self.entries[entry.id] = entry
        return entry

    async def list_entries(self, page=0, size=20, status=None) -> WatchlistPage:
        content = [e for e in self.entries.values() if status is None or e.status == status]
        return WatchlistPage(
            content=content, total_pages=1, total_elements=len(content), size=size, number=page
        )

    async def get_entry(self, movie_id: int) -> Optional[WatchlistEntry]:
        for entry in self.entries.values():
            if entry.movie_id == movie_id:
                return entry
        return None

    async def update_status(self, entry_id: int, status: WatchlistStatus) -> WatchlistEntry:
        entry = self.entries[entry_id].model_copy(update={"status": status})
        self.entries[entry_id] = entry
        return entry

    async def update_details(self, entry_id, is_public=None, notes=None) -> WatchlistEntry:
        return self.entries[entry_id]

    async def remove(self, entry_id: int) -> None:
        entry = self.entries.pop(entry_id)
        self.members.discard(entry.movie_id)

    async def get_stats(self) -> WatchlistStats:
        return WatchlistStats(total_count=len(self.entries))


class FakeSession(ISessionProvider):
    """Session provider with a settable token."""

    def __init__(self, token: Optional[str] = "test-token") -> None:
        self.token = token

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def get_token(self) -> Optional[str]:
        return self.token

    def login(self, token: str) -> None:
        self.token = token

    def logout(self) -> None:
        self.token = None


@pytest.fixture
def search_service():
    return FakeSearchService()


@pytest.fixture
def watchlist_service():
    return FakeWatchlistService()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def anonymous_session():
    return FakeSession(token=None)


@pytest.fixture
def controlled_search_service():
    return ControlledSearchService()


@pytest.fixture
def movie_factory():
    return make_movie


@pytest.fixture
def page_factory():
    return make_page
