"""Watchlist membership overlay for the movies currently on screen."""

import asyncio
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from ...infrastructure.logging import LoggerMixin
from ...utils import AuthenticationRequiredError, WatchlistServiceError
from ..interfaces import ISessionProvider, IWatchlistService
from ..models import AddOutcome, AddResult, AddState, MembershipState, WatchlistStatus


class WatchlistStatusCache:
    """Session-wide mapping from movie ID to known watchlist membership.

    A movie with no entry reads as ``MembershipState.ABSENT``; absent is
    never stored. Writes are plain single-key overwrites.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, MembershipState] = {}

    def get(self, movie_id: int) -> MembershipState:
        return self._entries.get(movie_id, MembershipState.ABSENT)

    def set(self, movie_id: int, is_member: bool) -> None:
        self._entries[movie_id] = (
            MembershipState.IN_WATCHLIST if is_member else MembershipState.NOT_IN_WATCHLIST
        )

    def mark_pending(self, movie_id: int) -> None:
        self._entries[movie_id] = MembershipState.PENDING

    def discard(self, movie_id: int) -> None:
        self._entries.pop(movie_id, None)

    def has(self, movie_id: int) -> bool:
        return movie_id in self._entries

    def is_member(self, movie_id: int) -> bool:
        return self.get(movie_id) == MembershipState.IN_WATCHLIST

    def items(self) -> Iterator[Tuple[int, MembershipState]]:
        return iter(list(self._entries.items()))

    def reset(self) -> None:
        """Forget everything, e.g. when the session changes hands."""
        self._entries.clear()

    def __contains__(self, movie_id: object) -> bool:
        return movie_id in self._entries

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class WatchlistOverlay(LoggerMixin):
    """Resolves and caches watchlist membership for result pages.

    Lookups run as independent tasks: they may finish in any order, each
    writes only its own cache entry, and a failed lookup leaves its entry
    absent without touching the others. Adds are guarded per movie so a
    repeated intent while one is in flight never sends a second write.
    """

    def __init__(self, watchlist_service: IWatchlistService, session: ISessionProvider) -> None:
        """Initialize watchlist overlay.

        Args:
            watchlist_service: Remote watchlist service.
            session: Session provider, asked on every action.
        """
        self._watchlist_service = watchlist_service
        self._session = session
        self._cache = WatchlistStatusCache()
        self._add_states: Dict[int, AddState] = {}
        self._add_errors: Dict[int, str] = {}
        self._lookups: Set["asyncio.Task[None]"] = set()

    @property
    def cache(self) -> WatchlistStatusCache:
        return self._cache

    @property
    def pending_lookups(self) -> int:
        return len(self._lookups)

    def is_in_watchlist(self, movie_id: int) -> bool:
        """Check if a movie should render as on the watchlist.

        Unknown, pending and failed lookups all render as not on the watchlist.
        """
        return self._cache.is_member(movie_id)

    def add_state(self, movie_id: int) -> AddState:
        return self._add_states.get(movie_id, AddState.IDLE)

    def add_error(self, movie_id: int) -> str:
        return self._add_errors.get(movie_id, "")

    def refresh(self, movie_ids: Iterable[int]) -> List["asyncio.Task[None]"]:
        """Start membership lookups for the movies not yet in the cache.

        Must be called from a running event loop. Does nothing when no user
        is signed in.

        Args:
            movie_ids: IDs of the movies on the current page.

        Returns:
            Tasks started by this call.
        """
        if not self._session.is_authenticated():
            return []

        started = []
        for movie_id in movie_ids:
            if self._cache.get(movie_id) != MembershipState.ABSENT:
                continue
            self._cache.mark_pending(movie_id)
            task = asyncio.create_task(self._lookup(movie_id), name=f"watchlist-check-{movie_id}")
            self._lookups.add(task)
            task.add_done_callback(self._lookups.discard)
            started.append(task)

        if started:
            self.logger.debug(f"Started {len(started)} watchlist lookups")
        return started

    async def wait_idle(self) -> None:
        """Wait until every outstanding lookup has finished."""
        while self._lookups:
            results = await asyncio.gather(*list(self._lookups), return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    self.logger.error(f"Watchlist lookup crashed: {result!r}")

    async def quick_add(
        self, movie_id: int, status: WatchlistStatus = WatchlistStatus.WANT_TO_WATCH
    ) -> AddResult:
        """Add a movie to the watchlist, guarding against duplicate submission.

        Args:
            movie_id: Catalog movie ID.
            status: Initial watchlist status.

        Returns:
            What happened to the intent.
        """
        if not self._session.is_authenticated():
            self.logger.info(f"Add to watchlist for movie {movie_id} needs a signed-in user")
            return AddResult(movie_id=movie_id, outcome=AddOutcome.LOGIN_REQUIRED)

        if self._cache.is_member(movie_id):
            return AddResult(movie_id=movie_id, outcome=AddOutcome.ALREADY_IN_WATCHLIST)

        if self.add_state(movie_id) == AddState.IN_FLIGHT:
            self.logger.debug(f"Add for movie {movie_id} already in flight")
            return AddResult(movie_id=movie_id, outcome=AddOutcome.ALREADY_REQUESTED)

        self._add_states[movie_id] = AddState.IN_FLIGHT
        self._add_errors.pop(movie_id, None)

        try:
            entry = await self._watchlist_service.add(movie_id, status)
        except (WatchlistServiceError, AuthenticationRequiredError) as e:
            self._add_states[movie_id] = AddState.ERROR
            self._add_errors[movie_id] = str(e)
            self.logger.error(f"Failed to add movie {movie_id} to watchlist: {e}")
            return AddResult(movie_id=movie_id, outcome=AddOutcome.FAILED, error_message=str(e))

        self._add_states[movie_id] = AddState.DONE
        self._cache.set(movie_id, True)
        self.logger.info(f"Added movie {movie_id} to watchlist as {status.value}")
        return AddResult(movie_id=movie_id, outcome=AddOutcome.ADDED, entry=entry)

    def forget(self, movie_id: int) -> None:
        """Record that a movie has left the watchlist."""
        self._cache.set(movie_id, False)
        self._add_states.pop(movie_id, None)

    def reset(self) -> None:
        """Drop all cached state, e.g. after logout."""
        self._cache.reset()
        self._add_states.clear()
        self._add_errors.clear()

    async def _lookup(self, movie_id: int) -> None:
        try:
            is_member = await self._watchlist_service.is_member(movie_id)
        except (WatchlistServiceError, AuthenticationRequiredError) as e:
            self.logger.warning(f"Watchlist check failed for movie {movie_id}: {e}")
            if self._cache.get(movie_id) == MembershipState.PENDING:
                self._cache.discard(movie_id)
            return
        self._cache.set(movie_id, is_member)
