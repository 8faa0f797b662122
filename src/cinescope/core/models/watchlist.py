"""Watchlist data models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WatchlistStatus(str, Enum):
    """Status of a movie on the user's watchlist."""

    WANT_TO_WATCH = "WANT_TO_WATCH"
    WATCHING = "WATCHING"
    WATCHED = "WATCHED"
    NOT_INTERESTED = "NOT_INTERESTED"


class MembershipState(str, Enum):
    """Cached knowledge about whether a movie is on the watchlist."""

    ABSENT = "absent"
    PENDING = "pending"
    IN_WATCHLIST = "in_watchlist"
    NOT_IN_WATCHLIST = "not_in_watchlist"


class AddState(str, Enum):
    """Lifecycle of an add-to-watchlist request for one movie."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    DONE = "done"
    ERROR = "error"


class AddOutcome(str, Enum):
    """What happened to an add-to-watchlist intent."""

    ADDED = "added"
    LOGIN_REQUIRED = "login_required"
    ALREADY_IN_WATCHLIST = "already_in_watchlist"
    ALREADY_REQUESTED = "already_requested"
    FAILED = "failed"


class WatchlistEntry(BaseModel):
    """A movie on the user's watchlist."""

    id: int = Field(..., description="Watchlist entry ID")
    user_id: Optional[int] = Field(None, alias="userId")
    movie_id: int = Field(..., alias="movieId")
    movie_title: Optional[str] = Field(None, alias="movieTitle")
    movie_release_year: Optional[int] = Field(None, alias="movieReleaseYear")
    movie_poster_path: Optional[str] = Field(None, alias="moviePosterPath")
    status: WatchlistStatus = Field(default=WatchlistStatus.WANT_TO_WATCH)
    added_at: Optional[datetime] = Field(None, alias="addedAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class WatchlistPage(BaseModel):
    """One page of watchlist entries."""

    content: List[WatchlistEntry] = Field(default_factory=list)
    total_pages: int = Field(default=0, alias="totalPages")
    total_elements: int = Field(default=0, alias="totalElements")
    size: int = Field(default=0)
    number: int = Field(default=0, description="Zero-based page index")

    model_config = ConfigDict(populate_by_name=True)


class WatchlistStats(BaseModel):
    """Watchlist counts per status."""

    total_count: int = Field(default=0, alias="totalCount")
    want_to_watch_count: int = Field(default=0, alias="wantToWatchCount")
    watching_count: int = Field(default=0, alias="watchingCount")
    watched_count: int = Field(default=0, alias="watchedCount")
    not_interested_count: int = Field(default=0, alias="notInterestedCount")

    model_config = ConfigDict(populate_by_name=True)


class AddResult(BaseModel):
    """Result of a quick-add intent."""

    movie_id: int = Field(..., description="Movie the intent was for")
    outcome: AddOutcome = Field(..., description="What happened")
    entry: Optional[WatchlistEntry] = Field(None, description="Created entry, when added")
    error_message: Optional[str] = Field(None, description="Error shown to the user")

    @property
    def redirect_to_login(self) -> bool:
        """Check if the UI should send the user to sign in."""
        return self.outcome == AddOutcome.LOGIN_REQUIRED

    @property
    def redirect_to_detail(self) -> bool:
        """Check if the UI should open the movie's detail view instead."""
        return self.outcome in (AddOutcome.ALREADY_IN_WATCHLIST, AddOutcome.ALREADY_REQUESTED)
