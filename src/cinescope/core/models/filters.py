"""Filter selection and search request models."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Neutral defaults: the value of each filter that means "no constraint".
DEFAULT_QUERY = ""
DEFAULT_OVERVIEW = ""
DEFAULT_DIRECTOR = ""
DEFAULT_MIN_SCORE = 0.0
DEFAULT_MAX_SCORE = 10.0
DEFAULT_MIN_EXTERNAL_RATING = 0.0
DEFAULT_MAX_EXTERNAL_RATING = 10.0
DEFAULT_MIN_VOTE_COUNT = 0
DEFAULT_MIN_YEAR = 1990
DEFAULT_MAX_YEAR = 2025
DEFAULT_MIN_RUNTIME = 0
DEFAULT_MAX_RUNTIME = 300
DEFAULT_SEARCH_FOREIGN = True
DEFAULT_SORT_BY = "popularity"
DEFAULT_SORT_DIRECTION = "desc"
DEFAULT_PAGE_SIZE = 20

SORT_FIELDS = ("popularity", "rating", "releaseYear", "title", "voteCount", "runtime")
SORT_DIRECTIONS = ("asc", "desc")

# (label, min field, max field) for every range pair
RANGE_PAIRS: Tuple[Tuple[str, str, str], ...] = (
    ("score", "min_score", "max_score"),
    ("external rating", "min_external_rating", "max_external_rating"),
    ("year", "min_year", "max_year"),
    ("runtime", "min_runtime", "max_runtime"),
)


class FilterState(BaseModel):
    """Current filter, sort and pagination selections of the search screen."""

    query: str = Field(default=DEFAULT_QUERY, description="Free text query")
    overview: str = Field(default=DEFAULT_OVERVIEW, description="Overview substring")
    genres: List[str] = Field(default_factory=list, description="Selected genre tags")
    director: str = Field(default=DEFAULT_DIRECTOR, description="Director name")
    actors: List[str] = Field(default_factory=list, description="Actor names")

    min_score: float = Field(default=DEFAULT_MIN_SCORE, ge=0.0, le=10.0)
    max_score: float = Field(default=DEFAULT_MAX_SCORE, ge=0.0, le=10.0)
    min_external_rating: float = Field(default=DEFAULT_MIN_EXTERNAL_RATING, ge=0.0, le=10.0)
    max_external_rating: float = Field(default=DEFAULT_MAX_EXTERNAL_RATING, ge=0.0, le=10.0)
    min_vote_count: int = Field(default=DEFAULT_MIN_VOTE_COUNT, ge=0)
    min_year: int = Field(default=DEFAULT_MIN_YEAR)
    max_year: int = Field(default=DEFAULT_MAX_YEAR)
    min_runtime: int = Field(default=DEFAULT_MIN_RUNTIME, ge=0)
    max_runtime: int = Field(default=DEFAULT_MAX_RUNTIME, ge=0)

    highly_rated: bool = Field(default=False, description="Quick filter: highly rated")
    popular: bool = Field(default=False, description="Quick filter: popular")
    recently_released: bool = Field(default=False, description="Quick filter: recent")
    short_runtime: bool = Field(default=False, description="Quick filter: short runtime")
    search_foreign: bool = Field(
        default=DEFAULT_SEARCH_FOREIGN, description="Include foreign-language movies"
    )

    sort_by: str = Field(default=DEFAULT_SORT_BY, description="Sort field")
    sort_direction: str = Field(default=DEFAULT_SORT_DIRECTION, description="Sort direction")

    page: int = Field(default=0, ge=0, description="Zero-based page index")
    size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0, description="Page size")

    model_config = ConfigDict(validate_assignment=True)

    def toggle_genre(self, genre: str) -> None:
        """Select a genre, or deselect it if it is already selected."""
        if genre in self.genres:
            self.genres = [g for g in self.genres if g != genre]
        else:
            self.genres = [*self.genres, genre]

    def is_genre_selected(self, genre: str) -> bool:
        """Check whether a genre is selected."""
        return genre in self.genres

    def reset(self, size: Optional[int] = None) -> None:
        """Restore every selection to its neutral default.

        Args:
            size: Page size to reset to. Keeps the current size if None.
        """
        fresh = FilterState(size=size if size is not None else self.size)
        for name in type(self).model_fields:
            setattr(self, name, getattr(fresh, name))

    def range_violations(self) -> List[str]:
        """List the range pairs whose minimum is above their maximum."""
        violations = []
        for label, low, high in RANGE_PAIRS:
            if getattr(self, low) > getattr(self, high):
                violations.append(
                    f"minimum {label} ({getattr(self, low)}) is above "
                    f"maximum {label} ({getattr(self, high)})"
                )
        return violations


class SearchRequest(BaseModel):
    """Canonical search request sent to the catalog API.

    Absent fields are left unconstrained by the server.
    """

    query: Optional[str] = None
    overview: Optional[str] = None
    genres: Optional[List[str]] = None
    director: Optional[str] = None
    actors: Optional[List[str]] = None

    min_score: Optional[float] = Field(default=None, alias="minRating")
    max_score: Optional[float] = Field(default=None, alias="maxRating")
    min_external_rating: Optional[float] = Field(default=None, alias="minImdbRating")
    max_external_rating: Optional[float] = Field(default=None, alias="maxImdbRating")
    min_vote_count: Optional[int] = Field(default=None, alias="minVoteCount")
    min_year: Optional[int] = Field(default=None, alias="minYear")
    max_year: Optional[int] = Field(default=None, alias="maxYear")
    min_runtime: Optional[int] = Field(default=None, alias="minRuntime")
    max_runtime: Optional[int] = Field(default=None, alias="maxRuntime")

    highly_rated: Optional[bool] = Field(default=None, alias="highlyRated")
    popular: Optional[bool] = None
    recently_released: Optional[bool] = Field(default=None, alias="recentlyReleased")
    short_runtime: Optional[bool] = Field(default=None, alias="shortRuntime")
    search_foreign: Optional[bool] = Field(default=None, alias="searchForeign")

    page: Optional[int] = None
    size: Optional[int] = None
    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    sort_direction: Optional[str] = Field(default=None, alias="sortDirection")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        """Get the wire payload, with absent fields left out."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Get the wire payload as JSON."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
