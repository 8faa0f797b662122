"""Compile filter selections into canonical search requests."""

from typing import Any, Dict

from ..models import FilterState, SearchRequest
from ..models.filters import (
    DEFAULT_DIRECTOR,
    DEFAULT_MAX_EXTERNAL_RATING,
    DEFAULT_MAX_RUNTIME,
    DEFAULT_MAX_SCORE,
    DEFAULT_MAX_YEAR,
    DEFAULT_MIN_EXTERNAL_RATING,
    DEFAULT_MIN_RUNTIME,
    DEFAULT_MIN_SCORE,
    DEFAULT_MIN_VOTE_COUNT,
    DEFAULT_MIN_YEAR,
    DEFAULT_OVERVIEW,
    DEFAULT_PAGE_SIZE,
    DEFAULT_QUERY,
    DEFAULT_SEARCH_FOREIGN,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_DIRECTION,
)

# Field name -> neutral default. A field is sent only when it differs from
# its default; each bound of a range is judged on its own.
NEUTRAL_DEFAULTS: Dict[str, Any] = {
    "query": DEFAULT_QUERY,
    "overview": DEFAULT_OVERVIEW,
    "genres": [],
    "director": DEFAULT_DIRECTOR,
    "actors": [],
    "min_score": DEFAULT_MIN_SCORE,
    "max_score": DEFAULT_MAX_SCORE,
    "min_external_rating": DEFAULT_MIN_EXTERNAL_RATING,
    "max_external_rating": DEFAULT_MAX_EXTERNAL_RATING,
    "min_vote_count": DEFAULT_MIN_VOTE_COUNT,
    "min_year": DEFAULT_MIN_YEAR,
    "max_year": DEFAULT_MAX_YEAR,
    "min_runtime": DEFAULT_MIN_RUNTIME,
    "max_runtime": DEFAULT_MAX_RUNTIME,
    "highly_rated": False,
    "popular": False,
    "recently_released": False,
    "short_runtime": False,
    "search_foreign": DEFAULT_SEARCH_FOREIGN,
}

# Always sent: pagination and ordering.
ALWAYS_PRESENT = ("page", "size", "sort_by", "sort_direction")


def compile_search_request(state: FilterState) -> SearchRequest:
    """Build the canonical search request for a filter state.

    Pure and deterministic: equal states give equal requests.

    Args:
        state: Current filter selections.

    Returns:
        Search request with only the non-default filters set.
    """
    fields: Dict[str, Any] = {}

    for name, default in NEUTRAL_DEFAULTS.items():
        value = getattr(state, name)
        if value != default:
            fields[name] = list(value) if isinstance(value, list) else value

    for name in ALWAYS_PRESENT:
        fields[name] = getattr(state, name)

    return SearchRequest(**fields)


def popular_request(size: int = DEFAULT_PAGE_SIZE) -> SearchRequest:
    """Build the implicit request used on first load and after clearing filters.

    Args:
        size: Page size.

    Returns:
        Request for the first page of popular movies.
    """
    return SearchRequest(
        popular=True,
        page=0,
        size=size,
        sort_by=DEFAULT_SORT_BY,
        sort_direction=DEFAULT_SORT_DIRECTION,
    )
