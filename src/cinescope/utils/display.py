"""Formatting helpers for rendering movie data."""

from typing import Any, Optional

from ..core.models import MovieSummary


def format_rating(rating: Any) -> str:
    """Format a rating for display.

    Args:
        rating: Rating value, possibly missing or already a string.

    Returns:
        Rating with one decimal, or "N/A" when there is none.
    """
    if not rating:
        return "N/A"
    if isinstance(rating, (int, float)):
        return f"{rating:.1f}"
    return str(rating)


def display_rating(movie: MovieSummary) -> float:
    """Get the rating shown on a movie card."""
    return movie.rating or 0.0


def rating_source(movie: MovieSummary) -> str:
    """Get the name of the site the displayed rating comes from."""
    return "IMDB" if movie.is_imdb_rated else "TMDb"


def format_runtime(minutes: Optional[int]) -> str:
    """Format a runtime in minutes as "1h 52m".

    Args:
        minutes: Runtime in minutes.

    Returns:
        Human readable runtime, or "N/A" when unknown.
    """
    if not minutes:
        return "N/A"
    hours, rest = divmod(minutes, 60)
    if hours == 0:
        return f"{rest}m"
    return f"{hours}h {rest:02d}m"
