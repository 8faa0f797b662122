"""Tests for the filter state model."""

import pytest
from pydantic import ValidationError

from cinescope.core.models import FilterState


@pytest.mark.unit
def test_toggle_genre_keeps_selection_order():
    """Test selecting and deselecting genres."""
    state = FilterState()

    state.toggle_genre("Drama")
    state.toggle_genre("Action")
    state.toggle_genre("Drama")
    state.toggle_genre("Comedy")

    assert state.genres == ["Action", "Comedy"]
    assert state.is_genre_selected("Action")
    assert not state.is_genre_selected("Drama")


@pytest.mark.unit
def test_reset_restores_defaults():
    """Test that reset clears every selection."""
    state = FilterState(query="alien", genres=["Horror"], min_year=1979, page=4, size=50)

    state.reset(size=20)

    assert state == FilterState()


@pytest.mark.unit
def test_reset_keeps_size_when_not_given():
    """Test that reset keeps the page size by default."""
    state = FilterState(query="alien", size=50)

    state.reset()

    assert state.size == 50
    assert state.query == ""


@pytest.mark.unit
def test_range_violations():
    """Test that inverted ranges are reported."""
    state = FilterState(min_year=2010, max_year=2000, min_score=3.0, max_score=7.0)

    violations = state.range_violations()

    assert len(violations) == 1
    assert "year" in violations[0]


@pytest.mark.unit
def test_assignment_is_validated():
    """Test that invalid assignments are rejected."""
    state = FilterState()

    with pytest.raises(ValidationError):
        state.page = -1
    with pytest.raises(ValidationError):
        state.size = 0
