"""Movie-related data models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MovieSummary(BaseModel):
    """Read-only projection of a catalog movie, as shown on a result card."""

    id: int = Field(..., description="Catalog movie ID")
    title: str = Field(..., description="Movie title")
    release_year: Optional[int] = Field(None, alias="releaseYear", description="Release year")
    rating: Optional[float] = Field(None, description="Average score")
    vote_count: Optional[int] = Field(None, alias="voteCount", description="Number of votes")
    poster_path: Optional[str] = Field(None, alias="posterPath", description="Poster image path")
    genres: List[str] = Field(default_factory=list, description="Movie genres")
    director: Optional[str] = Field(None, description="Director name")
    main_stars: List[str] = Field(default_factory=list, alias="mainStars")
    runtime: Optional[int] = Field(None, description="Runtime in minutes")
    imdb_rating: Optional[float] = Field(None, alias="imdbRating", description="IMDb rating")
    popularity: Optional[float] = Field(None, description="Popularity score")
    overview: Optional[str] = Field(None, description="Plot overview")
    original_title: Optional[str] = Field(None, alias="originalTitle")
    is_imdb_rated: bool = Field(default=False, alias="isImdbRated")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SearchResultPage(BaseModel):
    """One page of search results, in server order."""

    movies: List[MovieSummary] = Field(default_factory=list, description="Movies on this page")
    current_page: int = Field(default=0, alias="currentPage")
    total_pages: int = Field(default=0, alias="totalPages")
    total_results: int = Field(default=0, alias="totalResults")
    facet_counts: Optional[Dict[str, Any]] = Field(None, alias="facetCounts")
    search_query: Optional[str] = Field(None, alias="searchQuery")
    applied_filters: Optional[str] = Field(None, alias="appliedFilters")
    search_time_ms: Optional[int] = Field(None, alias="searchTimeMs")
    sorted_by: Optional[str] = Field(None, alias="sortedBy")
    has_more_results: Optional[bool] = Field(None, alias="hasMoreResults")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def movie_ids(self) -> List[int]:
        """IDs of the movies on this page, in display order."""
        return [movie.id for movie in self.movies]
