"""
Movie Schemas

Shapes of the TMDB payloads this API passes through. Only the fields the
frontend uses are kept; nested credit/video objects are forwarded as-is.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from movieapi.schemas.auth import BaseResponse


class MovieSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genre_ids: Optional[List[int]] = None


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None


class Genre(BaseModel):
    id: int
    name: str


class MovieDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    genres: List[Genre] = []
    production_companies: List[Dict[str, Any]] = []
    cast: List[Dict[str, Any]] = []
    crew: List[Dict[str, Any]] = []
    videos: List[Dict[str, Any]] = []
    similar: List[Dict[str, Any]] = []


class MoviePage(BaseModel):
    results: List[MovieSummary]
    total_pages: Optional[int] = None
    total_results: Optional[int] = None
    page: Optional[int] = None


class SearchPage(BaseModel):
    results: List[SearchResult]
    total_pages: Optional[int] = None
    total_results: Optional[int] = None
    page: Optional[int] = None
    query: str


class MovieListResponse(BaseResponse, MoviePage):
    pass


class MovieSearchResponse(BaseResponse, SearchPage):
    pass


class MovieDetailResponse(BaseResponse):
    data: MovieDetail


class GenreListResponse(BaseResponse):
    genres: List[Genre]
