"""
Movies Router

Public TMDB proxy endpoints.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query

from movieapi.containers import Container
from movieapi.schemas.movie import (
    GenreListResponse,
    MovieDetailResponse,
    MovieListResponse,
    MovieSearchResponse,
)
from movieapi.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("/popular", response_model=MovieListResponse)
@inject
async def get_popular_movies(
    page: int = Query(1, ge=1),
    movie_service: MovieService = Depends(Provide[Container.services.movie_service]),
) -> MovieListResponse:
    result = await movie_service.get_popular(page=page)
    return MovieListResponse(success=True, **result.model_dump())


@router.get("/search", response_model=MovieSearchResponse)
@inject
async def search_movies(
    query: str = Query(""),
    page: int = Query(1, ge=1),
    movie_service: MovieService = Depends(Provide[Container.services.movie_service]),
) -> MovieSearchResponse:
    result = await movie_service.search(query=query, page=page)
    return MovieSearchResponse(success=True, **result.model_dump())


# Registered before /{movie_id} so "genres" is not parsed as an id
@router.get("/genres/list", response_model=GenreListResponse)
@inject
async def get_genres(
    movie_service: MovieService = Depends(Provide[Container.services.movie_service]),
) -> GenreListResponse:
    genres = await movie_service.get_genres()
    return GenreListResponse(success=True, genres=genres)


@router.get("/{movie_id}", response_model=MovieDetailResponse)
@inject
async def get_movie_details(
    movie_id: int,
    movie_service: MovieService = Depends(Provide[Container.services.movie_service]),
) -> MovieDetailResponse:
    movie = await movie_service.get_details(movie_id)
    return MovieDetailResponse(success=True, data=movie)
