"""
Movie Service

Proxies TMDB list/search/detail/genre calls and trims the payloads to the
fields the frontend renders.
"""

import logging
from typing import Any, Dict, List

from movieapi.core.exceptions import BadRequestError, UpstreamUnavailableError
from movieapi.providers.tmdb import TMDBClient
from movieapi.schemas.movie import (
    Genre,
    MovieDetail,
    MoviePage,
    MovieSummary,
    SearchPage,
    SearchResult,
)

logger = logging.getLogger(__name__)

DETAIL_APPENDS = "credits,videos,similar"
CAST_LIMIT = 10
CREW_LIMIT = 5
SIMILAR_LIMIT = 6


class MovieService:
    def __init__(self, catalog_client: TMDBClient):
        self.catalog_client = catalog_client

    async def get_popular(self, page: int = 1) -> MoviePage:
        try:
            data = await self.catalog_client.get_popular(page=page)
        except UpstreamUnavailableError as exc:
            raise exc.with_message("Error fetching movies from TMDB")

        return MoviePage(
            results=[MovieSummary.model_validate(m) for m in data.get("results", [])],
            total_pages=data.get("total_pages"),
            total_results=data.get("total_results"),
            page=data.get("page"),
        )

    async def search(self, query: str, page: int = 1) -> SearchPage:
        if not query or not query.strip():
            raise BadRequestError("Search query is required")

        try:
            data = await self.catalog_client.search_movies(query=query, page=page)
        except UpstreamUnavailableError as exc:
            raise exc.with_message("Error searching movies")

        return SearchPage(
            results=[SearchResult.model_validate(m) for m in data.get("results", [])],
            total_pages=data.get("total_pages"),
            total_results=data.get("total_results"),
            page=data.get("page"),
            query=query,
        )

    async def get_details(self, movie_id: int) -> MovieDetail:
        try:
            data = await self.catalog_client.get_movie(
                movie_id, append_to_response=DETAIL_APPENDS
            )
        except UpstreamUnavailableError as exc:
            raise exc.with_message("Error fetching movie details")

        credits = data.get("credits") or {}
        videos = data.get("videos") or {}
        similar = data.get("similar") or {}

        return MovieDetail(
            id=data["id"],
            title=data.get("title"),
            overview=data.get("overview"),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            release_date=data.get("release_date"),
            runtime=data.get("runtime"),
            vote_average=data.get("vote_average"),
            vote_count=data.get("vote_count"),
            genres=data.get("genres") or [],
            production_companies=data.get("production_companies") or [],
            cast=(credits.get("cast") or [])[:CAST_LIMIT],
            crew=(credits.get("crew") or [])[:CREW_LIMIT],
            videos=videos.get("results") or [],
            similar=(similar.get("results") or [])[:SIMILAR_LIMIT],
        )

    async def get_genres(self) -> List[Genre]:
        try:
            data = await self.catalog_client.get_genres()
        except UpstreamUnavailableError as exc:
            raise exc.with_message("Error fetching genres")

        genres: List[Dict[str, Any]] = data.get("genres") or []
        return [Genre.model_validate(g) for g in genres]
