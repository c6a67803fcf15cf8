"""
Favorites Aggregator

Resolves a user's favorite movie ids against TMDB. Lookups fan out
concurrently; a lookup that fails for any reason is dropped from the result
instead of failing the request.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from movieapi.schemas.favorites import FavoriteMovie, FavoriteSchema

logger = logging.getLogger(__name__)


class MovieLookup(Protocol):
    async def get_movie(
        self, movie_id: int, append_to_response: Optional[str] = None
    ) -> Dict[str, Any]: ...


class FavoritesAggregator:
    """Fan-out/fan-in lookup of favorite movie details."""

    def __init__(
        self,
        catalog_client: MovieLookup,
        max_concurrency: int = 0,
        lookup_timeout: Optional[float] = None,
    ):
        """
        Args:
            catalog_client: anything with an async ``get_movie(movie_id)``
            max_concurrency: max lookups in flight; 0 or less means unbounded
            lookup_timeout: seconds before a single lookup is abandoned; None waits
        """
        self.catalog_client = catalog_client
        self.max_concurrency = max_concurrency
        self.lookup_timeout = lookup_timeout

    async def aggregate(self, favorites: Sequence[FavoriteSchema]) -> List[FavoriteMovie]:
        """
        Returns:
            Resolved movies in the same order as ``favorites``, minus failures.
        """
        if not favorites:
            return []

        semaphore = (
            asyncio.Semaphore(self.max_concurrency) if self.max_concurrency > 0 else None
        )
        tasks = [self._resolve(favorite, semaphore) for favorite in favorites]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        movies: List[FavoriteMovie] = []
        for favorite, result in zip(favorites, results):
            if isinstance(result, FavoriteMovie):
                movies.append(result)
            else:
                logger.warning(
                    f"Dropping favorite movie {favorite.movie_id}: {type(result).__name__}: {result}"
                )

        if len(movies) < len(favorites):
            logger.info(f"Resolved {len(movies)}/{len(favorites)} favorites")
        return movies

    async def _resolve(
        self, favorite: FavoriteSchema, semaphore: Optional[asyncio.Semaphore]
    ) -> FavoriteMovie:
        if semaphore is None:
            data = await self._lookup(favorite.movie_id)
        else:
            async with semaphore:
                data = await self._lookup(favorite.movie_id)

        return FavoriteMovie(
            id=data["id"],
            title=data.get("title"),
            overview=data.get("overview"),
            poster_path=data.get("poster_path"),
            release_date=data.get("release_date"),
            vote_average=data.get("vote_average"),
            added_at=favorite.added_at,
        )

    async def _lookup(self, movie_id: int) -> Dict[str, Any]:
        call = self.catalog_client.get_movie(movie_id)
        if self.lookup_timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.lookup_timeout)
