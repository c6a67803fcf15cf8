"""
Favorites Service

Business logic for a user's favorite movies.
"""

from typing import Any, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from movieapi.repositories.favorites_repository import FavoritesRepository
from movieapi.schemas.favorites import FavoriteSchema
from movieapi.core.exceptions import BadRequestError, ConflictError

logger = logging.getLogger(__name__)


def parse_movie_id(raw: Any) -> int:
    """Coerce a request's movieId to a positive int."""
    if raw is None or raw == "" or isinstance(raw, bool):
        raise BadRequestError("Movie ID is required")
    try:
        movie_id = int(raw)
    except (TypeError, ValueError):
        raise BadRequestError("Movie ID must be an integer")
    if movie_id <= 0:
        raise BadRequestError("Movie ID is required")
    return movie_id


class FavoritesService:
    """
    Service layer for favorites management.

    Handles:
    - movieId validation
    - Duplicate favorite prevention
    """

    def __init__(self, db: Session):
        self.db = db
        self.favorites_repo = FavoritesRepository(db)

    def add_favorite(self, user_id: int, movie_id: Any) -> FavoriteSchema:
        """
        Add a movie to the user's favorites.

        Raises:
            BadRequestError: If movie_id is missing or not an integer
            ConflictError: If the movie is already a favorite
        """
        movie_id = parse_movie_id(movie_id)

        try:
            favorite = self.favorites_repo.add_favorite(user_id, movie_id)
        except IntegrityError:
            raise ConflictError("Movie already in favorites")

        logger.info(f"User {user_id} added favorite: {movie_id}")
        return favorite

    def list_favorites(self, user_id: int) -> List[FavoriteSchema]:
        favorites = self.favorites_repo.get_user_favorites(user_id)
        # End the read transaction so the pooled connection is free while
        # the caller waits on TMDB
        self.db.rollback()
        return favorites
