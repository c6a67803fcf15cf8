"""
Favorites Repository

All methods return Pydantic schemas, never SQLAlchemy models.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from movieapi.models.user_favorites import UserFavorite
from movieapi.schemas.favorites import FavoriteSchema
from movieapi.repositories.base import BaseRepository


class FavoritesRepository(BaseRepository[UserFavorite, FavoriteSchema]):
    """Repository for user favorites operations."""

    def __init__(self, db: Session):
        super().__init__(
            model_class=UserFavorite,
            schema_class=FavoriteSchema,
            db=db
        )

    def add_favorite(self, user_id: int, movie_id: int) -> Optional[FavoriteSchema]:
        """
        Insert a favorite.

        No read-before-write: a duplicate (user_id, movie_id) raises
        IntegrityError from the unique constraint.
        """
        return self.create(user_id=user_id, movie_id=movie_id, commit=True)

    def get_user_favorites(self, user_id: int) -> List[FavoriteSchema]:
        """Favorites in the order they were added."""
        return self.find_all(filters={"user_id": user_id}, order_by="id")
