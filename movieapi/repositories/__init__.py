# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .user_repository import UserRepository, UserCredentials
from .favorites_repository import FavoritesRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "UserCredentials",
    "FavoritesRepository",
]
