# Import every model so Base.metadata knows all tables before create_all
from .base import Base
from .user import User
from .user_favorites import UserFavorite
from .watchlist import Watchlist, WatchlistMovie

__all__ = ["Base", "User", "UserFavorite", "Watchlist", "WatchlistMovie"]
