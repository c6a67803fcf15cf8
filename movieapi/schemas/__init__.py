from .auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .favorites import FavoriteMovie, FavoriteSchema, FavoritesResponse
from .health import HealthCheckResponse
