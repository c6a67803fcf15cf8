from dependency_injector import containers, providers

from movieapi.config import get_settings
from movieapi.core.security import TokenService, get_password_hasher
from movieapi.database.connection import engine
from movieapi.providers.tmdb import TMDBClient
from movieapi.services.favorites_aggregator import FavoritesAggregator
from movieapi.services.movie_service import MovieService


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(get_settings)


class RepositoryModule(containers.DeclarativeContainer):
    """Store handle shared by all requests."""

    engine = providers.Object(engine)


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies."""

    config = providers.DependenciesContainer()

    password_hasher = providers.Singleton(get_password_hasher)
    token_service = providers.Singleton(
        TokenService,
        secret_key=config.config.provided.JWT_SECRET,
        algorithm=config.config.provided.JWT_ALGORITHM,
        expire_days=config.config.provided.JWT_EXPIRE_DAYS,
    )
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.config.provided.TMDB_API_KEY,
        base_url=config.config.provided.TMDB_BASE_URL,
        language=config.config.provided.TMDB_LANGUAGE,
        timeout=config.config.provided.TMDB_TIMEOUT_SECONDS,
    )
    movie_service = providers.Factory(MovieService, catalog_client=tmdb_client)
    favorites_aggregator = providers.Factory(
        FavoritesAggregator,
        catalog_client=tmdb_client,
        max_concurrency=config.config.provided.FAVORITES_MAX_CONCURRENCY,
        lookup_timeout=config.config.provided.FAVORITES_LOOKUP_TIMEOUT,
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "movieapi.deps",
            "movieapi.routers.health_router",
            "movieapi.routers.favorites_router",
            "movieapi.routers.movies_router",
        ],
    )

    config = providers.Container(ConfigModule)
    repositories = providers.Container(RepositoryModule)
    services = providers.Container(ServiceModule, config=config)
