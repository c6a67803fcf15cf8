"""Application configuration loaded from environment variables."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="movieapi/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "Movie Recommendation API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = False
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./movieapi.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Security
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7
    PASSWORD_HASH_ROUNDS: int = 12

    # TMDB
    TMDB_API_KEY: str = ""
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    TMDB_LANGUAGE: str = "en-US"
    TMDB_TIMEOUT_SECONDS: Optional[float] = None  # None = wait indefinitely

    # Favorites aggregation
    FAVORITES_MAX_CONCURRENCY: int = 0  # 0 = unbounded fan-out
    FAVORITES_LOOKUP_TIMEOUT: Optional[float] = None

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


class DevelopmentSettings(Settings):
    DEBUG: bool = True


class StagingSettings(Settings):
    DEBUG: bool = False


class ProductionSettings(Settings):
    DEBUG: bool = False


ENVIRONMENTS: dict[str, type[Settings]] = {
    "development": DevelopmentSettings,
    "staging": StagingSettings,
    "production": ProductionSettings,
}


@lru_cache
def get_settings() -> Settings:
    """Return settings instance based on ENVIRONMENT variable."""

    env = os.getenv("ENVIRONMENT", "development").lower()
    settings_cls = ENVIRONMENTS.get(env, DevelopmentSettings)
    return settings_cls()


settings = get_settings()
