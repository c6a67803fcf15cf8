from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from movieapi.config import Settings, settings


def create_db_engine(settings: Settings) -> Engine:
    if settings.is_sqlite:
        # SQLite connections are used from FastAPI's threadpool
        return create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            echo=settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
        )
    return create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG and settings.LOG_LEVEL.upper() == "DEBUG",
    )


engine = create_db_engine(settings)

# Use expire_on_commit=False to avoid DetachedInstanceError when accessing
# attributes after commit within the same request scope (common FastAPI pattern).
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)
