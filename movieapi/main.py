import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from movieapi import containers
from movieapi.config import settings
from movieapi.core.exception_handlers import (
    handle_base_api_exception,
    handle_http_exception,
    handle_unexpected_error,
    handle_validation_error,
)
from movieapi.core.exceptions import BaseAPIException
from movieapi.core.logging_middleware import LoggingMiddleware
from movieapi.database.session import init_db, ping_db
from movieapi.logging_config import setup_logging
from movieapi.routers import auth_router, favorites_router, health_router, movies_router

load_dotenv("movieapi/.env")
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("movieapi")


def _configured(value: str) -> str:
    return "Configured" if value else "Not configured"


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: containers.Container = app.container  # type: ignore[attr-defined]
    config = container.config.config()
    engine = container.repositories.engine()

    logger.info(f"Movie API starting on port {config.PORT}")
    logger.info(f"Environment: {config.ENVIRONMENT}")
    logger.info(f"TMDB API: {_configured(config.TMDB_API_KEY)}")
    logger.info(f"TMDB images: {config.TMDB_IMAGE_BASE_URL}")
    logger.info(f"JWT Secret: {_configured(config.JWT_SECRET)}")
    logger.info(f"Database: {_configured(config.DATABASE_URL)}")

    # A store that is down at startup is logged; requests that need it fail on their own
    try:
        init_db(engine)
        if ping_db(engine):
            logger.info("Database connected successfully")
    except Exception as e:
        logger.error(f"Database connection error: {e}")

    yield

    await container.services.tmdb_client().aclose()
    engine.dispose()
    logger.info("Movie API stopped")


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.container = containers.Container()  # type: ignore

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(BaseAPIException, handle_base_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router, prefix=settings.API_PREFIX)
    app.include_router(movies_router.router, prefix=settings.API_PREFIX)
    app.include_router(auth_router.router, prefix=settings.API_PREFIX)
    app.include_router(favorites_router.router, prefix=settings.API_PREFIX)
    return app


app = create_app()

handler = Mangum(app)


if __name__ == "__main__":
    uvicorn.run("movieapi.main:app", host="0.0.0.0", port=settings.PORT)
