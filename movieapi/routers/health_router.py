from datetime import datetime, timezone

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from movieapi.config import Settings
from movieapi.containers import Container
from movieapi.database.session import ping_db
from movieapi.deps import get_settings_dep
from movieapi.schemas.health import HealthCheckResponse

router = APIRouter()

FEATURES = [
    "Real movie data",
    "User authentication",
    "Favorites system",
    "TMDB integration",
]


@router.get("/health", response_model=HealthCheckResponse)
@inject
async def health_check(
    settings: Settings = Depends(get_settings_dep),
    engine: Engine = Depends(Provide[Container.repositories.engine]),
) -> HealthCheckResponse:
    """Liveness plus a store ping; a down store does not fail the check."""

    db_ok = await run_in_threadpool(ping_db, engine)
    return HealthCheckResponse(
        success=True,
        message="Backend server is running with real TMDB API integration!",
        timestamp=datetime.now(timezone.utc),
        environment=settings.ENVIRONMENT,
        features=FEATURES,
        database="connected" if db_ok else "unavailable",
    )
