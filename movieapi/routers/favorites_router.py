"""
Favorites Router

Authenticated endpoints for the current user's favorite movies.
"""

import logging
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends
from starlette.concurrency import run_in_threadpool

from movieapi.containers import Container
from movieapi.core.auth_middleware import get_current_user
from movieapi.core.exceptions import BaseAPIException, InternalServerError
from movieapi.deps import get_favorites_service
from movieapi.schemas.auth import MessageResponse, UserPublic
from movieapi.schemas.favorites import AddFavoriteRequest, FavoritesResponse
from movieapi.services.favorites_aggregator import FavoritesAggregator
from movieapi.services.favorites_service import FavoritesService

router = APIRouter(prefix="/users/favorites", tags=["favorites"])
logger = logging.getLogger(__name__)


@router.get("", response_model=FavoritesResponse)
@inject
async def get_my_favorites(
    current_user: UserPublic = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service),
    aggregator: FavoritesAggregator = Depends(
        Provide[Container.services.favorites_aggregator]
    ),
) -> FavoritesResponse:
    """
    Current user's favorites with live TMDB details.

    Movies TMDB fails to return are left out of the list.
    """
    try:
        favorites = await run_in_threadpool(
            favorites_service.list_favorites, current_user.id
        )
        movies = await aggregator.aggregate(favorites)
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"Get favorites error: {str(e)}")
        raise InternalServerError("Error fetching favorites", error=str(e))

    return FavoritesResponse(success=True, favorites=movies)


@router.post("", response_model=MessageResponse)
def add_favorite(
    payload: Optional[AddFavoriteRequest] = Body(None),
    current_user: UserPublic = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service),
) -> MessageResponse:
    payload = payload or AddFavoriteRequest()
    try:
        favorites_service.add_favorite(user_id=current_user.id, movie_id=payload.movieId)
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"Add favorite error: {str(e)}")
        raise InternalServerError("Error adding to favorites", error=str(e))

    return MessageResponse(success=True, message="Movie added to favorites")
