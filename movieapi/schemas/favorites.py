"""
Favorites Schemas

Pydantic models for the favorites endpoints and the repository layer.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from movieapi.schemas.auth import BaseResponse


class FavoriteSchema(BaseModel):
    """
    Basic favorite schema matching the database model.
    Used for repository layer conversions.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    movie_id: int
    added_at: datetime


class AddFavoriteRequest(BaseModel):
    # Accepts 550 or "550"; anything else fails validation
    movieId: Optional[Union[int, str]] = None


class FavoriteMovie(BaseModel):
    """A favorite resolved against the catalog."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    added_at: datetime = Field(..., alias="addedAt")


class FavoritesResponse(BaseResponse):
    favorites: List[FavoriteMovie]
