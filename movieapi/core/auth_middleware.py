import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from movieapi.core.exceptions import AuthenticationError, InvalidTokenError
from movieapi.core.security import TokenService
from movieapi.database.session import get_db
from movieapi.deps import get_token_service
from movieapi.repositories.user_repository import UserRepository
from movieapi.schemas.auth import UserPublic

logger = logging.getLogger(__name__)

# Bearer scheme; a missing or non-Bearer header yields None instead of a 403
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> UserPublic:
    """Require a valid bearer token and resolve it to a user."""
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Access token required")

    try:
        token_data = token_service.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        raise AuthenticationError("Invalid token")

    user = UserRepository(db).get_by_id(token_data.user_id)
    if not user:
        raise AuthenticationError("Invalid token")

    request.state.user = user
    return user

