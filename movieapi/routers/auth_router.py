import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from movieapi.core.exceptions import BaseAPIException, InternalServerError
from movieapi.deps import get_auth_service
from movieapi.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from movieapi.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: Optional[RegisterRequest] = Body(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account and return it with a session token."""
    payload = payload or RegisterRequest()
    try:
        result = auth_service.register(
            username=payload.username or "",
            email=payload.email or "",
            password=payload.password or "",
        )
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"Registration error: {str(e)}")
        raise InternalServerError("Registration failed", error=str(e))

    return AuthResponse(
        success=True,
        message="User registered successfully",
        user=result.user,
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: Optional[LoginRequest] = Body(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email + password for a session token."""
    payload = payload or LoginRequest()
    try:
        result = auth_service.authenticate(
            email=payload.email or "", password=payload.password or ""
        )
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"Login error: {str(e)}")
        raise InternalServerError("Login failed", error=str(e))

    return AuthResponse(
        success=True,
        message="Login successful",
        user=result.user,
        token=result.token,
    )
