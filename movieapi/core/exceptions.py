from fastapi import HTTPException, status
from typing import Optional, Dict, Any


class BaseAPIException(HTTPException):
    """Base exception for API errors"""
    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error = error

        detail: Dict[str, Any] = {"success": False, "message": message}
        if error:
            detail["error"] = error

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message


class BadRequestError(BaseAPIException):
    """Missing or malformed request input"""
    def __init__(self, message: str = "Bad request", error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            error=error,
        )


class AuthenticationError(BaseAPIException):
    """Authentication related errors"""
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictError(BaseAPIException):
    """Resource conflict errors (duplicate user, duplicate favorite)"""
    def __init__(self, message: str = "Resource conflict"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
        )


class UpstreamUnavailableError(BaseAPIException):
    """The movie catalog API failed or could not be reached"""
    def __init__(
        self,
        message: str = "Upstream service unavailable",
        error: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ):
        self.upstream_status = upstream_status
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            error=error,
        )

    def with_message(self, message: str) -> "UpstreamUnavailableError":
        """Same upstream failure, re-labelled for the endpoint that hit it."""
        return UpstreamUnavailableError(
            message=message, error=self.error, upstream_status=self.upstream_status
        )


class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=message,
            error=error,
        )


class InvalidTokenError(Exception):
    """Raised by the token verifier; translated to 401 by the auth gate."""
    pass
