from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class BaseResponse(BaseModel):
    success: bool = True


class MessageResponse(BaseResponse):
    message: str


class UserPublic(BaseModel):
    """User projection that is safe to return to clients (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class RegisterRequest(BaseModel):
    # Optional so a missing field becomes "All fields are required" instead of a 422
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username", "email")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v


class AuthResult(BaseModel):
    user: UserPublic
    token: str


class AuthResponse(MessageResponse):
    user: UserPublic
    token: str
