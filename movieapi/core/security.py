from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from movieapi.config import get_settings
from movieapi.core.exceptions import InvalidTokenError


class PasswordHasher:
    """bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: Optional[str]) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            # Not a recognizable bcrypt hash
            return False

    def dummy_verify(self) -> None:
        """Spend one verification's worth of CPU without a real hash."""
        self._context.dummy_verify()


class TokenPayload(BaseModel):
    user_id: int
    sub: str  # subject, the user's email


class TokenData(BaseModel):
    user_id: int
    email: str


class TokenService:
    """Issues and verifies HS256 session tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    def issue(
        self, user_id: int, email: str, expires_delta: Optional[timedelta] = None
    ) -> str:
        issued_at = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(days=self.expire_days)
        to_encode = {
            "sub": email,
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenData:
        """Return the token's claims or raise InvalidTokenError."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            token_data = TokenPayload.model_validate(payload)
        except (JWTError, ValidationError) as exc:
            raise InvalidTokenError(str(exc)) from exc
        return TokenData(user_id=token_data.user_id, email=token_data.sub)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().PASSWORD_HASH_ROUNDS)
