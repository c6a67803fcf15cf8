import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from movieapi.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
)
from movieapi.core.security import PasswordHasher, TokenService
from movieapi.repositories.user_repository import UserRepository
from movieapi.schemas.auth import AuthResult, UserPublic

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
USER_EXISTS = "User already exists with this email or username"


class AuthService:
    """Registration and password login."""

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        password_hasher: PasswordHasher,
    ):
        self.db = db
        self.user_repo = UserRepository(db)
        self.token_service = token_service
        self.password_hasher = password_hasher

    def _issue(self, user: UserPublic) -> AuthResult:
        token = self.token_service.issue(user_id=user.id, email=user.email)
        return AuthResult(user=user, token=token)

    def register(self, username: str, email: str, password: str) -> AuthResult:
        if not username or not email or not password:
            raise BadRequestError("All fields are required")

        if self.user_repo.find_by_email_or_username(email=email, username=username):
            raise ConflictError(USER_EXISTS)

        try:
            user = self.user_repo.create_user(
                username=username, email=email, password=password
            )
        except IntegrityError:
            # Lost a race with a concurrent registration
            raise ConflictError(USER_EXISTS)

        logger.info(f"Registered user {user.id} ({user.username})")
        return self._issue(user)

    def authenticate(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise BadRequestError("Email and password are required")

        credentials = self.user_repo.get_credentials_by_email(email)
        if credentials is None:
            # Same bcrypt cost as a real check so timing does not reveal the email
            self.password_hasher.dummy_verify()
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not self.password_hasher.verify(password, credentials.password):
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = UserPublic(
            id=credentials.id, username=credentials.username, email=credentials.email
        )
        return self._issue(user)
