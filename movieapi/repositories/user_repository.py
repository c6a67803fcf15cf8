from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import or_
from sqlalchemy.orm import Session

from movieapi.models.user import User as UserModel
from movieapi.schemas.auth import UserPublic
from movieapi.repositories.base import BaseRepository


class UserCredentials(BaseModel):
    """Internal projection that includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    password: str


class UserRepository(BaseRepository[UserModel, UserPublic]):
    """User accounts. Password hashes only leave through get_credentials_by_email."""

    def __init__(self, db: Session):
        super().__init__(UserModel, UserPublic, db)

    def get_by_id(self, id: int) -> Optional[UserPublic]:
        # Select only public columns so the hash is never loaded
        row = (
            self.db.query(UserModel.id, UserModel.username, UserModel.email)
            .filter(UserModel.id == id)
            .first()
        )
        return self._to_schema(row)

    def find_by_email_or_username(
        self, email: str, username: str
    ) -> Optional[UserPublic]:
        """Single lookup matching either unique key."""
        model_instance = (
            self.db.query(self.model_class)
            .filter(
                or_(
                    self.model_class.email == email,
                    self.model_class.username == username,
                )
            )
            .first()
        )
        return self._to_schema(model_instance)

    def get_credentials_by_email(self, email: str) -> Optional[UserCredentials]:
        model_instance = (
            self.db.query(self.model_class)
            .filter(self.model_class.email == email)
            .first()
        )
        if model_instance is None:
            return None
        return UserCredentials.model_validate(model_instance)

    def create_user(
        self, username: str, email: str, password: str
    ) -> Optional[UserPublic]:
        """Insert a user; the plaintext password is hashed on flush."""
        return self.create(username=username, email=email, password=password)
