from typing import List

from sqlalchemy import BigInteger, Index, Integer, String, Text, event, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movieapi.core.security import get_password_hasher
from movieapi.models.base import TimestampedModel


class User(TimestampedModel):
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_username", "username"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Holds the bcrypt hash once flushed; see _hash_password_if_changed
    password: Mapped[str] = mapped_column(Text, nullable=False)

    favorites: Mapped[List["UserFavorite"]] = relationship(  # noqa: F821
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserFavorite.id",
    )
    watchlists: Mapped[List["Watchlist"]] = relationship(  # noqa: F821
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Watchlist.id",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"


def _hash_password_if_changed(mapper, connection, target: User) -> None:
    """Hash the password column whenever it was assigned in this flush."""
    history = inspect(target).attrs.password.history
    if not history.added:
        return
    target.password = get_password_hasher().hash(target.password)


event.listen(User, "before_insert", _hash_password_if_changed)
event.listen(User, "before_update", _hash_password_if_changed)
