"""
User Favorites Model

One row per (user, TMDB movie) pair. The unique constraint is what rejects
duplicate favorites, including two requests racing to add the same movie.
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.schema import UniqueConstraint

from movieapi.models.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserFavorite(Base):
    """A movie the user marked as favorite."""

    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_user_favorites_user_movie"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    movie_id: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="TMDB movie id"
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    user = relationship("User", back_populates="favorites")

    def __repr__(self):
        return f"<UserFavorite(user_id={self.user_id}, movie_id={self.movie_id})>"
