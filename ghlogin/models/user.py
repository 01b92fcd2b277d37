"""User model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ghlogin.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ghlogin.models.session import Session


class User(Base, TimestampMixin):
    """A local account backed by a GitHub identity."""

    __tablename__ = "users"

    # Generated locally, 16 base32 characters
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # One local user per GitHub account
    github_id: Mapped[int] = mapped_column(unique=True, index=True)
    username: Mapped[str] = mapped_column(String(255))

    sessions: Mapped[list["Session"]] = relationship(
        "Session",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, github_id={self.github_id}, username={self.username})>"
