"""SQLAlchemy models."""

from ghlogin.models.base import Base
from ghlogin.models.session import Session
from ghlogin.models.user import User

__all__ = [
    "Base",
    "Session",
    "User",
]
