"""Domain entities persisted as SQLModel tables."""

from .session import RefreshSession
from .user import User

__all__ = ["User", "RefreshSession"]
