from .session_repository import RefreshSessionRepository
from .user_repository import UserRepository

__all__ = ["UserRepository", "RefreshSessionRepository"]
