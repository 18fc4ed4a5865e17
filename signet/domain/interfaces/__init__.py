"""Domain interfaces (ports) implemented by the infrastructure layer."""

from .repositories import IRefreshSessionRepository, IUserRepository

__all__ = ["IUserRepository", "IRefreshSessionRepository"]
