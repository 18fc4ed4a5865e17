"""Repository interfaces for abstracting data persistence in the domain layer.

The domain services depend on these ports; the SQLModel adapters in
`signet.infrastructure.repositories` implement them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from signet.domain.entities.session import RefreshSession
from signet.domain.entities.user import User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The unique integer ID of the user.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their (lowercase) email address."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: User) -> User:
        """Creates or updates a user and returns the persisted entity.

        Raises:
            DuplicateUserError: If the email is already taken.
            DatabaseError: If the write fails for any other reason.
        """
        raise NotImplementedError


class IRefreshSessionRepository(ABC):
    """Persistence contract for refresh-token sessions."""

    @abstractmethod
    async def add(self, session: RefreshSession) -> RefreshSession:
        raise NotImplementedError

    @abstractmethod
    async def get_by_jti(self, jti: str) -> Optional[RefreshSession]:
        raise NotImplementedError

    @abstractmethod
    async def revoke(self, jti: str, revoked_at: Optional[datetime] = None) -> bool:
        """Marks the session as revoked.

        Returns:
            True if an active session was revoked, False if none matched.
        """
        raise NotImplementedError
