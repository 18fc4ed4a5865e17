"""User Repository implementation using SQLAlchemy.

Implements `IUserRepository` on top of an async session. Emails are stored
lowercase, so lookups normalise their input the same way. A unique-index
violation on insert (two registrations racing for one email) is translated
into `DuplicateUserError`; any other driver error becomes `DatabaseError`.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from signet.core.exceptions import DatabaseError, DuplicateUserError
from signet.core.logging import mask_email
from signet.domain.entities.user import User, utcnow
from signet.domain.interfaces.repositories import IUserRepository
from signet.utils.i18n import get_translated_message

logger = get_logger(__name__)


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of `IUserRepository`."""

    def __init__(self, db_session: AsyncSession):
        """Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session for database operations
        """
        self.db_session = db_session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID to search for (must be positive integer)

        Returns:
            User entity if found, None otherwise

        Raises:
            ValueError: If user_id is not positive
        """
        if user_id <= 0:
            logger.warning("invalid_user_id", user_id=user_id)
            raise ValueError("User ID must be a positive integer")

        statement = select(User).where(User.id == user_id)
        result = await self.db_session.execute(statement)
        user = result.scalars().first()
        logger.debug("user_lookup_by_id", user_id=user_id, found=user is not None)
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, case-insensitively.

        Returns:
            User entity if found, None otherwise
        """
        normalized = email.strip().lower()
        statement = select(User).where(User.email == normalized)
        result = await self.db_session.execute(statement)
        user = result.scalars().first()
        logger.debug("user_lookup_by_email", email=mask_email(normalized), found=user is not None)
        return user

    async def save(self, user: User) -> User:
        """Insert a new user or persist changes to an existing one.

        Args:
            user: User entity to save or update

        Returns:
            The saved user, refreshed from the database.

        Raises:
            DuplicateUserError: If the email violates the unique index.
            DatabaseError: For any other database failure.
        """
        if user is None:
            raise ValueError("User entity cannot be None")

        is_new = user.id is None
        if not is_new:
            user.updated_at = utcnow()
        self.db_session.add(user)

        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning("user_save_conflict", email=mask_email(user.email))
            raise DuplicateUserError(get_translated_message("email_already_registered")) from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("user_save_failed", error=str(e), error_type=type(e).__name__)
            raise DatabaseError(get_translated_message("database_error")) from e

        await self.db_session.refresh(user)
        logger.info(
            "user_saved",
            user_id=user.id,
            email=mask_email(user.email),
            operation="create" if is_new else "update",
        )
        return user
