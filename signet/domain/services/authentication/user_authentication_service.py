"""User Authentication Domain Service.

Verifies an email/password pair against the stored bcrypt hash. Unknown
emails, wrong passwords and inactive accounts all fail with the same
`InvalidCredentialsError` message so that responses cannot be used to
enumerate accounts.
"""

from typing import Optional

import structlog

from signet.core.exceptions import InvalidCredentialsError
from signet.core.logging import mask_email
from signet.domain.entities.user import User
from signet.domain.interfaces.repositories import IUserRepository
from signet.utils.i18n import get_translated_message
from signet.utils.security import verify_password

logger = structlog.get_logger(__name__)


class UserAuthenticationService:
    """Domain service for login."""

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def authenticate_user(
        self,
        email: str,
        password: str,
        language: str = "en",
        correlation_id: Optional[str] = None,
    ) -> User:
        """Authenticate a user by email and password.

        Args:
            email: Email as typed by the user; matched case-insensitively.
            password: Plaintext password.
            language: Language code for error messages.
            correlation_id: Request correlation ID for tracing.

        Returns:
            User: The authenticated, active user.

        Raises:
            InvalidCredentialsError: For an unknown email, a wrong password or
                an inactive account.
        """
        normalized = (email or "").strip().lower()
        user = await self._user_repository.get_by_email(normalized) if normalized else None

        if user is None or not password or not verify_password(password, user.hashed_password):
            logger.warning(
                "authentication_failed",
                email=mask_email(normalized),
                reason="invalid_credentials",
                correlation_id=correlation_id,
            )
            raise InvalidCredentialsError(get_translated_message("invalid_credentials", language))

        if not user.is_active:
            logger.warning(
                "authentication_failed",
                user_id=user.id,
                reason="inactive_account",
                correlation_id=correlation_id,
            )
            raise InvalidCredentialsError(get_translated_message("invalid_credentials", language))

        logger.info("user_authenticated", user_id=user.id, correlation_id=correlation_id)
        return user
