"""User Registration Domain Service.

Validates registration input through the Email and Password value objects,
rejects duplicate emails and stores the user with a bcrypt-hashed password.
"""

from typing import List, Optional

import structlog

from signet.core.exceptions import DuplicateUserError, ValidationError
from signet.domain.entities.user import User
from signet.domain.interfaces.repositories import IUserRepository
from signet.domain.value_objects.email import Email
from signet.domain.value_objects.password import Password
from signet.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)

NAME_MAX_LENGTH = 100


class UserRegistrationService:
    """Domain service for user registration operations.

    Responsibilities:
    - Validate and normalize the email, password and optional name
    - Check email availability
    - Hash the password and persist the new user

    The stored record never contains the plaintext password.
    """

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def register_user(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        language: str = "en",
        correlation_id: Optional[str] = None,
    ) -> User:
        """Register a new user.

        Args:
            email: Raw email input; normalized to lowercase.
            password: Plaintext password; only its hash is stored.
            name: Optional display name. Blank names are stored as None.
            language: Language code for error messages.
            correlation_id: Optional correlation ID for tracking.

        Returns:
            User: Newly created user entity

        Raises:
            ValidationError: If any field is malformed; every problem is reported.
            DuplicateUserError: If the email is already registered.
        """
        errors: List[str] = []
        email_vo: Optional[Email] = None
        password_vo: Optional[Password] = None

        try:
            email_vo = Email(email)
        except (TypeError, ValueError):
            errors.append(get_translated_message("email_invalid", language))
        try:
            password_vo = Password(password)
        except ValueError as e:
            errors.append(str(e))

        display_name = name.strip() if name else None
        if display_name and len(display_name) > NAME_MAX_LENGTH:
            errors.append(get_translated_message("name_too_long", language, max_length=NAME_MAX_LENGTH))

        if errors:
            logger.warning("registration_validation_failed", errors=len(errors), correlation_id=correlation_id)
            raise ValidationError(errors)

        if not await self.check_email_availability(str(email_vo)):
            logger.warning(
                "registration_duplicate_email",
                email=email_vo.mask_for_logging(),
                correlation_id=correlation_id,
            )
            raise DuplicateUserError(get_translated_message("email_already_registered", language))

        user = User(
            email=str(email_vo),
            name=display_name or None,
            hashed_password=str(password_vo.to_hashed()),
        )
        saved_user = await self._user_repository.save(user)

        logger.info(
            "user_registered",
            user_id=saved_user.id,
            email=email_vo.mask_for_logging(),
            correlation_id=correlation_id,
        )
        return saved_user

    async def check_email_availability(self, email: str) -> bool:
        """True when no account uses `email` yet."""
        return await self._user_repository.get_by_email(email) is None
