"""Password value objects.

`Password` wraps plaintext input and enforces the length rules; it is never
persisted. `HashedPassword` wraps the bcrypt hash that is.
"""

from dataclasses import dataclass
from typing import ClassVar

from signet.core.config.settings import settings
from signet.utils.i18n import get_translated_message
from signet.utils.security import BCRYPT_MAX_BYTES, hash_password, verify_password


@dataclass(frozen=True)
class Password:
    """Plaintext password that satisfies the configured length policy.

    Security Requirements:
        - Not empty
        - At least PASSWORD_MIN_LENGTH characters (8 by default)
        - At most 72 bytes once UTF-8 encoded, the most bcrypt hashes

    Attributes:
        value: The raw password string (immutable)
    """

    value: str

    MAX_BYTES: ClassVar[int] = BCRYPT_MAX_BYTES

    def __post_init__(self) -> None:
        """Validate password on construction.

        Raises:
            ValueError: If password doesn't meet the length requirements
        """
        if not self.value:
            raise ValueError(get_translated_message("password_empty"))

        min_length = settings.PASSWORD_MIN_LENGTH
        if len(self.value) < min_length:
            raise ValueError(get_translated_message("password_too_short", min_length=min_length))

        if len(self.value.encode("utf-8")) > self.MAX_BYTES:
            raise ValueError(get_translated_message("password_too_long", max_bytes=self.MAX_BYTES))

    def verify_against_hash(self, hashed_password: str) -> bool:
        """Verify this password against a bcrypt hash.

        Returns:
            bool: True if password matches the hash, False otherwise
        """
        return verify_password(self.value, hashed_password)

    def to_hashed(self) -> "HashedPassword":
        """Convert to hashed password."""
        return HashedPassword(value=hash_password(self.value))

    def __repr__(self) -> str:
        return "Password(value='***')"


@dataclass(frozen=True)
class HashedPassword:
    """Bcrypt hash of a password, safe to store.

    Attributes:
        value: The hashed password string (immutable)
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Hashed password cannot be empty")
        if not self.value.startswith(("$2a$", "$2b$", "$2y$")):
            raise ValueError("Invalid hashed password format")

    def __str__(self) -> str:
        return self.value
