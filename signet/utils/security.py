"""Security utilities for password hashing and token fingerprints.

Passwords are hashed with bcrypt through passlib; refresh tokens are stored
only as SHA-256 fingerprints so a database leak never exposes a usable token.
"""

import hashlib

from passlib.context import CryptContext

from signet.core.config.settings import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# bcrypt ignores everything past this many bytes of input.
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        str: Bcrypt-hashed password
    """
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Malformed hashes verify as False instead of raising, so a corrupted row
    reads like a wrong password. Input longer than BCRYPT_MAX_BYTES never
    verifies, since bcrypt would compare only its prefix.

    Args:
        password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        bool: True if password matches hash
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError):
        return False


def fingerprint_token(token: str) -> str:
    """Return the hex SHA-256 digest under which a refresh token is stored."""
    return hashlib.sha256(token.encode()).hexdigest()
