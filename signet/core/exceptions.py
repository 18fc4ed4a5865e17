"""Centralized, structured exception hierarchy for signet.

Every exception carries a machine-readable `code` for programmatic handling
and a human-readable `message` suitable for logging and for showing to the
user. The same hierarchy is shared by the API (where handlers map each family
to an HTTP status) and by the client (where HTTP statuses are mapped back to
these classes), so both sides speak one error vocabulary:

- `ValidationError`        400 / 422, malformed registration or login input
- `ConflictError`          409, duplicate registration
- `AuthorizationError`     401, bad credentials or invalid/expired token
- `RefreshExhaustedError`  the refresh exchange itself failed (client only)
"""

from __future__ import annotations

from typing import Final, Optional

__all__: Final = [
    "SignetError",
    "ValidationError",
    "ConflictError",
    "DuplicateUserError",
    "AuthorizationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "RefreshExhaustedError",
    "DatabaseError",
    "ServiceError",
]


class SignetError(Exception):
    """Base exception class for all custom errors in signet.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (400 Bad Request / 422 Unprocessable Entity)
# ---------------------------------------------------------------------------


class ValidationError(SignetError):
    """Raised when registration or login input is malformed.

    `messages` keeps every individual problem; `message` is the list joined
    with ", " so it can be shown verbatim.
    """

    def __init__(
        self,
        message: str | list[str],
        code: str = "validation_error",
    ):
        if isinstance(message, (list, tuple)):
            self.messages = [str(m) for m in message]
            message = ", ".join(self.messages)
        else:
            self.messages = [message]
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Conflict errors (409 Conflict)
# ---------------------------------------------------------------------------


class ConflictError(SignetError):
    """Raised when a write collides with existing state."""

    def __init__(self, message: str, code: str = "conflict"):
        super().__init__(message, code)


class DuplicateUserError(ConflictError):
    """Raised when registering an email address that is already taken."""

    def __init__(self, message: str, code: str = "duplicate_user_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Authorization errors (401 Unauthorized)
# ---------------------------------------------------------------------------


class AuthorizationError(SignetError):
    """Raised for bad credentials or a missing, invalid or expired token.

    This is the base of every failure that maps to `401 Unauthorized`.
    """

    def __init__(self, message: str, code: str = "authorization_error"):
        super().__init__(message, code)


class InvalidCredentialsError(AuthorizationError):
    """Raised when an email/password pair does not match an active account.

    The message is identical for unknown emails and wrong passwords to
    prevent user enumeration.
    """

    def __init__(self, message: str, code: str = "invalid_credentials"):
        super().__init__(message, code)


class InvalidTokenError(AuthorizationError):
    """Raised when an access or refresh token fails verification."""

    def __init__(self, message: str, code: str = "invalid_token"):
        super().__init__(message, code)


class RefreshExhaustedError(AuthorizationError):
    """Raised by the client when the refresh exchange itself fails.

    Terminal: the held credential has been cleared and the user must log in
    again.
    """

    def __init__(self, message: str, code: str = "refresh_exhausted"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Infrastructure errors (500 / unexpected statuses)
# ---------------------------------------------------------------------------


class DatabaseError(SignetError):
    """Raised for low-level database interaction errors.

    Wraps driver errors so callers never see implementation details. Maps to
    `500 Internal Server Error`.
    """

    def __init__(self, message: str, code: str = "database_error"):
        super().__init__(message, code)


class ServiceError(SignetError):
    """Raised by the client for unexpected HTTP statuses or transport failures.

    Attributes:
        status_code: The HTTP status, or None when no response was received.
    """

    def __init__(
        self,
        message: str,
        code: str = "service_error",
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        super().__init__(message, code)
