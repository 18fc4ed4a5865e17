import pytest

from signet.core.exceptions import (
    AuthorizationError,
    ConflictError,
    DatabaseError,
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidTokenError,
    RefreshExhaustedError,
    ServiceError,
    SignetError,
    ValidationError,
)


def test_signet_error_carries_message_and_code():
    error = SignetError("Something broke", code="boom")
    assert error.message == "Something broke"
    assert error.code == "boom"
    assert str(error) == "Something broke"


def test_validation_error_joins_multiple_messages():
    error = ValidationError(["Email must be a valid email address.", "Password cannot be empty."])
    assert error.message == "Email must be a valid email address., Password cannot be empty."
    assert error.messages == ["Email must be a valid email address.", "Password cannot be empty."]
    assert error.code == "validation_error"


def test_validation_error_with_single_message():
    error = ValidationError("Email is required.")
    assert error.message == "Email is required."
    assert error.messages == ["Email is required."]


@pytest.mark.parametrize(
    "error_class,parent,code",
    [
        (DuplicateUserError, ConflictError, "duplicate_user_error"),
        (InvalidCredentialsError, AuthorizationError, "invalid_credentials"),
        (InvalidTokenError, AuthorizationError, "invalid_token"),
        (RefreshExhaustedError, AuthorizationError, "refresh_exhausted"),
        (DatabaseError, SignetError, "database_error"),
    ],
)
def test_error_families(error_class, parent, code):
    error = error_class("message")
    assert isinstance(error, parent)
    assert isinstance(error, SignetError)
    assert error.code == code


def test_service_error_keeps_status_code():
    error = ServiceError("Bad gateway", status_code=502)
    assert error.status_code == 502
    assert error.code == "service_error"
    assert ServiceError("offline", code="transport_error").status_code is None
