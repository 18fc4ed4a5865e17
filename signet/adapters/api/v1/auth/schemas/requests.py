"""Request-payload Pydantic models for authentication endpoints.

Format errors raised here surface as `422` responses whose `detail` lists
each message verbatim.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from signet.adapters.api.v1.auth.schemas.base import CamelModel
from signet.domain.services.authentication.user_registration_service import NAME_MAX_LENGTH
from signet.domain.value_objects.email import Email
from signet.domain.value_objects.password import Password
from signet.utils.i18n import get_translated_message


def _require(value: str, field: str) -> str:
    if not value or not value.strip():
        raise ValueError(get_translated_message("field_required", field=field))
    return value


class RegisterRequest(CamelModel):
    """Payload expected by ``POST /authentication/register``."""

    email: str = Field(..., examples=["ada@example.com"])
    password: str = Field(..., examples=["password1"])
    name: Optional[str] = Field(default=None, examples=["Ada Lovelace"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return str(Email(value))

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return Password(value).value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if len(value) > NAME_MAX_LENGTH:
            raise ValueError(get_translated_message("name_too_long", max_length=NAME_MAX_LENGTH))
        return value


class LoginRequest(CamelModel):
    """Payload expected by ``POST /authentication/login``.

    Only presence is checked here; a malformed email simply fails to match
    an account.
    """

    email: str = Field(..., examples=["ada@example.com"])
    password: str = Field(..., examples=["password1"])

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _require(value, "Email").strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _require(value, "Password")


class RefreshTokenRequest(CamelModel):
    """Optional body of the refresh and logout endpoints.

    Browsers send the refresh token as a cookie; other clients may send it
    here instead.
    """

    refresh_token: Optional[str] = Field(default=None, examples=["eyJhbGciOiJIUzI1NiIs..."])
