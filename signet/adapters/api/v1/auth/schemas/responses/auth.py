"""Response models for login, refresh and the protected profile route."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from signet.adapters.api.v1.auth.schemas.base import CamelModel
from signet.adapters.api.v1.auth.schemas.responses.user import UserOut
from signet.domain.value_objects.jwt_token import AccessTokenClaims


class AccessTokenResponse(CamelModel):
    """A freshly issued access token.

    The refresh token is not part of the body; it travels in the
    HTTP-only cookie.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds.")


class AuthResponse(AccessTokenResponse):
    """Body of a successful login."""

    user: UserOut


class AuthenticatedUser(CamelModel):
    sub: str
    email: str
    name: Optional[str] = None
    iat: int

    @classmethod
    def from_claims(cls, claims: AccessTokenClaims) -> "AuthenticatedUser":
        return cls(**claims.to_public_dict())


class ProfileResponse(CamelModel):
    message: str
    authenticated_user: AuthenticatedUser
