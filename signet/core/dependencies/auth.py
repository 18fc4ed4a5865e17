from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from signet.core.exceptions import AuthorizationError
from signet.domain.services.auth.token import TokenService
from signet.domain.value_objects.jwt_token import AccessTokenClaims
from signet.infrastructure.dependency_injection.auth_dependencies import get_token_service
from signet.utils.i18n import get_translated_message

__all__ = [
    "get_current_claims",
    "CurrentClaims",
]

# auto_error is off so a missing header goes through the 401 handler
# instead of FastAPI's built-in response.
bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


async def get_current_claims(
    request: Request,
    credentials: BearerCredentials,
    token_service: TokenService = Depends(get_token_service),
) -> AccessTokenClaims:
    """Return the verified claims of the request's bearer access token.

    Verification is stateless: no database lookup is made, the token's
    signature and expiry are the whole check.

    Raises:
        AuthorizationError: If the header is missing or not a bearer token.
        InvalidTokenError: If the token fails verification.
    """
    language = getattr(request.state, "language", "en")
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthorizationError(get_translated_message("missing_bearer_token", language))
    return token_service.decode_access_token(credentials.credentials, language)


CurrentClaims = Annotated[AccessTokenClaims, Depends(get_current_claims)]
