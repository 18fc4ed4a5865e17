"""Token refresh endpoint.

Exchanges a refresh token (cookie or body) for a new access token. The
refresh token is rotated: the presented one is revoked and a new one is set
in the cookie. `/refresh` is an alias of `/refresh-token`.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Request, Response, status

from signet.adapters.api.v1.auth.schemas import AccessTokenResponse, RefreshTokenRequest
from signet.adapters.api.v1.auth.utils import read_refresh_token, set_refresh_cookie
from signet.core.exceptions import InvalidTokenError
from signet.infrastructure.dependency_injection.auth_dependencies import TokenServiceDep
from signet.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "/refresh-token",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh the access token",
)
@router.post("/refresh", response_model=AccessTokenResponse, include_in_schema=False)
async def refresh_access_token(
    request: Request,
    response: Response,
    token_service: TokenServiceDep,
    payload: Optional[RefreshTokenRequest] = None,
) -> AccessTokenResponse:
    """Issue a new access token from a valid refresh token.

    Raises:
        InvalidTokenError: Missing, invalid, expired, revoked or already used
            refresh token (401).
    """
    language = request.state.language
    refresh_token = read_refresh_token(request, payload)
    if not refresh_token:
        logger.info("refresh_without_token")
        raise InvalidTokenError(get_translated_message("refresh_token_missing", language))

    tokens = await token_service.refresh_tokens(refresh_token, language)

    set_refresh_cookie(response, tokens["refresh_token"])
    return AccessTokenResponse(
        access_token=tokens["access_token"],
        token_type=tokens["token_type"],
        expires_in=tokens["expires_in"],
    )
