"""Logout endpoint.

Revokes the refresh session if a refresh token is presented and always
clears the cookie. Logout succeeds even with no session, so the client can
drop its local state unconditionally.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Request, Response, status

from signet.adapters.api.v1.auth.schemas import MessageResponse, RefreshTokenRequest
from signet.adapters.api.v1.auth.utils import clear_refresh_cookie, read_refresh_token
from signet.infrastructure.dependency_injection.auth_dependencies import UserLogoutServiceDep
from signet.utils.i18n import get_translated_message

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Log out and revoke the refresh session",
)
async def logout_user(
    request: Request,
    response: Response,
    logout_service: UserLogoutServiceDep,
    payload: Optional[RefreshTokenRequest] = None,
) -> MessageResponse:
    await logout_service.logout(
        read_refresh_token(request, payload),
        correlation_id=getattr(request.state, "correlation_id", None),
    )
    clear_refresh_cookie(response)
    return MessageResponse(
        message=get_translated_message("logout_successful", request.state.language),
        timestamp=datetime.now(timezone.utc),
    )
