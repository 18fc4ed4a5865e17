"""Helpers shared by the authentication routes.

The refresh token is carried in an HTTP-only cookie so that browser scripts
never see it. Non-browser clients may send it in the JSON body instead.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response

from signet.adapters.api.v1.auth.schemas import RefreshTokenRequest
from signet.core.config.settings import settings


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Attach the refresh token cookie to `response`."""
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path=settings.REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.REFRESH_COOKIE_SECURE,
        samesite=settings.REFRESH_COOKIE_SAMESITE,
    )


def clear_refresh_cookie(response: Response) -> None:
    """Expire the refresh token cookie on the client."""
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path=settings.REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.REFRESH_COOKIE_SECURE,
        samesite=settings.REFRESH_COOKIE_SAMESITE,
    )


def read_refresh_token(request: Request, payload: Optional[RefreshTokenRequest]) -> Optional[str]:
    """Return the refresh token from the body, falling back to the cookie."""
    if payload is not None and payload.refresh_token:
        return payload.refresh_token
    return request.cookies.get(settings.REFRESH_COOKIE_NAME) or None
