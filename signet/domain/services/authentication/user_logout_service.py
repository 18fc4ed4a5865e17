"""User Logout Domain Service.

Logout revokes the refresh session behind the presented refresh token, if
there is one. It never fails: a missing or invalid token simply means there
is nothing to revoke.
"""

from typing import Optional

import structlog

from signet.domain.services.auth.token import TokenService

logger = structlog.get_logger(__name__)


class UserLogoutService:
    def __init__(self, token_service: TokenService):
        self._token_service = token_service

    async def logout(
        self,
        refresh_token: Optional[str],
        correlation_id: Optional[str] = None,
    ) -> bool:
        """Revoke the server-side session for `refresh_token`.

        Returns:
            True if a session was revoked, False if there was none to revoke.
        """
        if not refresh_token:
            logger.info("logout_without_session", correlation_id=correlation_id)
            return False

        revoked = await self._token_service.revoke_refresh_token(refresh_token)
        logger.info("user_logged_out", session_revoked=revoked, correlation_id=correlation_id)
        return revoked
