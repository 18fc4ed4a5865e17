"""Refresh session repository.

Stores one row per issued refresh token so that tokens can be rotated and
revoked even though they are self-contained JWTs.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from signet.core.exceptions import DatabaseError
from signet.domain.entities.session import RefreshSession
from signet.domain.entities.user import utcnow
from signet.domain.interfaces.repositories import IRefreshSessionRepository
from signet.utils.i18n import get_translated_message

logger = get_logger(__name__)


class RefreshSessionRepository(IRefreshSessionRepository):
    """SQLAlchemy implementation of `IRefreshSessionRepository`."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def add(self, session: RefreshSession) -> RefreshSession:
        self.db_session.add(session)
        try:
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("refresh_session_add_failed", error=str(e), user_id=session.user_id)
            raise DatabaseError(get_translated_message("database_error")) from e
        await self.db_session.refresh(session)
        logger.debug("refresh_session_added", user_id=session.user_id, jti=session.jti[:8] + "***")
        return session

    async def get_by_jti(self, jti: str) -> Optional[RefreshSession]:
        statement = (
            select(RefreshSession)
            .where(RefreshSession.jti == jti)
            .execution_options(populate_existing=True)
        )
        result = await self.db_session.execute(statement)
        return result.scalars().first()

    async def revoke(self, jti: str, revoked_at: Optional[datetime] = None) -> bool:
        """Revoke the active session with `jti`.

        The update only matches rows whose `revoked_at` is still null, so a
        token replayed concurrently can be revoked (and rotated) only once.

        Returns:
            True if a session was revoked by this call.
        """
        statement = (
            update(RefreshSession)
            .where(RefreshSession.jti == jti, RefreshSession.revoked_at.is_(None))
            .values(revoked_at=revoked_at or utcnow())
        )
        try:
            result = await self.db_session.execute(statement)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("refresh_session_revoke_failed", error=str(e))
            raise DatabaseError(get_translated_message("database_error")) from e

        revoked = result.rowcount > 0
        logger.debug("refresh_session_revoked", jti=jti[:8] + "***", revoked=revoked)
        return revoked
