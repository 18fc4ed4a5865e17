from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from signet.domain.entities.session import RefreshSession
from signet.domain.entities.user import User
from signet.infrastructure.repositories.session_repository import RefreshSessionRepository
from signet.infrastructure.repositories.user_repository import UserRepository
from signet.utils.security import fingerprint_token, hash_password


@pytest_asyncio.fixture
async def user(db_session):
    return await UserRepository(db_session).save(
        User(email="ada@example.com", hashed_password=hash_password("password1"))
    )


def _refresh_session(user_id: int, jti: str = "jti-1") -> RefreshSession:
    now = datetime.now(timezone.utc)
    return RefreshSession(
        jti=jti,
        user_id=user_id,
        refresh_token_hash=fingerprint_token(f"token-{jti}"),
        created_at=now,
        expires_at=now + timedelta(days=7),
    )


@pytest.mark.asyncio
async def test_add_and_get_by_jti(db_session, user):
    repository = RefreshSessionRepository(db_session)

    added = await repository.add(_refresh_session(user.id))
    found = await repository.get_by_jti("jti-1")

    assert added.id is not None
    assert found is not None
    assert found.user_id == user.id
    assert found.refresh_token_hash == fingerprint_token("token-jti-1")
    assert found.is_active()


@pytest.mark.asyncio
async def test_get_unknown_jti_returns_none(db_session):
    assert await RefreshSessionRepository(db_session).get_by_jti("missing") is None


@pytest.mark.asyncio
async def test_revoke_only_once(db_session, user):
    repository = RefreshSessionRepository(db_session)
    await repository.add(_refresh_session(user.id))

    assert await repository.revoke("jti-1") is True
    assert await repository.revoke("jti-1") is False

    session = await repository.get_by_jti("jti-1")
    await db_session.refresh(session)
    assert session.revoked_at is not None
    assert not session.is_active()


@pytest.mark.asyncio
async def test_revoke_unknown_jti(db_session):
    assert await RefreshSessionRepository(db_session).revoke("missing") is False
