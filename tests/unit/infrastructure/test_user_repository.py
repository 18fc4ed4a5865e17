from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from signet.core.exceptions import DatabaseError, DuplicateUserError
from signet.domain.entities.user import User
from signet.infrastructure.repositories.user_repository import UserRepository
from signet.utils.security import hash_password


def _user(email: str = "ada@example.com", name: str = "Ada") -> User:
    return User(email=email, name=name, hashed_password=hash_password("password1"))


@pytest.mark.asyncio
async def test_save_assigns_id_and_timestamps(db_session):
    repository = UserRepository(db_session)

    user = await repository.save(_user())

    assert user.id is not None
    assert user.created_at is not None
    assert user.updated_at is None
    assert user.is_active is True


@pytest.mark.asyncio
async def test_get_by_email_is_case_insensitive(db_session):
    repository = UserRepository(db_session)
    saved = await repository.save(_user())

    found = await repository.get_by_email("  ADA@Example.com ")

    assert found is not None
    assert found.id == saved.id


@pytest.mark.asyncio
async def test_get_by_id(db_session):
    repository = UserRepository(db_session)
    saved = await repository.save(_user())

    assert (await repository.get_by_id(saved.id)).email == "ada@example.com"
    assert await repository.get_by_id(saved.id + 1000) is None


@pytest.mark.asyncio
async def test_get_by_id_rejects_non_positive_ids(db_session):
    with pytest.raises(ValueError):
        await UserRepository(db_session).get_by_id(0)


@pytest.mark.asyncio
async def test_duplicate_email_raises_duplicate_user_error(db_session):
    repository = UserRepository(db_session)
    await repository.save(_user())

    with pytest.raises(DuplicateUserError):
        await repository.save(_user(name="Someone Else"))


@pytest.mark.asyncio
async def test_update_sets_updated_at(db_session):
    repository = UserRepository(db_session)
    user = await repository.save(_user())

    user.name = "Augusta Ada King"
    updated = await repository.save(user)

    assert updated.name == "Augusta Ada King"
    assert updated.updated_at is not None


@pytest.mark.asyncio
async def test_driver_errors_become_database_error():
    db_session = AsyncMock()
    db_session.add = MagicMock()
    db_session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

    with pytest.raises(DatabaseError):
        await UserRepository(db_session).save(_user())
    db_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_save_none_is_rejected(db_session):
    with pytest.raises(ValueError):
        await UserRepository(db_session).save(None)
