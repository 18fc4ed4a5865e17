from unittest.mock import AsyncMock

import pytest

from signet.core.exceptions import InvalidCredentialsError
from signet.domain.interfaces.repositories import IUserRepository
from signet.domain.services.authentication import UserAuthenticationService
from tests.factories.user import create_fake_user


@pytest.fixture
def user():
    return create_fake_user(id=7, email="ada@example.com", password="password1")


@pytest.fixture
def user_repository(user):
    repository = AsyncMock(spec=IUserRepository)
    repository.get_by_email.return_value = user
    return repository


@pytest.fixture
def service(user_repository):
    return UserAuthenticationService(user_repository)


@pytest.mark.asyncio
async def test_authenticate_user_success(service, user_repository, user):
    authenticated = await service.authenticate_user(" ADA@example.com", "password1")

    assert authenticated is user
    user_repository.get_by_email.assert_awaited_once_with("ada@example.com")


@pytest.mark.asyncio
async def test_wrong_password_fails_every_time(service):
    for _ in range(3):
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
            await service.authenticate_user("ada@example.com", "wrong-password")


@pytest.mark.asyncio
async def test_unknown_email_fails_with_the_same_message(service, user_repository):
    user_repository.get_by_email.return_value = None

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await service.authenticate_user("nobody@example.com", "password1")
    assert exc_info.value.message == "Invalid credentials"


@pytest.mark.asyncio
async def test_inactive_account_is_rejected(service, user):
    user.is_active = False

    with pytest.raises(InvalidCredentialsError, match="Invalid credentials"):
        await service.authenticate_user("ada@example.com", "password1")


@pytest.mark.asyncio
async def test_messages_are_translated(service):
    with pytest.raises(InvalidCredentialsError, match="Credenciales inválidas"):
        await service.authenticate_user("ada@example.com", "wrong-password", language="es")


@pytest.mark.asyncio
async def test_empty_password_fails(service):
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate_user("ada@example.com", "")
