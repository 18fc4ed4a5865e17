from unittest.mock import AsyncMock

import pytest

from signet.domain.services.auth.token import TokenService
from signet.domain.services.authentication import UserLogoutService


@pytest.fixture
def token_service():
    return AsyncMock(spec=TokenService)


@pytest.mark.asyncio
async def test_logout_revokes_the_refresh_session(token_service):
    token_service.revoke_refresh_token.return_value = True

    assert await UserLogoutService(token_service).logout("refresh-token") is True
    token_service.revoke_refresh_token.assert_awaited_once_with("refresh-token")


@pytest.mark.asyncio
async def test_logout_without_token_is_a_no_op(token_service):
    assert await UserLogoutService(token_service).logout(None) is False
    token_service.revoke_refresh_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_logout_with_unknown_token(token_service):
    token_service.revoke_refresh_token.return_value = False

    assert await UserLogoutService(token_service).logout("stale") is False
