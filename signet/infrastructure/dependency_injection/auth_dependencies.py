"""Dependency injection for the authentication services.

Each factory builds one layer on top of the request-scoped database session,
so a route only declares the service it needs:

    session -> repositories -> TokenService -> domain services

FastAPI caches dependencies per request, so every repository in one request
shares the same `AsyncSession`.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signet.domain.interfaces.repositories import (
    IRefreshSessionRepository,
    IUserRepository,
)
from signet.domain.services.auth.token import TokenService
from signet.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from signet.domain.services.authentication.user_logout_service import (
    UserLogoutService,
)
from signet.domain.services.authentication.user_registration_service import (
    UserRegistrationService,
)
from signet.infrastructure.database.async_db import get_async_db
from signet.infrastructure.repositories.session_repository import RefreshSessionRepository
from signet.infrastructure.repositories.user_repository import UserRepository

# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_user_repository(db: AsyncDB) -> IUserRepository:
    """Factory that returns the user repository implementation."""
    return UserRepository(db)


def get_refresh_session_repository(db: AsyncDB) -> IRefreshSessionRepository:
    """Factory that returns the refresh session repository implementation."""
    return RefreshSessionRepository(db)


def get_token_service(
    user_repository: IUserRepository = Depends(get_user_repository),
    session_repository: IRefreshSessionRepository = Depends(get_refresh_session_repository),
) -> TokenService:
    return TokenService(user_repository, session_repository)


# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


def get_user_registration_service(
    user_repository: IUserRepository = Depends(get_user_repository),
) -> UserRegistrationService:
    return UserRegistrationService(user_repository)


def get_user_authentication_service(
    user_repository: IUserRepository = Depends(get_user_repository),
) -> UserAuthenticationService:
    return UserAuthenticationService(user_repository)


def get_user_logout_service(
    token_service: TokenService = Depends(get_token_service),
) -> UserLogoutService:
    return UserLogoutService(token_service)


# ---------------------------------------------------------------------------
# Clean type aliases for routes
# ---------------------------------------------------------------------------

TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
UserRegistrationServiceDep = Annotated[UserRegistrationService, Depends(get_user_registration_service)]
UserAuthenticationServiceDep = Annotated[
    UserAuthenticationService, Depends(get_user_authentication_service)
]
UserLogoutServiceDep = Annotated[UserLogoutService, Depends(get_user_logout_service)]
