"""Login endpoint.

Verifies the email/password pair, returns a short-lived access token with
the user record, and sets the refresh token as an HTTP-only cookie.
"""

import structlog
from fastapi import APIRouter, Request, Response, status

from signet.adapters.api.v1.auth.schemas import AuthResponse, LoginRequest, UserOut
from signet.adapters.api.v1.auth.utils import set_refresh_cookie
from signet.infrastructure.dependency_injection.auth_dependencies import (
    TokenServiceDep,
    UserAuthenticationServiceDep,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Authenticate a user",
    description="Exchanges an email and password for an access token and a refresh cookie.",
)
async def login_user(
    request: Request,
    response: Response,
    payload: LoginRequest,
    auth_service: UserAuthenticationServiceDep,
    token_service: TokenServiceDep,
) -> AuthResponse:
    """Authenticate a user with email and password.

    Raises:
        InvalidCredentialsError: Unknown email, wrong password or inactive
            account (401, identical message in every case).
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    user = await auth_service.authenticate_user(
        email=payload.email,
        password=payload.password,
        language=request.state.language,
        correlation_id=correlation_id,
    )
    tokens = await token_service.issue_tokens(user)
    set_refresh_cookie(response, tokens["refresh_token"])

    logger.info("login_succeeded", user_id=user.id, correlation_id=correlation_id)
    return AuthResponse(
        access_token=tokens["access_token"],
        token_type=tokens["token_type"],
        expires_in=tokens["expires_in"],
        user=UserOut.from_entity(user),
    )
