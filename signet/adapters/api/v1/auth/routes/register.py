"""Registration endpoint.

Creates an account from an email, a password and an optional display name.
All business rules live in `UserRegistrationService`; this module only
adapts HTTP to it.
"""

import structlog
from fastapi import APIRouter, Request, status

from signet.adapters.api.v1.auth.schemas import RegisterRequest, UserOut
from signet.infrastructure.dependency_injection.auth_dependencies import (
    UserRegistrationServiceDep,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description=(
        "Creates a user account. Returns the created user without its password hash, "
        "or 409 if the email is already registered."
    ),
)
async def register_user(
    request: Request,
    payload: RegisterRequest,
    registration_service: UserRegistrationServiceDep,
) -> UserOut:
    """Register a new user.

    Raises:
        ValidationError: Malformed input (400).
        DuplicateUserError: Email already registered (409).
    """
    user = await registration_service.register_user(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        language=request.state.language,
        correlation_id=getattr(request.state, "correlation_id", None),
    )
    return UserOut.from_entity(user)
