"""Protected profile endpoint.

Echoes the verified claims of the caller's access token. No database
access: the token alone proves who the caller is.
"""

from fastapi import APIRouter, Request

from signet.adapters.api.v1.auth.schemas import AuthenticatedUser, ProfileResponse
from signet.core.dependencies.auth import CurrentClaims
from signet.utils.i18n import get_translated_message

router = APIRouter()


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Return the authenticated user's token claims",
)
async def get_profile(request: Request, claims: CurrentClaims) -> ProfileResponse:
    return ProfileResponse(
        message=get_translated_message("profile_access_granted", request.state.language),
        authenticated_user=AuthenticatedUser.from_claims(claims),
    )
