from .auth import AccessTokenResponse, AuthenticatedUser, AuthResponse, ProfileResponse
from .user import UserOut

__all__ = [
    "AccessTokenResponse",
    "AuthenticatedUser",
    "AuthResponse",
    "ProfileResponse",
    "UserOut",
]
