from .user_authentication_service import UserAuthenticationService
from .user_logout_service import UserLogoutService
from .user_registration_service import UserRegistrationService

__all__ = [
    "UserAuthenticationService",
    "UserLogoutService",
    "UserRegistrationService",
]
