"""Domain Value Objects for the authentication domain.

Value objects are immutable objects that describe domain concepts by their attributes
rather than their identity.
"""

from .email import Email
from .jwt_token import AccessTokenClaims
from .password import HashedPassword, Password

__all__ = [
    "Email",
    "AccessTokenClaims",
    "Password",
    "HashedPassword",
]
