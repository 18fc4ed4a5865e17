"""Authentication API schemas package.

Request and response models are split into focused modules and re-exported
here, so routes and tests import from one place.
"""

from __future__ import annotations

# flake8: noqa: F401

from .misc import MessageResponse
from .requests import LoginRequest, RefreshTokenRequest, RegisterRequest
from .responses.auth import (
    AccessTokenResponse,
    AuthenticatedUser,
    AuthResponse,
    ProfileResponse,
)
from .responses.user import UserOut
