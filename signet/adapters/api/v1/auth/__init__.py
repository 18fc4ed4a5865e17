"""Authentication router package: register, login, refresh, profile, logout."""

from __future__ import annotations

from fastapi import APIRouter

from .routes import login as login_route
from .routes import logout as logout_route
from .routes import profile as profile_route
from .routes import refresh_token as refresh_token_route
from .routes import register as register_route

router = APIRouter(prefix="/authentication", tags=["auth"])

router.include_router(register_route.router, prefix="/register")
router.include_router(login_route.router, prefix="/login")
router.include_router(refresh_token_route.router)
router.include_router(profile_route.router, prefix="/profile")
router.include_router(logout_route.router, prefix="/logout")

__all__ = ["router"]
