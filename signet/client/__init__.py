"""Async client for the signet authentication API."""

from .coordinator import PendingCall, RefreshState, RequestCoordinator
from .session import AuthSession, Notice
from .token_store import (
    AUTH_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    FileTokenStore,
    MemoryTokenStore,
    TokenStore,
)

__all__ = [
    "AUTH_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "AuthSession",
    "FileTokenStore",
    "MemoryTokenStore",
    "Notice",
    "PendingCall",
    "RefreshState",
    "RequestCoordinator",
    "TokenStore",
]
