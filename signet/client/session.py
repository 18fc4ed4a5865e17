"""Client-side authentication state.

`AuthSession` is what a user interface talks to: it performs register,
login, profile and logout calls through a `RequestCoordinator`, keeps the
logged-in user, and records user-facing notices (the flash messages a UI
would show).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from signet.client.coordinator import SESSION_EXPIRED_MESSAGE, RequestCoordinator
from signet.client.token_store import AUTH_TOKEN_KEY, REFRESH_TOKEN_KEY
from signet.core.exceptions import AuthorizationError, SignetError

logger = structlog.get_logger(__name__)

REGISTER_SUCCESS_MESSAGE = "Registration successful! You can now log in."
LOGIN_SUCCESS_MESSAGE = "Login successful! Welcome."
LOGOUT_MESSAGE = "Logged out successfully."


@dataclass(frozen=True)
class Notice:
    """A message for the user. `kind` is one of success, error or info."""

    kind: str
    message: str


class AuthSession:
    """Authentication state of one client.

    The session is authenticated while an access token is held. When the
    coordinator reports that a refresh failed, the user is dropped and a
    "session expired" notice is recorded.
    """

    def __init__(self, coordinator: RequestCoordinator):
        self.coordinator = coordinator
        self.user: Optional[Dict[str, Any]] = None
        self.notices: List[Notice] = []
        coordinator.on_session_expired = self._on_session_expired

    @property
    def is_authenticated(self) -> bool:
        return bool(self.coordinator.store.get(AUTH_TOKEN_KEY))

    def _notify(self, kind: str, message: str) -> None:
        self.notices.append(Notice(kind=kind, message=message))

    def _on_session_expired(self) -> None:
        self.user = None
        self._notify("error", SESSION_EXPIRED_MESSAGE)
        logger.info("session_expired")

    async def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        """Create an account. Does not log in.

        Raises:
            ValidationError: Malformed input; the message lists every problem.
            ConflictError: The email is already registered.
        """
        payload: Dict[str, Any] = {"email": email, "password": password}
        if name:
            payload["name"] = name
        try:
            user = await self.coordinator.request("POST", "/register", json=payload)
        except SignetError as e:
            self._notify("error", e.message)
            raise
        self._notify("success", REGISTER_SUCCESS_MESSAGE)
        return user

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Log in and hold the returned access token.

        Raises:
            AuthorizationError: Wrong email or password.
        """
        try:
            result = await self.coordinator.request(
                "POST", "/login", json={"email": email, "password": password}
            )
        except AuthorizationError as e:
            self.user = None
            self._notify("error", e.message)
            raise
        except SignetError as e:
            self._notify("error", e.message)
            raise
        self.coordinator.store.set(AUTH_TOKEN_KEY, result["accessToken"])
        self.user = result.get("user")
        self._notify("success", LOGIN_SUCCESS_MESSAGE)
        logger.info("logged_in", user_id=(self.user or {}).get("id"))
        return result

    async def profile(self) -> Dict[str, Any]:
        """Fetch the protected profile; refreshes the access token if needed."""
        return await self.coordinator.request("GET", "/profile")

    async def logout(self) -> None:
        """End the session.

        Local credentials are cleared even when the server cannot be reached.
        """
        refresh_token = self.coordinator.store.get(REFRESH_TOKEN_KEY)
        try:
            await self.coordinator.request(
                "POST",
                "/logout",
                json={"refreshToken": refresh_token} if refresh_token else None,
            )
        except SignetError as e:
            logger.warning("logout_request_failed", error=e.message)
        finally:
            self.coordinator.store.clear()
            self.user = None
        self._notify("info", LOGOUT_MESSAGE)
