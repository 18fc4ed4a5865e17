"""Client request coordinator.

Every API call made by the client goes through `RequestCoordinator.request`,
which runs a small per-request state machine:

1. Attach the held access token, if any, as a bearer credential.
2. Dispatch.
3. On success, return the decoded JSON body.
4. On a 401 from a non-auth endpoint that has not been retried yet:
   - if a refresh is already in flight, wait in the queue for its outcome;
   - otherwise start the refresh exchange. On success the new token is
     stored and every queued request is released with it; on failure every
     queued request is rejected, the held credentials are cleared and the
     "session expired" callback fires.
   Either way the request is replayed once, marked as retried.
5. A 401 from an auth endpoint itself (login, refresh) clears the held
   access token and is not retried.

A retried request that fails with 401 again propagates the failure.

Concurrency is cooperative: `RefreshState` is only mutated between
suspension points on one event loop, and its flag is set before the refresh
request is awaited. The state is per coordinator; separate processes
sharing one token file do not coordinate their refreshes.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Optional
from urllib.parse import urlsplit

import httpx
import structlog

from signet.client.token_store import (
    AUTH_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    MemoryTokenStore,
    TokenStore,
)
from signet.core.exceptions import (
    AuthorizationError,
    ConflictError,
    RefreshExhaustedError,
    ServiceError,
    SignetError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"
REFRESH_PATH = "/refresh-token"
AUTH_ENDPOINT_PATHS = (LOGIN_PATH, REFRESH_PATH, "/refresh")
REFRESH_COOKIE_NAME = "refreshToken"

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."


class RefreshState:
    """Refresh-in-progress flag plus the queue of requests waiting on it.

    Each waiter is an `asyncio.Future` resolved with the new access token or
    rejected with the refresh failure.
    """

    def __init__(self) -> None:
        self.in_progress = False
        self.queue: List[asyncio.Future] = []

    def enqueue(self) -> asyncio.Future:
        waiter = asyncio.get_running_loop().create_future()
        self.queue.append(waiter)
        return waiter

    def settle(self, token: Optional[str] = None, error: Optional[BaseException] = None) -> int:
        """Release or reject every queued waiter and clear the flag.

        The queue is swapped out before any waiter is resolved, so requests
        that enqueue while waiters wake up belong to the next refresh.

        Returns:
            The number of waiters settled.
        """
        waiters, self.queue = self.queue, []
        self.in_progress = False
        for waiter in waiters:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)
        return len(waiters)


@dataclass
class PendingCall:
    """One logical request, possibly dispatched twice."""

    method: str
    url: str
    json: Any = None
    retried: bool = False
    authorization: Optional[str] = None
    sent_token: Optional[str] = None


def error_from_response(response: httpx.Response) -> SignetError:
    """Map a non-2xx response onto the shared error taxonomy.

    The server puts its message in ``detail``; a list of messages (422) is
    joined with ", " by `ValidationError`.
    """
    detail: Any = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
    if not detail:
        detail = response.text or response.reason_phrase or f"HTTP {response.status_code}"

    status_code = response.status_code
    if status_code in (400, 422):
        return ValidationError(detail if isinstance(detail, list) else str(detail))
    message = ", ".join(map(str, detail)) if isinstance(detail, list) else str(detail)
    if status_code == 401:
        return AuthorizationError(message)
    if status_code == 409:
        return ConflictError(message)
    return ServiceError(message, status_code=status_code)


class RequestCoordinator:
    """Authenticated HTTP access to the API with single-flight token refresh.

    Args:
        base_url: Base URL of the authentication API, e.g.
            ``http://localhost:4000/authentication``.
        store: Where the access token (and refresh mirror) are kept.
        timeout: Transport timeout in seconds; it also bounds the refresh call.
        transport: Optional httpx transport (`httpx.ASGITransport` in tests).
        on_session_expired: Called once each time a refresh fails.
    """

    def __init__(
        self,
        base_url: str,
        store: Optional[TokenStore] = None,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        self.store = store if store is not None else MemoryTokenStore()
        self.refresh_state = RefreshState()
        self.refresh_count = 0
        self.on_session_expired = on_session_expired
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RequestCoordinator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, url: str, json: Any = None) -> Any:
        """Send a request and return its decoded JSON body.

        Raises:
            ValidationError: 400 or 422.
            AuthorizationError: 401 that could not be recovered.
            RefreshExhaustedError: The refresh exchange itself failed.
            ConflictError: 409.
            ServiceError: Any other status, or a transport failure.
        """
        return await self._dispatch(PendingCall(method=method.upper(), url=url, json=json))

    async def _dispatch(self, call: PendingCall) -> Any:
        response = await self._send(call)
        if response.status_code != 401:
            return self._result(response)

        if self._is_auth_endpoint(call.url):
            self.store.delete(AUTH_TOKEN_KEY)
            logger.info("auth_endpoint_unauthorized", url=call.url)
            raise error_from_response(response)

        if call.retried:
            logger.info("retried_request_unauthorized", url=call.url)
            raise error_from_response(response)
        call.retried = True

        state = self.refresh_state
        if state.in_progress:
            logger.debug("request_queued_for_refresh", url=call.url, queued=len(state.queue) + 1)
            call.authorization = await state.enqueue()
            return await self._dispatch(call)

        current = self.store.get(AUTH_TOKEN_KEY)
        if call.sent_token and not current:
            # A refresh failed while this one was in flight and cleared the credential.
            logger.info("request_unauthorized_after_failed_refresh", url=call.url)
            raise RefreshExhaustedError(SESSION_EXPIRED_MESSAGE)

        # Another request already refreshed while this one was in flight.
        if current and current != call.sent_token:
            call.authorization = current
            return await self._dispatch(call)

        call.authorization = await self._refresh()
        return await self._dispatch(call)

    async def _refresh(self) -> str:
        """Run the single in-flight refresh exchange and settle the queue."""
        state = self.refresh_state
        state.in_progress = True
        self.refresh_count += 1
        logger.info("token_refresh_started", attempt=self.refresh_count)

        try:
            token = await self._exchange_refresh_token()
        except asyncio.CancelledError:
            state.settle(error=ServiceError("Token refresh was cancelled.", code="refresh_cancelled"))
            raise
        except Exception as exc:
            error = RefreshExhaustedError(SESSION_EXPIRED_MESSAGE)
            rejected = state.settle(error=error)
            self.store.clear()
            logger.warning("token_refresh_failed", error=str(exc), rejected=rejected)
            if self.on_session_expired is not None:
                self.on_session_expired()
            raise error from exc
        else:
            self.store.set(AUTH_TOKEN_KEY, token)
            released = state.settle(token=token)
            logger.info("token_refresh_succeeded", released=released)
            return token
        finally:
            # The flag never outlives the exchange, whatever escaped above.
            if state.in_progress:
                state.settle(error=ServiceError("Token refresh was aborted.", code="refresh_aborted"))

    async def _exchange_refresh_token(self) -> str:
        refresh_token = self.store.get(REFRESH_TOKEN_KEY)
        call = PendingCall(
            method="POST",
            url=REFRESH_PATH,
            json={"refreshToken": refresh_token} if refresh_token else None,
        )
        response = await self._send(call, authenticate=False)
        body = self._result(response)
        token = body.get("accessToken") if isinstance(body, dict) else None
        if not token:
            raise ServiceError(
                "Refresh response did not contain an access token.",
                status_code=response.status_code,
            )
        return token

    async def _send(self, call: PendingCall, authenticate: bool = True) -> httpx.Response:
        headers = {}
        token = None
        if authenticate:
            token = call.authorization or self.store.get(AUTH_TOKEN_KEY)
            if token:
                headers["Authorization"] = f"Bearer {token}"
        call.sent_token = token

        try:
            response = await self._client.request(
                call.method, call.url, json=call.json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning("request_transport_error", url=call.url, error=str(exc))
            raise ServiceError(f"Could not reach the server: {exc}", code="transport_error") from exc

        self._capture_refresh_cookie(response)
        logger.debug(
            "request_completed",
            method=call.method,
            url=call.url,
            status_code=response.status_code,
            retried=call.retried,
        )
        return response

    def _capture_refresh_cookie(self, response: httpx.Response) -> None:
        rotated = response.cookies.get(REFRESH_COOKIE_NAME)
        if rotated:
            self.store.set(REFRESH_TOKEN_KEY, rotated)

    @staticmethod
    def _result(response: httpx.Response) -> Any:
        if not response.is_success:
            raise error_from_response(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(
                "The server returned a response that is not valid JSON.",
                code="invalid_response",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _is_auth_endpoint(url: str) -> bool:
        path = urlsplit(url).path.rstrip("/")
        return path.endswith(AUTH_ENDPOINT_PATHS)
