"""Middleware configuration for the FastAPI application.

This module registers the request-scoped middleware: language selection,
request logging with a correlation id, and CORS for the browser clients.
"""

import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from signet.core.config.settings import settings
from signet.utils.i18n import get_request_language

logger = structlog.get_logger(__name__)

CORRELATION_ID_HEADER = "X-Request-ID"


def configure_middleware(app: FastAPI) -> None:
    """Configure all middleware for the FastAPI application.

    The last middleware added runs first, so CORS wraps everything else and
    answers preflight requests before any other processing.

    Args:
        app (FastAPI): The FastAPI application instance
    """
    app.middleware("http")(set_language_middleware)
    app.middleware("http")(request_logging_middleware)

    # Credentials are allowed so browsers send the refresh cookie.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept-Language", CORRELATION_ID_HEADER],
        expose_headers=[CORRELATION_ID_HEADER, "Content-Language"],
    )


async def set_language_middleware(request: Request, call_next):
    """Middleware for handling language preferences in requests.

    This middleware:
    1. Extracts language preference from the `lang` query parameter or the
       Accept-Language header
    2. Stores it on `request.state.language`
    3. Echoes it in the Content-Language response header
    """
    lang = get_request_language(request)
    request.state.language = lang
    response = await call_next(request)
    response.headers["Content-Language"] = lang
    return response


async def request_logging_middleware(request: Request, call_next):
    """Bind a correlation id to the request's log context and log the outcome.

    The id is taken from the `X-Request-ID` header when the caller sends one.
    """
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
    request.state.correlation_id = correlation_id
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    start_time = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response
