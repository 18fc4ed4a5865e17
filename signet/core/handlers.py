"""
Global exception handlers for the FastAPI application.

This module maps the `signet.core.exceptions` hierarchy onto HTTP responses.
Every body has the shape ``{"detail": ...}``:

- `AuthorizationError`      401, with ``WWW-Authenticate: Bearer``
- `ConflictError`           409
- `ValidationError`         400, `detail` is the list-joined message
- `RequestValidationError`  422, `detail` is a list of plain messages
- `DatabaseError`           500, generic message
- `SignetError`             500, fallback
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from signet.core.exceptions import (
    AuthorizationError,
    ConflictError,
    DatabaseError,
    SignetError,
    ValidationError,
)
from signet.utils.i18n import get_request_language, get_translated_message

__all__ = [
    "authorization_error_handler",
    "conflict_error_handler",
    "validation_error_handler",
    "request_validation_error_handler",
    "database_error_handler",
    "signet_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


def _language(request: Request) -> str:
    return getattr(request.state, "language", None) or get_request_language(request)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    """Handles `AuthorizationError`, returning a `401 Unauthorized`.

    Covers bad login credentials and missing, invalid or expired tokens.
    """
    logger.warning(
        "authorization_failure",
        error=exc.code,
        client_ip=_client_host(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handles `ConflictError`, returning a `409 Conflict`.

    This is triggered when a registration attempt uses an email that already
    exists in the system.
    """
    logger.info("conflict", error=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message},
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles domain `ValidationError`, returning a `400 Bad Request`."""
    logger.info("validation_error", error=exc.code, problems=len(exc.messages), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


def _field_label(loc: tuple) -> str:
    names = [str(part) for part in loc if part != "body" and not isinstance(part, int)]
    if not names:
        return "Request body"
    label = names[-1]
    return label[:1].upper() + label[1:]


def format_validation_errors(errors: List[Dict[str, Any]], language: str = "en") -> List[str]:
    """Turn pydantic error records into plain, user-facing messages.

    Messages raised by our own validators are used verbatim; missing fields
    and type mismatches get a translated generic message.
    """
    messages: List[str] = []
    for error in errors:
        error_type = error.get("type", "")
        field = _field_label(tuple(error.get("loc", ())))
        ctx_error = (error.get("ctx") or {}).get("error")
        if error_type == "missing":
            message = get_translated_message("field_required", language, field=field)
        elif error_type == "value_error" and ctx_error is not None:
            message = str(ctx_error)
        else:
            message = get_translated_message("field_invalid", language, field=field)
        if message not in messages:
            messages.append(message)
    return messages


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handles FastAPI's `RequestValidationError`, returning a `422`.

    The default body lists pydantic error records; clients of this API show
    errors verbatim, so the records are flattened into plain messages.
    """
    messages = format_validation_errors(list(exc.errors()), _language(request))
    logger.info("request_validation_failed", path=request.url.path, problems=len(messages))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": messages},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handles `DatabaseError`, returning a `500 Internal Server Error`.

    The driver error is logged; the client only sees a generic message.
    """
    logger.critical(
        "database_error",
        error_message=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": get_translated_message("database_error", _language(request))},
    )


async def signet_error_handler(request: Request, exc: SignetError) -> JSONResponse:
    """Handles the base `SignetError`, returning a `500 Internal Server Error`.

    This serves as a fallback for any application error without a more
    specific handler.
    """
    logger.error(
        "unhandled_application_error",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": get_translated_message("internal_error", _language(request))},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so subclasses
    (e.g. `DuplicateUserError`) reach their family's handler.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(SignetError, signet_error_handler)
