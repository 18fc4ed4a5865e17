"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI application
with all necessary middleware, exception handlers, and routers registered.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from signet.adapters.api.v1 import api_router
from signet.core.config.settings import settings
from signet.core.handlers import register_exception_handlers
from signet.core.lifecycle import create_lifespan_manager
from signet.core.middleware import configure_middleware
from signet.utils.i18n import get_translated_message


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Interactive docs are only served outside production.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    expose_docs = settings.APP_ENV != "production"
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        docs_url="/docs" if expose_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if expose_docs else None,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
        default_response_description=get_translated_message(
            "successful_response", settings.DEFAULT_LANGUAGE
        ),
    )

    configure_middleware(app)

    register_exception_handlers(app)

    app.include_router(api_router)

    return app
