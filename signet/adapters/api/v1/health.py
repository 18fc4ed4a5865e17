"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from pydantic import BaseModel

from signet.core.config.settings import settings
from signet.infrastructure.database import async_db
from signet.utils.i18n import get_translated_message

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    env: str
    message: str
    services: Dict[str, Any]
    timestamp: datetime


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Report service status and database connectivity.

    Always answers 200; a database outage shows up as `status: degraded`.
    """
    language = request.state.language
    database_ok = await async_db.check_database_health()
    return HealthResponse(
        status="ok" if database_ok else "degraded",
        env=settings.APP_ENV,
        message=get_translated_message(
            "health_status_ok" if database_ok else "health_status_degraded", language
        ),
        services={"database": {"status": "healthy" if database_ok else "unhealthy"}},
        timestamp=datetime.now(timezone.utc),
    )
