from unittest.mock import AsyncMock

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from signet.infrastructure.database import async_db


@pytest.mark.asyncio
async def test_health_check_ok(async_client, mocker):
    mocker.patch.object(async_db, "check_database_health", AsyncMock(return_value=True))

    response = await async_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "ok"
    assert body["env"] == "test"
    assert body["message"] == "Service is healthy"
    assert body["services"] == {"database": {"status": "healthy"}}


@pytest.mark.asyncio
async def test_health_check_degraded(async_client, mocker):
    mocker.patch.object(async_db, "check_database_health", AsyncMock(return_value=False))

    response = await async_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "degraded"
    assert body["services"] == {"database": {"status": "unhealthy"}}


@pytest.mark.asyncio
async def test_check_database_health_against_engine(db_engine):
    assert await async_db.check_database_health(db_engine) is True


@pytest.mark.asyncio
async def test_check_database_health_reports_failure(db_engine, mocker):
    mocker.patch.object(
        async_db, "_ping", AsyncMock(side_effect=OperationalError("SELECT 1", {}, Exception("down")))
    )

    assert await async_db.check_database_health(db_engine) is False
