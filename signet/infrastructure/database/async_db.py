"""
Asynchronous Database Module

This module owns the async SQLAlchemy engine used by the API, the session
factory, the FastAPI session dependency and the startup helpers (table
creation and a retried health check).

SQLite (via aiosqlite) is used for development and tests; PostgreSQL (via
asyncpg) in production. Pool sizing settings only apply to server databases.

**Security Note**: DATABASE_URL may embed credentials. It is never logged;
only the dialect name is.

Key Components:
    - build_engine: Creates an AsyncEngine for a URL with dialect-aware options.
    - engine: The application's AsyncEngine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_async_db: A FastAPI dependency yielding an AsyncSession.
    - create_db_and_tables: Creates all SQLModel tables.
    - check_database_health: Verifies connectivity, retrying transient failures.
"""

from __future__ import annotations

import time
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from structlog import get_logger
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# Register table metadata before create_all
import signet.domain.entities  # noqa: F401
from signet.core.config.settings import settings

logger = get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    SQLite connections are shared across the event loop's threads, so
    `check_same_thread` is disabled; server databases get the configured pool
    sizing and pre-ping.

    Args:
        database_url: An async SQLAlchemy URL (sqlite+aiosqlite, postgresql+asyncpg).
        echo: Whether to log emitted SQL.

    Returns:
        AsyncEngine: The configured engine.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

AsyncSessionFactory: sessionmaker[AsyncSession] = sessionmaker(  # type: ignore[type-arg]
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    Rolls the transaction back if the request handler raises and always
    closes the session.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with AsyncSessionFactory() as session:
        logger.debug("async_db_session_created")
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.error("async_db_session_rollback")
            raise
        finally:
            await session.close()
            logger.debug("async_db_session_closed")


async def create_db_and_tables(target: Optional[AsyncEngine] = None) -> None:
    """
    Create every SQLModel table on `target` (the application engine by default).

    Migrations are managed by Alembic in deployed environments; this is used
    at startup for SQLite and by the test suite.
    """
    target = target or engine
    start_time = time.time()
    async with target.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info(
        "database_tables_created",
        execution_time=time.time() - start_time,
        tables=list(SQLModel.metadata.tables.keys()),
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    retry=retry_if_exception_type(OperationalError),
)
async def _ping(target: AsyncEngine) -> None:
    async with target.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_database_health(target: Optional[AsyncEngine] = None) -> bool:
    """
    Performs a health check on the database connection.

    Transient `OperationalError`s are retried with exponential backoff
    before the database is reported unhealthy.

    Returns:
        bool: True if the database answered `SELECT 1`, False otherwise.
    """
    target = target or engine
    start_time = time.time()
    try:
        await _ping(target)
    except (RetryError, OperationalError) as e:
        logger.error(
            "database_health_check_failed",
            dialect=target.dialect.name,
            error=str(e),
            execution_time=time.time() - start_time,
        )
        return False
    logger.info(
        "database_health_check_success",
        dialect=target.dialect.name,
        execution_time=time.time() - start_time,
    )
    return True
