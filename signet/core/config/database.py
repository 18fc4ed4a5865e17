"""
Database connection settings.
"""
import logging

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./signet.db"


class DatabaseSettings(BaseSettings):
    """
    Defines settings for connecting to the user database.

    DATABASE_URL is an async SQLAlchemy URL. Development falls back to a local
    SQLite file; production deployments point it at PostgreSQL
    (``postgresql+asyncpg://...``).

    Security Note:
        - Credentials embedded in DATABASE_URL must never be logged.
    Performance Note:
        - The pool settings only apply to server databases; SQLite uses the
          driver defaults.
    """
    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = Field(ge=1, default=10)
    DATABASE_MAX_OVERFLOW: int = Field(ge=0, default=20)
    DATABASE_POOL_TIMEOUT: float = Field(ge=1.0, default=5.0)

    def resolve_database_url(self, env: str) -> str:
        """
        Returns the configured database URL or the development fallback.

        Raises:
            ValueError: In production when DATABASE_URL is not set.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if env == "production":
            raise ValueError("DATABASE_URL must be provided in production environment")
        logger.warning("DATABASE_URL not set, falling back to %s", DEFAULT_DATABASE_URL)
        return DEFAULT_DATABASE_URL
