from signet.infrastructure.database.async_db import (
    AsyncSessionFactory,
    build_engine,
    check_database_health,
    create_db_and_tables,
    engine,
    get_async_db,
)

__all__ = [
    "AsyncSessionFactory",
    "build_engine",
    "check_database_health",
    "create_db_and_tables",
    "engine",
    "get_async_db",
]
