"""
Database infrastructure for clipstash.

Re-exports the async engine helpers and the table models.
"""

from .async_db import (
    AsyncSessionFactory,
    build_engine,
    build_session_factory,
    check_database_health,
    create_async_db_and_tables,
    engine,
    get_async_db,
    session_scope,
)
from .tables import ApiKeyRow, ClipRow

__all__ = [
    "AsyncSessionFactory",
    "ApiKeyRow",
    "ClipRow",
    "build_engine",
    "build_session_factory",
    "check_database_health",
    "create_async_db_and_tables",
    "engine",
    "get_async_db",
    "session_scope",
]
