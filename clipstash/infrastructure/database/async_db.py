from __future__ import annotations

"""
Asynchronous Database Utilities Module

This module provides the asynchronous SQLAlchemy engine and session helpers
used by the request handlers, the maintenance sweeper and the hit counter.

An async engine's pooled connections belong to the event loop that opened
them. The request loop uses the module-level `engine`; any component running
its own loop (the hit counter thread) must build a private engine with
`build_engine`.

Key Components:
    - build_engine / build_session_factory: engine and session factory builders.
    - engine / AsyncSessionFactory: the application loop's engine and factory.
    - get_async_db: FastAPI dependency yielding an async session.
    - create_async_db_and_tables: creates the schema.
    - check_database_health: connectivity probe with retries.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from clipstash.core.config.settings import settings
from clipstash.infrastructure.database import tables  # noqa: F401 - registers table metadata

logger = structlog.get_logger(__name__)


def build_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """
    Build an asynchronous engine.

    Args:
        url: Database URL, defaults to ``settings.DATABASE_URL``.
        echo: Whether to log SQL statements, defaults to ``settings.DATABASE_ECHO``.

    Returns:
        AsyncEngine: A new engine with its own connection pool.
    """
    url = url or settings.DATABASE_URL
    async_engine = create_async_engine(
        url,
        echo=settings.DATABASE_ECHO if echo is None else echo,
        pool_pre_ping=True,
    )
    if url.startswith("sqlite"):
        _enable_sqlite_savepoints(async_engine)
    return async_engine


def _enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on SQLite.

    The sqlite3 driver otherwise opens transactions lazily and SAVEPOINTs do
    not nest inside them.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine()
AsyncSessionFactory = build_session_factory(engine)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] = AsyncSessionFactory,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session that is rolled back on error and always closed.

    Args:
        factory: Session factory to draw from.
    """
    async with factory() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession from the application engine.
    """
    async with session_scope(AsyncSessionFactory) as session:
        yield session


async def create_async_db_and_tables(bind: Optional[AsyncEngine] = None) -> None:
    """
    Create the clip tables if they do not exist yet.

    Args:
        bind: Engine to use, defaults to the application engine.
    """
    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("database_tables_created", tables=list(SQLModel.metadata.tables.keys()))


@retry(
    stop=stop_after_attempt(settings.DATABASE_HEALTH_RETRIES),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
)
async def _ping(bind: AsyncEngine) -> None:
    async with bind.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_database_health(bind: Optional[AsyncEngine] = None) -> bool:
    """
    Performs a health check on the database connection.

    Transient ``OperationalError`` failures are retried with exponential
    backoff before the database is reported unhealthy.

    Returns:
        bool: True if the database answered, False otherwise.
    """
    try:
        await _ping(bind or engine)
        logger.debug("database_health_check_success")
        return True
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e), error_type=type(e).__name__)
        return False
