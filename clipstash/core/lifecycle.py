"""Application lifecycle management.

This module handles application startup and shutdown events: schema creation,
and the start and stop of the hit counter and the expiry sweeper.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clipstash.core.config.settings import settings
from clipstash.core.logging import logger
from clipstash.infrastructure.database import (
    AsyncSessionFactory,
    check_database_health,
    create_async_db_and_tables,
)
from clipstash.infrastructure.dependency_injection.clip_dependencies import ClipServiceScope
from clipstash.infrastructure.services import HitCounter, Maintenance


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager that handles startup and shutdown events.

        The hit counter gets a service scope with its own engine because it
        runs on its own event loop. The sweeper shares the application engine.

        Args:
            app (FastAPI): The FastAPI application instance

        Raises:
            RuntimeError: If database is unavailable during startup
        """
        # Startup
        if not await check_database_health():
            logger.error("database_unavailable_on_startup")
            raise RuntimeError("Database unavailable")
        await create_async_db_and_tables()

        hit_counter = HitCounter(
            ClipServiceScope(database_url=settings.DATABASE_URL),
            flush_interval=settings.HIT_COUNTER_FLUSH_SECONDS,
        )
        maintenance = Maintenance(
            ClipServiceScope(session_factory=AsyncSessionFactory),
            interval=settings.MAINTENANCE_INTERVAL_SECONDS,
        )
        hit_counter.start()
        maintenance.start()
        app.state.hit_counter = hit_counter
        app.state.maintenance = maintenance
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        # Shutdown
        await maintenance.stop()
        await asyncio.to_thread(hit_counter.stop)
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
