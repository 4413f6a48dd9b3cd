"""
Database connection settings.
"""
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """
    Defines settings for connecting to the clip database.

    The service is single-process and single-database. SQLite through
    aiosqlite is the default; any SQLAlchemy async URL (for example
    ``postgresql+asyncpg://``) may be supplied instead.
    """
    DATABASE_URL: str = "sqlite+aiosqlite:///./clipstash.db"
    DATABASE_ECHO: bool = False
    DATABASE_HEALTH_RETRIES: int = Field(ge=1, default=3)

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def ensure_async_driver(cls, v: str) -> str:
        """
        Rewrites synchronous driver names to their asyncio counterparts.

        Args:
            v: The configured URL.

        Returns:
            A URL usable with ``create_async_engine``.
        """
        if not v:
            raise ValueError("DATABASE_URL cannot be empty")
        if v.startswith("sqlite:///"):
            logger.info("Using aiosqlite driver for sqlite DATABASE_URL")
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        if v.startswith("postgresql://") or v.startswith("postgresql+psycopg2://"):
            logger.info("Using asyncpg driver for postgresql DATABASE_URL")
            return "postgresql+asyncpg://" + v.split("://", 1)[1]
        return v
