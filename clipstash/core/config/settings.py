"""Main application settings and configuration management.

This module composes the application settings from the different modules
(app, database) into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the application.

Environment Support:
- Development: Uses .env or .env.development, debug enabled
- Test: Uses .env.test
- Staging: Uses .env.staging
- Production: Uses .env.production
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .database import DatabaseSettings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class Settings(AppSettings, DatabaseSettings):
    """The main settings class that aggregates all application configurations.

    Usage:
        - Access settings via the singleton instance `settings` throughout the application.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="allow"
    )

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific configuration."""
        super().__init__(**kwargs)

        env = os.getenv("APP_ENV", self.APP_ENV)
        self._set_environment_defaults(env)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env == "development":
            self.DEBUG = True

        logger.info(f"Application running in {env} environment")
        logger.info(f"Debug mode: {self.DEBUG}")


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        return Settings(_env_file=env_file)
    if Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        return Settings()
    logger.warning(f"No .env file found, using environment variables only (environment: {env})")
    return Settings()


# Create a singleton instance of the settings to be used across the application.
settings = create_settings()
