"""
Application-specific settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines application-wide settings like project name, debug mode and the
    timing of the background workers.

    Performance Note:
        - HIT_COUNTER_FLUSH_SECONDS bounds how stale a visible hit count may be.
          Larger values mean fewer database writes under heavy read traffic.
        - MAINTENANCE_INTERVAL_SECONDS only controls how soon expired clips are
          physically removed; they are already unreachable once expired.
    """
    PROJECT_NAME: str = "clipstash"
    VERSION: str = "0.1.0"
    APP_ENV: str = "development"
    DEBUG: bool = False

    API_HOST: str = "127.0.0.1"
    API_PORT: int = Field(ge=1, le=65535, default=8000)
    RELOAD: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    HIT_COUNTER_FLUSH_SECONDS: float = Field(gt=0, default=5.0)
    MAINTENANCE_INTERVAL_SECONDS: float = Field(gt=0, default=10.0)

    SHORTCODE_BYTES: int = Field(ge=4, le=32, default=8)
    API_KEY_BYTES: int = Field(ge=8, le=64, default=16)
