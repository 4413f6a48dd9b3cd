from datetime import datetime, timezone

from fastapi import APIRouter

from clipstash.adapters.api.v1.schemas import HealthResponse
from clipstash.core.config.settings import settings
from clipstash.core.logging import logger
from clipstash.infrastructure.database import check_database_health

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint reporting database connectivity.
    """
    db_healthy = await check_database_health()
    if not db_healthy:
        logger.warning("health_check_degraded", env=settings.APP_ENV)

    return HealthResponse(
        status="ok" if db_healthy else "degraded",
        env=settings.APP_ENV,
        version=settings.VERSION,
        services={"database": {"status": "healthy" if db_healthy else "unhealthy"}},
        timestamp=datetime.now(timezone.utc),
    )
