"""API v1 router configuration.
"""

from fastapi import APIRouter

from .clips import router as clips_router
from .health import router as health_router
from .keys import router as keys_router
from .raw import router as raw_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(keys_router, prefix="/keys", tags=["keys"])
api_router.include_router(clips_router, prefix="/clips", tags=["clips"])

__all__ = ["api_router", "raw_router"]
