"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI application
with its exception handlers and routers registered.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from clipstash.adapters.api.v1 import api_router, raw_router
from clipstash.core.config.settings import settings
from clipstash.core.handlers import register_exception_handlers
from clipstash.core.lifecycle import create_lifespan_manager


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Share text clips by short code, with optional password and expiry.",
        debug=settings.DEBUG,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(raw_router, prefix="/clip/raw", tags=["raw"])

    return app
