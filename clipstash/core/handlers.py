from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

This module translates the clipstash exception hierarchy into HTTP responses.
Internal details of storage failures are logged here and never returned to
the client.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from clipstash.core.exceptions import (
    ApiKeyError,
    ClipstashError,
    DatabaseError,
    NotFoundError,
    PermissionError,
    ValidationError,
)

__all__ = [
    "validation_error_handler",
    "not_found_error_handler",
    "permission_error_handler",
    "api_key_error_handler",
    "database_error_handler",
    "clipstash_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles `ValidationError` and `ClipError`, returning a `400 Bad Request`.

    Args:
        request: The incoming `Request` object.
        exc: The `ValidationError` instance.

    Returns:
        A `JSONResponse` with a 400 status code, the error detail and its kind.
    """
    logger.info("Clip validation failed", error=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"clip parsing error: {exc.message}", "code": exc.code},
    )


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handles `NotFoundError`, returning a `404 Not Found`.

    Missing and expired clips produce the same response.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "entity not found"},
    )


async def permission_error_handler(request: Request, exc: PermissionError) -> JSONResponse:
    """Handles `PermissionError`, returning a `401 Unauthorized`."""
    logger.warning("Clip access denied", error=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
    )


async def api_key_error_handler(request: Request, exc: ApiKeyError) -> JSONResponse:
    """Handles `ApiKeyError`, returning a `400 Bad Request`.

    The key itself is never logged.
    """
    logger.warning("API key rejected", error=exc.code, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handles `DatabaseError`, returning a `500 Internal Server Error`.

    This handler abstracts the specific database error from the client.

    Args:
        request: The incoming `Request` object.
        exc: The `DatabaseError` instance.

    Returns:
        A `JSONResponse` with a 500 status code and a generic error message.
    """
    logger.critical(
        "A critical database error occurred",
        error_message=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "a server error occurred"},
    )


async def clipstash_error_handler(request: Request, exc: ClipstashError) -> JSONResponse:
    """Fallback for application errors without a more specific handler."""
    logger.error(
        "An unhandled application error occurred",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "a server error occurred"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so `ClipError`
    reaches `validation_error_handler` and the `ApiKeyError` subclasses reach
    `api_key_error_handler`.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(PermissionError, permission_error_handler)
    app.add_exception_handler(ApiKeyError, api_key_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(ClipstashError, clipstash_error_handler)
