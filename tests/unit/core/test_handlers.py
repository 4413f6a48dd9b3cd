"""Exception handler mapping, exercised through a throwaway FastAPI app."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from clipstash.core.exceptions import (
    ApiKeyNotFoundError,
    ClipError,
    ClipstashError,
    DatabaseError,
    NotFoundError,
    PermissionError,
)
from clipstash.core.handlers import register_exception_handlers

ERRORS = {
    "validation": ClipError.empty_content(),
    "not-found": NotFoundError(),
    "permission": PermissionError("Invalid password"),
    "api-key": ApiKeyNotFoundError(),
    "database": DatabaseError("connection refused on 10.0.0.5"),
    "generic": ClipstashError("something odd"),
}


@pytest.fixture
def app():
    application = FastAPI()
    register_exception_handlers(application)

    @application.get("/raise/{kind}")
    async def raise_error(kind: str):
        raise ERRORS[kind]

    return application


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind, status_code, detail",
    [
        ("validation", 400, "clip parsing error: empty content"),
        ("not-found", 404, "entity not found"),
        ("permission", 401, "Invalid password"),
        ("api-key", 400, "API key not found"),
        ("database", 500, "a server error occurred"),
        ("generic", 500, "a server error occurred"),
    ],
)
async def test_error_mapping(app, kind, status_code, detail):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get(f"/raise/{kind}")

    assert response.status_code == status_code
    assert response.json()["detail"] == detail
