import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clipstash.core.application import create_application
from clipstash.infrastructure.database import engine


@pytest_asyncio.fixture
async def app():
    application = create_application()
    async with application.router.lifespan_context(application):
        yield application
    await engine.dispose()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api_key(async_client):
    response = await async_client.post("/api/v1/keys")
    assert response.status_code == 201
    return response.json()["api_key"]
