import os
import tempfile

# Settings are read at import time, so the environment must be set first.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="clipstash-tests-")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/clipstash.db"
os.environ["HIT_COUNTER_FLUSH_SECONDS"] = "60"
os.environ["MAINTENANCE_INTERVAL_SECONDS"] = "60"

from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from clipstash.domain.services.clip_service import ClipService  # noqa: E402
from clipstash.infrastructure.database import build_engine, create_async_db_and_tables  # noqa: E402
from clipstash.infrastructure.repositories import InMemoryClipRepository  # noqa: E402


@pytest.fixture
def repository():
    return InMemoryClipRepository()


@pytest.fixture
def clip_service(repository):
    return ClipService(repository)


@pytest.fixture
def service_scope(clip_service):
    """Service scope over the in-memory repository, usable from any loop."""

    @asynccontextmanager
    async def scope():
        yield clip_service

    return scope


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    async_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path}/repository.db", echo=False)
    await create_async_db_and_tables(async_engine)
    yield async_engine
    await async_engine.dispose()
