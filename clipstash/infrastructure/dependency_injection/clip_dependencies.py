"""Dependencies for the clip API.

Request handlers receive a `ClipService` built on the request's database
session, the process-wide `HitCounter` from application state, and a
validated `ApiKey` taken from the ``x-api-key`` header.

Background workers cannot use request-scoped sessions. They use a
`ClipServiceScope`, which opens a fresh session for every unit of work.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from clipstash.core.config.settings import settings
from clipstash.core.exceptions import ApiKeyDecodeError, ApiKeyNotFoundError
from clipstash.domain.interfaces.repositories import IClipRepository
from clipstash.domain.services.clip_service import ClipService
from clipstash.domain.value_objects import ApiKey
from clipstash.infrastructure.database.async_db import (
    build_engine,
    build_session_factory,
    get_async_db,
    session_scope,
)
from clipstash.infrastructure.repositories.clip_repository import ClipRepository
from clipstash.infrastructure.services.hit_counter import HitCounter

API_KEY_HEADER = "x-api-key"


def build_clip_service(repository: IClipRepository) -> ClipService:
    return ClipService(
        repository,
        shortcode_bytes=settings.SHORTCODE_BYTES,
        api_key_bytes=settings.API_KEY_BYTES,
    )


class ClipServiceScope:
    """Async context manager factory yielding a `ClipService`.

    Given a session factory it draws sessions from it. Without one it builds
    a private engine the first time it is entered, on whatever event loop is
    running at that moment, and keeps using it afterwards. The hit counter
    relies on the latter so that its connections stay on its own loop.
    """

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        database_url: Optional[str] = None,
    ):
        self._session_factory = session_factory
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None

    def __call__(self):
        return self._scope()

    @asynccontextmanager
    async def _scope(self) -> AsyncGenerator[ClipService, None]:
        if self._session_factory is None:
            self._engine = build_engine(self._database_url)
            self._session_factory = build_session_factory(self._engine)

        async with session_scope(self._session_factory) as session:
            yield build_clip_service(ClipRepository(session))

    async def aclose(self) -> None:
        """Dispose of the private engine, if one was built."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


# ---------------------------------------------------------------------------
# Request-scoped dependencies
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]


def get_clip_repository(db: AsyncDB) -> IClipRepository:
    return ClipRepository(db)


def get_clip_service(
    repository: Annotated[IClipRepository, Depends(get_clip_repository)],
) -> ClipService:
    return build_clip_service(repository)


def get_hit_counter(request: Request) -> HitCounter:
    """Returns the hit counter started by the application lifespan."""
    return request.app.state.hit_counter


async def require_api_key(
    service: Annotated[ClipService, Depends(get_clip_service)],
    x_api_key: Annotated[Optional[str], Header()] = None,
) -> ApiKey:
    """Decodes the ``x-api-key`` header and checks that the key exists.

    Raises:
        ApiKeyDecodeError: If the header is missing or not valid base64
        ApiKeyNotFoundError: If the key is not known
    """
    if not x_api_key:
        raise ApiKeyDecodeError("API key required")

    key = ApiKey.from_base64(x_api_key)
    if not await service.api_key_is_valid(key):
        raise ApiKeyNotFoundError()
    return key


CleanClipService = Annotated[ClipService, Depends(get_clip_service)]
CleanHitCounter = Annotated[HitCounter, Depends(get_hit_counter)]
ValidApiKey = Annotated[ApiKey, Depends(require_api_key)]
