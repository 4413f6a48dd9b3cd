"""In-memory clip repository for development and testing.

This implementation keeps clips and API keys in dictionaries guarded by a
lock, so it can be shared between the request loop and the hit counter's
worker thread. Nothing survives a restart.
"""

import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional, Set

import structlog

from clipstash.core.exceptions import NotFoundError
from clipstash.domain.entities.clip import Clip
from clipstash.domain.interfaces.repositories import IClipRepository, Transaction
from clipstash.domain.value_objects import (
    ApiKey,
    ClipId,
    Content,
    Expires,
    Password,
    ShortCode,
    Title,
)

logger = structlog.get_logger(__name__)


class InMemoryTransaction:
    """Marker handed out by `begin_transaction`. Writes apply immediately."""

    def __init__(self) -> None:
        self.committed = False


class InMemoryClipRepository(IClipRepository):
    """Dictionary-backed `IClipRepository`."""

    def __init__(self) -> None:
        self._clips: Dict[ShortCode, Clip] = {}
        self._api_keys: Set[bytes] = set()
        self._lock = threading.Lock()
        logger.debug("InMemoryClipRepository initialized")

    async def find_clip(self, shortcode: ShortCode) -> Optional[Clip]:
        with self._lock:
            return self._clips.get(shortcode)

    async def insert_clip(self, clip: Clip) -> Clip:
        if clip.id.is_nil:
            clip = replace(clip, id=ClipId.generate())
        with self._lock:
            self._clips[clip.shortcode] = clip
        return clip

    async def update_clip(
        self,
        shortcode: ShortCode,
        content: Content,
        title: Title,
        expires: Expires,
        password: Password,
    ) -> Clip:
        with self._lock:
            current = self._clips.get(shortcode)
            if current is None:
                raise NotFoundError()
            updated = replace(current, content=content, title=title, expires=expires, password=password)
            self._clips[shortcode] = updated
        return updated

    async def delete_clip(self, shortcode: ShortCode) -> bool:
        with self._lock:
            return self._clips.pop(shortcode, None) is not None

    async def delete_expired_clips(self, now: datetime) -> int:
        with self._lock:
            expired = [code for code, clip in self._clips.items() if clip.is_expired(now)]
            for code in expired:
                del self._clips[code]
        return len(expired)

    async def begin_transaction(self) -> Transaction:
        return InMemoryTransaction()

    async def increase_hit_count(self, shortcode: ShortCode, delta: int) -> None:
        with self._lock:
            current = self._clips.get(shortcode)
            if current is None:
                raise NotFoundError()
            self._clips[shortcode] = replace(current, hits=current.hits.increased(delta))

    async def end_transaction(self, transaction: Transaction) -> None:
        transaction.committed = True

    async def insert_api_key(self, key: ApiKey) -> ApiKey:
        with self._lock:
            self._api_keys.add(key.value)
        return key

    async def find_api_key(self, key: ApiKey) -> bool:
        with self._lock:
            return key.value in self._api_keys

    async def revoke_api_key(self, key: ApiKey) -> bool:
        with self._lock:
            if key.value not in self._api_keys:
                return False
            self._api_keys.discard(key.value)
            return True
