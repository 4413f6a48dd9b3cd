"""Clip Domain Service.

This service orchestrates the clip lifecycle: creation, password-checked
retrieval and update, explicit deletion, expiry and the hit count writes that
the background hit counter performs. It also issues and validates the API
keys that gate the JSON API.

The service holds no state of its own besides its collaborators. Every
storage call goes through `IClipRepository`.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Union

import structlog

from clipstash.core.exceptions import (
    ApiKeyNotFoundError,
    ClipstashError,
    DatabaseError,
    NotFoundError,
    PermissionError,
)
from clipstash.domain.entities.clip import Clip
from clipstash.domain.interfaces.repositories import IClipRepository, Transaction
from clipstash.domain.value_objects import (
    ApiKey,
    ClipId,
    Content,
    Expires,
    Hits,
    Password,
    Posted,
    ShortCode,
    Title,
)

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]

INVALID_PASSWORD_MESSAGE = "Invalid password"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _shortcode(value: Union[ShortCode, str]) -> ShortCode:
    return value if isinstance(value, ShortCode) else ShortCode(value)


def _password(value: Union[Password, str, None]) -> Password:
    return value if isinstance(value, Password) else Password(value)


class ClipService:
    """Domain service for clip operations.

    Responsibilities:
    - Create clips with a fresh short code, id and timestamp
    - Enforce lazy expiry and password access rules on reads and writes
    - Apply hit count deltas on behalf of the hit counter
    - Delete expired clips on behalf of the maintenance sweeper
    - Issue, validate and revoke API keys
    """

    def __init__(
        self,
        repository: IClipRepository,
        clock: Optional[Clock] = None,
        shortcode_bytes: int = 8,
        api_key_bytes: int = ApiKey.DEFAULT_BYTES,
    ):
        """Initialize the clip service.

        Args:
            repository: Persistence gateway for clips and API keys
            clock: Source of the current time, UTC-aware
            shortcode_bytes: Random bytes per generated short code
            api_key_bytes: Random bytes per generated API key
        """
        self._repository = repository
        self._clock = clock or _utcnow
        self._shortcode_bytes = shortcode_bytes
        self._api_key_bytes = api_key_bytes

        logger.debug("ClipService initialized")

    # ------------------------------------------------------------------
    # Clip lifecycle
    # ------------------------------------------------------------------

    async def create(
        self,
        content: Union[Content, str],
        title: Optional[Title] = None,
        password: Optional[Password] = None,
        expires: Optional[Expires] = None,
    ) -> Clip:
        """Create and persist a new clip.

        Args:
            content: Clip body; a raw string is validated here
            title: Optional title
            password: Optional access password
            expires: Optional expiry

        Returns:
            Clip: The stored clip with zero hits

        Raises:
            ClipError: If the content is empty
            DatabaseError: If the clip could not be stored
        """
        content = content if isinstance(content, Content) else Content(content)

        clip = Clip(
            id=ClipId.generate(),
            shortcode=ShortCode.generate(self._shortcode_bytes),
            content=content,
            title=title or Title(),
            posted=Posted(self._clock()),
            expires=expires or Expires(),
            password=password or Password(),
            hits=Hits(0),
        )

        try:
            stored = await self._repository.insert_clip(clip)
        except ClipstashError:
            raise
        except Exception as e:
            logger.error("Failed to store new clip", error=str(e), error_type=type(e).__name__)
            raise DatabaseError("failed to store clip") from e

        logger.info(
            "Clip created",
            shortcode=str(stored.shortcode),
            protected=stored.is_protected(),
            expires=str(stored.expires) or None,
        )
        return stored

    async def get(
        self,
        shortcode: Union[ShortCode, str],
        password: Union[Password, str, None] = None,
    ) -> Clip:
        """Fetch a clip, enforcing expiry and password rules.

        Args:
            shortcode: Public short code
            password: Password presented by the caller, if any

        Returns:
            Clip: The requested clip

        Raises:
            NotFoundError: If the clip is absent or its expiry has passed
            PermissionError: If the clip is protected and the password is wrong
        """
        shortcode = _shortcode(shortcode)
        clip = await self._find_live_clip(shortcode)

        if not clip.password.matches(_password(password)):
            logger.info("Clip access denied", shortcode=str(shortcode))
            raise PermissionError(INVALID_PASSWORD_MESSAGE)

        return clip

    async def update(
        self,
        shortcode: Union[ShortCode, str],
        content: Union[Content, str],
        password: Union[Password, str, None] = None,
        title: Optional[Title] = None,
        expires: Optional[Expires] = None,
        new_password: Optional[Password] = None,
    ) -> Clip:
        """Replace the content, title and expiry of a clip.

        The caller must pass the same password check as `get`. The password
        itself is replaced by ``new_password`` when that is non-blank; if no
        separate new password is given the supplied one is kept as the clip's
        password (a blank one leaves the stored password untouched).

        Returns:
            Clip: The updated clip, with short code, id, posted and hits preserved

        Raises:
            ClipError: If the new content is empty
            NotFoundError: If the clip is absent or expired
            PermissionError: If the password check fails
        """
        shortcode = _shortcode(shortcode)
        content = content if isinstance(content, Content) else Content(content)
        supplied = _password(password)

        current = await self.get(shortcode, supplied)
        replacement = new_password if new_password is not None else supplied
        updated = current.with_changes(
            content=content,
            title=title or Title(),
            expires=expires or Expires(),
            password=replacement,
        )

        stored = await self._repository.update_clip(
            shortcode,
            content=updated.content,
            title=updated.title,
            expires=updated.expires,
            password=updated.password,
        )
        logger.info("Clip updated", shortcode=str(shortcode))
        return stored

    async def delete(
        self,
        shortcode: Union[ShortCode, str],
        password: Union[Password, str, None] = None,
    ) -> None:
        """Explicitly delete a clip under the same access rules as `get`."""
        shortcode = _shortcode(shortcode)
        await self.get(shortcode, password)
        if not await self._repository.delete_clip(shortcode):
            raise NotFoundError()
        logger.info("Clip deleted", shortcode=str(shortcode))

    async def delete_expired(self) -> int:
        """Delete every clip whose expiry has passed.

        Idempotent: with nothing newly expired it deletes nothing.

        Returns:
            int: Number of clips removed
        """
        removed = await self._repository.delete_expired_clips(self._clock())
        if removed:
            logger.info("Expired clips deleted", count=removed)
        return removed

    # ------------------------------------------------------------------
    # Hit counting (hit counter flush only)
    # ------------------------------------------------------------------

    async def begin_transaction(self) -> Transaction:
        return await self._repository.begin_transaction()

    async def increase_hit_count(self, shortcode: Union[ShortCode, str], delta: int) -> None:
        """Add ``delta`` views to a clip's stored hit count."""
        if delta <= 0:
            return
        await self._repository.increase_hit_count(_shortcode(shortcode), delta)

    async def end_transaction(self, transaction: Transaction) -> None:
        await self._repository.end_transaction(transaction)

    # ------------------------------------------------------------------
    # API keys
    # ------------------------------------------------------------------

    async def generate_api_key(self) -> ApiKey:
        """Issue and persist a new API key."""
        key = await self._repository.insert_api_key(ApiKey.generate(self._api_key_bytes))
        logger.info("API key issued")
        return key

    async def api_key_is_valid(self, key: ApiKey) -> bool:
        return await self._repository.find_api_key(key)

    async def revoke_api_key(self, key: ApiKey) -> None:
        """Revoke an API key.

        Raises:
            ApiKeyNotFoundError: If the key is unknown
        """
        if not await self._repository.revoke_api_key(key):
            raise ApiKeyNotFoundError()
        logger.info("API key revoked")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _find_live_clip(self, shortcode: ShortCode) -> Clip:
        clip = await self._repository.find_clip(shortcode)
        if clip is None:
            raise NotFoundError()
        if clip.is_expired(self._clock()):
            logger.debug("Expired clip requested", shortcode=str(shortcode))
            raise NotFoundError()
        return clip
