"""Clip Repository implementation using SQLAlchemy.

This module implements `IClipRepository` on top of an async SQLAlchemy
session. It converts between the `ClipRow` table model and the immutable
`Clip` aggregate, and translates driver errors into `DatabaseError` so that
no SQLAlchemy exception leaks into the domain.

Hit count writes made inside an open transaction each run in a SAVEPOINT, so
one failing write rolls back alone and the rest of the batch still commits.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from clipstash.core.exceptions import DatabaseError, NotFoundError
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
from clipstash.infrastructure.database.tables import ApiKeyRow, ClipRow

logger = get_logger(__name__)


def _to_db_time(moment: Optional[datetime]) -> Optional[datetime]:
    """Aware datetime -> naive UTC for storage."""
    if moment is None:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def row_to_clip(row: ClipRow) -> Clip:
    """Rebuilds the domain aggregate from a table row.

    Rows are validated on the way out exactly as input is on the way in.
    """
    return Clip(
        id=ClipId(uuid.UUID(row.clip_id)),
        shortcode=ShortCode(row.shortcode),
        content=Content(row.content),
        title=Title(row.title),
        posted=Posted(row.posted),
        expires=Expires(row.expires),
        password=Password(row.password),
        hits=Hits(row.hits or 0),
    )


class ClipRepository(IClipRepository):
    """SQLAlchemy implementation of `IClipRepository`.

    Each instance wraps one `AsyncSession`. Single-statement operations commit
    immediately; hit count batches are committed by `end_transaction`.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def find_clip(self, shortcode: ShortCode) -> Optional[Clip]:
        try:
            statement = select(ClipRow).where(ClipRow.shortcode == shortcode.value)
            result = await self.db_session.execute(statement)
            row = result.scalars().first()
        except SQLAlchemyError as e:
            self._log_error("find_clip", e, shortcode)
            raise DatabaseError("failed to load clip") from e

        logger.debug("Clip lookup completed", shortcode=shortcode.value, found=row is not None)
        return row_to_clip(row) if row is not None else None

    async def insert_clip(self, clip: Clip) -> Clip:
        clip_id = clip.id if not clip.id.is_nil else ClipId.generate()
        row = ClipRow(
            clip_id=str(clip_id),
            shortcode=clip.shortcode.value,
            content=clip.content.as_str(),
            title=clip.title.value,
            posted=_to_db_time(clip.posted.value),
            expires=_to_db_time(clip.expires.value),
            password=clip.password.value,
            hits=clip.hits.value,
        )

        try:
            self.db_session.add(row)
            await self.db_session.commit()
            await self.db_session.refresh(row)
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("insert_clip", e, clip.shortcode)
            raise DatabaseError("failed to store clip") from e

        return row_to_clip(row)

    async def update_clip(
        self,
        shortcode: ShortCode,
        content: Content,
        title: Title,
        expires: Expires,
        password: Password,
    ) -> Clip:
        try:
            statement = (
                update(ClipRow)
                .where(ClipRow.shortcode == shortcode.value)
                .values(
                    content=content.as_str(),
                    title=title.value,
                    expires=_to_db_time(expires.value),
                    password=password.value,
                )
            )
            result = await self.db_session.execute(statement)
            if result.rowcount == 0:
                await self.db_session.rollback()
                raise NotFoundError()
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("update_clip", e, shortcode)
            raise DatabaseError("failed to update clip") from e

        clip = await self.find_clip(shortcode)
        if clip is None:
            raise NotFoundError()
        return clip

    async def delete_clip(self, shortcode: ShortCode) -> bool:
        try:
            result = await self.db_session.execute(
                delete(ClipRow).where(ClipRow.shortcode == shortcode.value)
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("delete_clip", e, shortcode)
            raise DatabaseError("failed to delete clip") from e
        return result.rowcount > 0

    async def delete_expired_clips(self, now: datetime) -> int:
        try:
            result = await self.db_session.execute(
                delete(ClipRow).where(
                    ClipRow.expires.is_not(None),
                    ClipRow.expires < _to_db_time(now),
                )
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("delete_expired_clips", e)
            raise DatabaseError("failed to delete expired clips") from e
        return result.rowcount or 0

    async def begin_transaction(self) -> Transaction:
        try:
            if self.db_session.in_transaction():
                return self.db_session.get_transaction()
            return await self.db_session.begin()
        except SQLAlchemyError as e:
            self._log_error("begin_transaction", e)
            raise DatabaseError("failed to open transaction") from e

    async def increase_hit_count(self, shortcode: ShortCode, delta: int) -> None:
        statement = (
            update(ClipRow)
            .where(ClipRow.shortcode == shortcode.value)
            .values(hits=ClipRow.hits + delta)
        )
        try:
            if self.db_session.in_transaction():
                async with self.db_session.begin_nested():
                    result = await self.db_session.execute(statement)
            else:
                result = await self.db_session.execute(statement)
                await self.db_session.commit()
        except SQLAlchemyError as e:
            self._log_error("increase_hit_count", e, shortcode)
            raise DatabaseError("failed to increase hit count") from e

        if result.rowcount == 0:
            raise NotFoundError()

    async def end_transaction(self, transaction: Transaction) -> None:
        try:
            await transaction.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("end_transaction", e)
            raise DatabaseError("failed to commit transaction") from e

    async def insert_api_key(self, key: ApiKey) -> ApiKey:
        try:
            self.db_session.add(ApiKeyRow(api_key=key.value))
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("insert_api_key", e)
            raise DatabaseError("failed to store api key") from e
        return key

    async def find_api_key(self, key: ApiKey) -> bool:
        try:
            result = await self.db_session.execute(
                select(ApiKeyRow.api_key).where(ApiKeyRow.api_key == key.value)
            )
        except SQLAlchemyError as e:
            self._log_error("find_api_key", e)
            raise DatabaseError("failed to load api key") from e
        return result.first() is not None

    async def revoke_api_key(self, key: ApiKey) -> bool:
        try:
            result = await self.db_session.execute(
                delete(ApiKeyRow).where(ApiKeyRow.api_key == key.value)
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            self._log_error("revoke_api_key", e)
            raise DatabaseError("failed to revoke api key") from e
        return result.rowcount > 0

    def _log_error(self, operation: str, error: Exception, shortcode: Optional[ShortCode] = None) -> None:
        logger.error(
            "Clip repository operation failed",
            operation=operation,
            shortcode=shortcode.value if shortcode else None,
            error=str(error),
            error_type=type(error).__name__,
        )
