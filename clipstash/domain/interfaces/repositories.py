"""Repository interfaces for abstracting clip persistence in the domain layer.

This module defines the "port" the domain uses to reach durable storage. The
concrete adapters live in the `infrastructure` layer and translate these
calls into SQL (or into an in-memory store for development and tests).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from clipstash.domain.entities.clip import Clip
from clipstash.domain.value_objects import ApiKey, Content, Expires, Password, ShortCode, Title

# Opaque handle returned by `begin_transaction`; only the issuing repository
# knows what it is.
Transaction = Any


class IClipRepository(ABC):
    """An interface defining the contract for clip and API key persistence.

    All operations are keyed by `ShortCode`. Storage failures surface as
    `DatabaseError`.
    """

    @abstractmethod
    async def find_clip(self, shortcode: ShortCode) -> Optional[Clip]:
        """Retrieves a clip by short code.

        Expired clips are returned as stored; deciding that they are gone is
        the service's job.

        Returns:
            The clip, or ``None`` if no row exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def insert_clip(self, clip: Clip) -> Clip:
        """Persists a new clip and returns it as stored."""
        raise NotImplementedError

    @abstractmethod
    async def update_clip(
        self,
        shortcode: ShortCode,
        content: Content,
        title: Title,
        expires: Expires,
        password: Password,
    ) -> Clip:
        """Replaces the mutable fields of a clip.

        Raises:
            NotFoundError: If no clip has this short code.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_clip(self, shortcode: ShortCode) -> bool:
        """Deletes one clip. Returns whether a row was removed."""
        raise NotImplementedError

    @abstractmethod
    async def delete_expired_clips(self, now: datetime) -> int:
        """Deletes every clip whose expiry lies before ``now``.

        Returns:
            The number of clips removed.
        """
        raise NotImplementedError

    @abstractmethod
    async def begin_transaction(self) -> Transaction:
        """Opens a transaction for a batch of hit count writes."""
        raise NotImplementedError

    @abstractmethod
    async def increase_hit_count(self, shortcode: ShortCode, delta: int) -> None:
        """Adds ``delta`` to the stored hit count of a clip.

        Within an open transaction a failure of one call must not spoil the
        transaction for the calls that follow.
        """
        raise NotImplementedError

    @abstractmethod
    async def end_transaction(self, transaction: Transaction) -> None:
        """Commits a transaction opened by `begin_transaction`."""
        raise NotImplementedError

    @abstractmethod
    async def insert_api_key(self, key: ApiKey) -> ApiKey:
        raise NotImplementedError

    @abstractmethod
    async def find_api_key(self, key: ApiKey) -> bool:
        """Whether the key is known (issued and not revoked)."""
        raise NotImplementedError

    @abstractmethod
    async def revoke_api_key(self, key: ApiKey) -> bool:
        """Deletes a key. Returns whether it existed."""
        raise NotImplementedError
