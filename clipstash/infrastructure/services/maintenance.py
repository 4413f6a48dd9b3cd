"""
Expired clip sweeper.

Runs on the application event loop and deletes expired clips at a fixed
interval. Expired clips are already unreachable through `ClipService.get`;
this only reclaims their storage.
"""

import asyncio
from contextlib import suppress
from typing import Optional

import structlog

from clipstash.infrastructure.services.hit_counter import ServiceScope

logger = structlog.get_logger(__name__)


class Maintenance:
    """Periodic task calling `ClipService.delete_expired`."""

    def __init__(self, service_scope: ServiceScope, interval: float = 10.0):
        self.interval = interval
        self._service_scope = service_scope
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="maintenance")
        logger.info("maintenance_started", interval=self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("maintenance_stopped")

    async def run_once(self) -> int:
        """
        Delete expired clips once. Failures are logged, not raised.

        Returns:
            int: Number of clips removed.
        """
        try:
            async with self._service_scope() as service:
                return await service.delete_expired()
        except Exception as e:
            logger.error("maintenance_sweep_failed", error=str(e), error_type=type(e).__name__)
            return 0

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.run_once()
