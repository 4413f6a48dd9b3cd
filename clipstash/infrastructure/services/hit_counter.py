"""
Background hit counter.

Request handlers report clip views with `HitCounter.notify_hit`, which only
puts a message on an unbounded queue and returns. A single daemon thread
drains the queue into an in-memory ``shortcode -> pending hits`` map and,
every ``flush_interval`` seconds, writes the accumulated deltas to the
database in one transaction.

The worker thread runs its own asyncio event loop, so its waits and its
batched writes never run on the request loop. It reaches the database through
a service scope that must open connections on that loop.

Delivery is at-most-once: hits accumulated since the last flush are lost if
the process dies, and a flush whose transaction cannot be opened or committed
drops its batch.
"""

import asyncio
import queue
import threading
import time
from dataclasses import dataclass
from typing import AsyncContextManager, Callable, Dict, Optional, Union

import structlog

from clipstash.domain.services.clip_service import ClipService
from clipstash.domain.value_objects import ShortCode

logger = structlog.get_logger(__name__)

ServiceScope = Callable[[], AsyncContextManager[ClipService]]


@dataclass(frozen=True)
class Hit:
    shortcode: ShortCode
    count: int


@dataclass(frozen=True)
class Commit:
    done: Optional[threading.Event] = None


@dataclass(frozen=True)
class Shutdown:
    pass


Message = Union[Hit, Commit, Shutdown]


class HitCounter:
    """
    Aggregates clip views and persists them in periodic batches.

    Attributes:
        flush_interval: Seconds between automatic flushes.
    """

    def __init__(
        self,
        service_scope: ServiceScope,
        flush_interval: float = 5.0,
        name: str = "hit-counter",
    ):
        """
        Initialize the hit counter. The worker is not started here.

        Args:
            service_scope: Zero-argument callable returning an async context
                manager that yields a `ClipService`. It is entered on the
                worker thread's loop.
            flush_interval: Seconds between automatic flushes.
            name: Worker thread name.
        """
        self.flush_interval = flush_interval
        self._service_scope = service_scope
        self._name = name
        self._queue: "queue.SimpleQueue[Message]" = queue.SimpleQueue()
        self._hits: Dict[ShortCode, int] = {}
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread. Calling it twice is a no-op."""
        if self.is_running:
            return

        self._thread = threading.Thread(target=self._run, daemon=True, name=self._name)
        self._thread.start()
        logger.info("hit_counter_started", flush_interval=self.flush_interval)

    def notify_hit(self, shortcode: ShortCode, count: int = 1) -> None:
        """
        Record ``count`` views of a clip without waiting for the database.

        Never raises. If the worker is not running the event is dropped and
        logged.
        """
        if count <= 0:
            return
        if not self.is_running:
            logger.warning(
                "hit_counter_event_dropped",
                shortcode=str(shortcode),
                count=count,
                reason="worker not running",
            )
            return
        self._queue.put(Hit(shortcode, count))

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Ask the worker to persist everything received so far and wait for it.

        Args:
            timeout: Seconds to wait, None to wait indefinitely.

        Returns:
            bool: True if the flush finished within ``timeout``.
        """
        if not self.is_running:
            return False

        done = threading.Event()
        self._queue.put(Commit(done))
        return done.wait(timeout)

    def stop(self, timeout: Optional[float] = 10.0) -> None:
        """
        Flush pending hits one last time and terminate the worker.
        """
        if not self.is_running:
            return

        self._queue.put(Shutdown())
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("hit_counter_stop_timeout", timeout=timeout)
        else:
            logger.info("hit_counter_stopped")

    def pending(self) -> Dict[ShortCode, int]:
        """Snapshot of the hits not yet written to the database."""
        with self._lock:
            return dict(self._hits)

    async def commit_hits(self) -> int:
        """
        Write the accumulated hits to the database.

        The accumulator is swapped for an empty one under the lock before any
        I/O. A failed write for one short code is logged and the remaining
        ones are still applied. If the transaction cannot be opened or
        committed the batch is dropped.

        Returns:
            int: Number of short codes whose hits were written.
        """
        with self._lock:
            hits, self._hits = self._hits, {}

        if not hits:
            return 0

        try:
            async with self._service_scope() as service:
                applied = await self._apply(service, hits)
        except Exception as e:
            logger.error(
                "hit_counter_flush_abandoned",
                clips=len(hits),
                lost_hits=sum(hits.values()),
                error=str(e),
                error_type=type(e).__name__,
            )
            return 0

        logger.debug("hit_counter_flushed", clips=len(hits), applied=applied)
        return applied

    async def _apply(self, service: ClipService, hits: Dict[ShortCode, int]) -> int:
        transaction = await service.begin_transaction()

        applied = 0
        for shortcode, count in hits.items():
            try:
                await service.increase_hit_count(shortcode, count)
                applied += 1
            except Exception as e:
                logger.error(
                    "hit_count_increase_failed",
                    shortcode=str(shortcode),
                    count=count,
                    error=str(e),
                    error_type=type(e).__name__,
                )

        await service.end_transaction(transaction)
        return applied

    def _record(self, hit: Hit) -> None:
        with self._lock:
            self._hits[hit.shortcode] = self._hits.get(hit.shortcode, 0) + hit.count

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(self._process())
        except Exception as e:
            logger.error("hit_counter_crashed", error=str(e), error_type=type(e).__name__)
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()

    async def _process(self) -> None:
        deadline = time.monotonic() + self.flush_interval

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                message = Commit()
            else:
                try:
                    message = self._queue.get(timeout=remaining)
                except queue.Empty:
                    message = Commit()

            if isinstance(message, Hit):
                self._record(message)
                continue

            try:
                await self.commit_hits()
            finally:
                deadline = time.monotonic() + self.flush_interval
                if isinstance(message, Commit) and message.done is not None:
                    message.done.set()

            if isinstance(message, Shutdown):
                break

        await self._close_scope()

    async def _close_scope(self) -> None:
        aclose = getattr(self._service_scope, "aclose", None)
        if aclose is not None:
            await aclose()
