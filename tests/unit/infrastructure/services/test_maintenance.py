"""Tests for the expired clip sweeper."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from clipstash.core.exceptions import DatabaseError
from clipstash.domain.value_objects import Expires
from clipstash.infrastructure.services.maintenance import Maintenance


def past() -> Expires:
    return Expires(datetime.now(timezone.utc) - timedelta(minutes=1))


@pytest.mark.asyncio
async def test_run_once_deletes_expired_clips(service_scope, clip_service, repository):
    expired = await clip_service.create("old", expires=past())
    kept = await clip_service.create("new")
    maintenance = Maintenance(service_scope)

    assert await maintenance.run_once() == 1
    assert await maintenance.run_once() == 0

    assert await repository.find_clip(expired.shortcode) is None
    assert await repository.find_clip(kept.shortcode) is not None


@pytest.mark.asyncio
async def test_run_once_logs_and_swallows_failures():
    service = AsyncMock()
    service.delete_expired.side_effect = DatabaseError("database is locked")

    @asynccontextmanager
    async def scope():
        yield service

    assert await Maintenance(scope).run_once() == 0


@pytest.mark.asyncio
async def test_periodic_sweep_survives_failures():
    service = AsyncMock()
    service.delete_expired.side_effect = [DatabaseError("boom"), 2, 0, 0, 0, 0, 0, 0, 0, 0]

    @asynccontextmanager
    async def scope():
        yield service

    maintenance = Maintenance(scope, interval=0.01)
    maintenance.start()
    try:
        for _ in range(100):
            if service.delete_expired.await_count >= 2:
                break
            await asyncio.sleep(0.01)
    finally:
        await maintenance.stop()

    assert service.delete_expired.await_count >= 2
    assert maintenance.is_running is False


@pytest.mark.asyncio
async def test_periodic_sweep_removes_expired_clip(service_scope, clip_service, repository):
    expired = await clip_service.create("old", expires=past())
    maintenance = Maintenance(service_scope, interval=0.01)
    maintenance.start()
    try:
        for _ in range(100):
            if await repository.find_clip(expired.shortcode) is None:
                break
            await asyncio.sleep(0.01)
    finally:
        await maintenance.stop()

    assert await repository.find_clip(expired.shortcode) is None


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(service_scope):
    await Maintenance(service_scope).stop()
