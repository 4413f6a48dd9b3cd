from datetime import datetime, timedelta, timezone

import pytest

from clipstash.core.exceptions import NotFoundError
from clipstash.domain.entities import Clip
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

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


def new_clip(code: str, expires: Expires = Expires()) -> Clip:
    return Clip(shortcode=ShortCode(code), content=Content("x"), posted=Posted(NOW), expires=expires)


@pytest.mark.asyncio
async def test_insert_assigns_id(repository):
    stored = await repository.insert_clip(new_clip("abc"))

    assert stored.id != ClipId()
    assert await repository.find_clip(ShortCode("abc")) == stored


@pytest.mark.asyncio
async def test_update_and_missing(repository):
    await repository.insert_clip(new_clip("abc"))

    updated = await repository.update_clip(ShortCode("abc"), Content("y"), Title("t"), Expires(), Password("p"))
    assert updated.content == Content("y")

    with pytest.raises(NotFoundError):
        await repository.update_clip(ShortCode("zzz"), Content("y"), Title(), Expires(), Password())


@pytest.mark.asyncio
async def test_delete_expired_clips(repository):
    await repository.insert_clip(new_clip("old", Expires(NOW - timedelta(seconds=1))))
    await repository.insert_clip(new_clip("new", Expires(NOW + timedelta(seconds=1))))

    assert await repository.delete_expired_clips(NOW) == 1
    assert await repository.find_clip(ShortCode("old")) is None
    assert await repository.find_clip(ShortCode("new")) is not None


@pytest.mark.asyncio
async def test_hit_count_transaction(repository):
    await repository.insert_clip(new_clip("abc"))

    transaction = await repository.begin_transaction()
    await repository.increase_hit_count(ShortCode("abc"), 2)
    with pytest.raises(NotFoundError):
        await repository.increase_hit_count(ShortCode("zzz"), 2)
    await repository.end_transaction(transaction)

    assert transaction.committed is True
    assert (await repository.find_clip(ShortCode("abc"))).hits == Hits(2)


@pytest.mark.asyncio
async def test_api_keys(repository):
    key = await repository.insert_api_key(ApiKey.generate())

    assert await repository.find_api_key(key) is True
    assert await repository.revoke_api_key(key) is True
    assert await repository.revoke_api_key(key) is False
