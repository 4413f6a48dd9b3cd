"""End-to-end tests of the clip JSON API.

The application runs with its real lifespan: tables are created in the test
SQLite file and the hit counter thread and sweeper are started.
"""

import asyncio

import pytest

from clipstash.domain.value_objects import ApiKey


async def create_clip(client, api_key, **payload):
    payload.setdefault("content", "hello")
    response = await client.post("/api/v1/clips", json=payload, headers={"x-api-key": api_key})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health(async_client):
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["env"] == "test"
    assert body["services"]["database"]["status"] == "healthy"


@pytest.mark.asyncio
async def test_issue_api_key(async_client):
    response = await async_client.post("/api/v1/keys")

    assert response.status_code == 201
    assert len(ApiKey.from_base64(response.json()["api_key"]).value) == 16


@pytest.mark.asyncio
async def test_create_and_get_clip(async_client, api_key):
    created = await create_clip(async_client, api_key, content="hello", title="greeting")

    response = await async_client.get(
        f"/api/v1/clips/{created['shortcode']}", headers={"x-api-key": api_key}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["content"] == "hello"
    assert body["title"] == "greeting"
    assert body["hits"] == 0
    assert body["has_password"] is False
    assert "password" not in body
    assert body["id"] == created["id"]


@pytest.mark.asyncio
async def test_clip_routes_require_api_key(async_client):
    response = await async_client.post("/api/v1/clips", json={"content": "hello"})

    assert response.status_code == 400
    assert response.json()["detail"] == "API key required"


@pytest.mark.asyncio
async def test_malformed_api_key_rejected(async_client):
    response = await async_client.post(
        "/api/v1/clips", json={"content": "hello"}, headers={"x-api-key": "not base64!"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid API key"


@pytest.mark.asyncio
async def test_unknown_api_key_rejected(async_client):
    response = await async_client.post(
        "/api/v1/clips",
        json={"content": "hello"},
        headers={"x-api-key": ApiKey.generate().to_base64()},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "API key not found"


@pytest.mark.asyncio
async def test_revoked_api_key_rejected(async_client, api_key):
    response = await async_client.delete("/api/v1/keys", headers={"x-api-key": api_key})
    assert response.status_code == 200

    response = await async_client.post(
        "/api/v1/clips", json={"content": "hello"}, headers={"x-api-key": api_key}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_empty_content_is_a_parsing_error(async_client, api_key):
    response = await async_client.post(
        "/api/v1/clips", json={"content": ""}, headers={"x-api-key": api_key}
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "clip parsing error: empty content", "code": "EmptyContent"}


@pytest.mark.asyncio
async def test_malformed_expiry_is_a_parsing_error(async_client, api_key):
    response = await async_client.post(
        "/api/v1/clips",
        json={"content": "hello", "expires": "next tuesday"},
        headers={"x-api-key": api_key},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "InvalidDate"


@pytest.mark.asyncio
async def test_unknown_and_malformed_shortcodes_are_not_found(async_client, api_key):
    for code in ("doesnotexist", "bad!code"):
        response = await async_client.get(f"/api/v1/clips/{code}", headers={"x-api-key": api_key})

        assert response.status_code == 404
        assert response.json() == {"detail": "entity not found"}


@pytest.mark.asyncio
async def test_expired_clip_is_not_found(async_client, api_key):
    created = await create_clip(async_client, api_key, expires="2000-01-01")

    response = await async_client.get(
        f"/api/v1/clips/{created['shortcode']}", headers={"x-api-key": api_key}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_protected_clip(async_client, api_key):
    created = await create_clip(async_client, api_key, content="secret stuff", password="s3cret")
    url = f"/api/v1/clips/{created['shortcode']}"
    assert created["has_password"] is True

    response = await async_client.get(url, headers={"x-api-key": api_key})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid password"}

    response = await async_client.get(url, headers={"x-api-key": api_key, "x-clip-password": "wrong"})
    assert response.status_code == 401

    response = await async_client.get(url, headers={"x-api-key": api_key, "x-clip-password": "s3cret"})
    assert response.status_code == 200
    assert response.json()["content"] == "secret stuff"

    async_client.cookies.set("password", "s3cret")
    try:
        response = await async_client.get(url, headers={"x-api-key": api_key})
    finally:
        async_client.cookies.clear()
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_update_clip(async_client, api_key):
    created = await create_clip(async_client, api_key, content="v1", password="s3cret")
    url = f"/api/v1/clips/{created['shortcode']}"

    response = await async_client.put(
        url, json={"content": "v2", "password": "wrong"}, headers={"x-api-key": api_key}
    )
    assert response.status_code == 401

    response = await async_client.put(
        url,
        json={"content": "v2", "title": "edited", "password": "s3cret"},
        headers={"x-api-key": api_key},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["content"] == "v2"
    assert body["title"] == "edited"
    assert body["shortcode"] == created["shortcode"]
    assert body["id"] == created["id"]
    assert body["posted"] == created["posted"]
    assert body["has_password"] is True


@pytest.mark.asyncio
async def test_update_rejects_empty_content(async_client, api_key):
    created = await create_clip(async_client, api_key)

    response = await async_client.put(
        f"/api/v1/clips/{created['shortcode']}", json={"content": ""}, headers={"x-api-key": api_key}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_clip(async_client, api_key):
    created = await create_clip(async_client, api_key)
    url = f"/api/v1/clips/{created['shortcode']}"

    response = await async_client.delete(url, headers={"x-api-key": api_key})
    assert response.status_code == 200

    response = await async_client.get(url, headers={"x-api-key": api_key})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_raw_clip(async_client, api_key):
    created = await create_clip(async_client, api_key, content="line 1\nline 2", password="pw")
    url = f"/clip/raw/{created['shortcode']}"

    response = await async_client.get(url)
    assert response.status_code == 401

    async_client.cookies.set("password", "pw")
    try:
        response = await async_client.get(url)
    finally:
        async_client.cookies.clear()
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "line 1\nline 2"


@pytest.mark.asyncio
async def test_views_are_counted_after_flush(app, async_client, api_key):
    created = await create_clip(async_client, api_key)
    url = f"/api/v1/clips/{created['shortcode']}"

    for _ in range(2):
        assert (await async_client.get(url, headers={"x-api-key": api_key})).status_code == 200
    assert (await async_client.get(f"/clip/raw/{created['shortcode']}")).status_code == 200

    assert await asyncio.to_thread(app.state.hit_counter.flush, 10) is True

    response = await async_client.get(url, headers={"x-api-key": api_key})
    assert response.json()["hits"] == 3
