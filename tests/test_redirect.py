"""Redirect and decode endpoint behavior tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_redirect_valid_code(client: AsyncClient) -> None:
    create_resp = await client.post("/api/encode", json={"url": "https://www.google.com"})
    short_code = create_resp.json()["short_code"]

    response = await client.get(f"/{short_code}", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://www.google.com"


@pytest.mark.asyncio
async def test_redirect_invalid_code(client: AsyncClient) -> None:
    response = await client.get("/nonexistent", follow_redirects=False)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_redirect_increments_visits(client: AsyncClient) -> None:
    create_resp = await client.post("/api/encode", json={"url": "https://www.python.org"})
    short_code = create_resp.json()["short_code"]

    for _ in range(3):
        await client.get(f"/{short_code}", follow_redirects=False)

    stats_resp = await client.get(f"/api/statistic/{short_code}")
    assert stats_resp.status_code == 200
    assert stats_resp.json()["visits"] == 3
    assert stats_resp.json()["last_visited"] is not None


@pytest.mark.asyncio
async def test_decode_returns_original_url(client: AsyncClient) -> None:
    create_resp = await client.post("/api/encode", json={"url": "https://example.com"})
    short_code = create_resp.json()["short_code"]

    response = await client.get(f"/api/decode/{short_code}")
    assert response.status_code == 200
    assert response.json() == {"original_url": "https://example.com"}


@pytest.mark.asyncio
async def test_decode_does_not_count_visits(client: AsyncClient) -> None:
    create_resp = await client.post("/api/encode", json={"url": "https://example.com"})
    short_code = create_resp.json()["short_code"]

    await client.get(f"/api/decode/{short_code}")

    stats_resp = await client.get(f"/api/statistic/{short_code}")
    assert stats_resp.json()["visits"] == 0


@pytest.mark.asyncio
async def test_decode_invalid_code(client: AsyncClient) -> None:
    response = await client.get("/api/decode/nonexistent")
    assert response.status_code == 404
    assert response.json()["detail"] == "Short URL not found"
