"""Health endpoint and application lifecycle tests."""

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from shortener.dependencies import get_registry
from shortener.enums import HealthStatus
from shortener.main import app, lifespan
from shortener.registry import CodeRegistry


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    await client.post("/api/encode", json={"url": "https://example.com"})

    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == HealthStatus.HEALTHY.value
    assert data["registry"] == HealthStatus.HEALTHY.value
    assert data["records"] == 1


@pytest.mark.asyncio
async def test_lifespan_creates_and_clears_registry() -> None:
    async with lifespan(app):
        registry = app.state.registry
        assert isinstance(registry, CodeRegistry)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.post("/api/encode", json={"url": "https://example.com"})
            assert response.status_code == 201
        assert len(registry) == 1

    assert len(registry) == 0
    assert app.state.registry is None


def test_registry_missing_outside_lifespan() -> None:
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))
    with pytest.raises(RuntimeError, match="not initialized"):
        get_registry(request)


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient) -> None:
    await client.post("/api/encode", json={"url": "https://example.com"})

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "url_shortener_registrations_total" in response.text
