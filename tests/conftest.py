"""Shared pytest fixtures for registry and API tests."""

import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shortener.dependencies import get_registry
from shortener.main import app
from shortener.registry import CodeRegistry


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime.datetime | None = None) -> None:
        self.now = start or datetime.datetime(2024, 3, 1, tzinfo=datetime.timezone.utc)
        self.calls: list[datetime.datetime] = []

    def __call__(self) -> datetime.datetime:
        self.now += datetime.timedelta(seconds=1)
        self.calls.append(self.now)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> CodeRegistry:
    return CodeRegistry(clock=clock)


@pytest_asyncio.fixture(scope="function")
async def client(registry: CodeRegistry) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
