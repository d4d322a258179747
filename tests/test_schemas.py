"""Schema, enum and settings wiring tests."""

import datetime

import pytest
from pydantic import ValidationError

from shortener.config import Settings
from shortener.enums import HealthStatus
from shortener.models import UrlRecord, UrlStatistics
from shortener.registry import CodeRegistry
from shortener.schemas import URLCreate, URLResponse, URLStats, build_short_url

CREATED = datetime.datetime(2024, 3, 1, tzinfo=datetime.timezone.utc)


@pytest.fixture
def record() -> UrlRecord:
    return UrlRecord(
        id="abcdefgh12345678901234",
        short_code="abcdefgh",
        original_url="https://example.com",
        created_at=CREATED,
    )


def test_health_status_values() -> None:
    assert [status.value for status in HealthStatus] == ["healthy", "unhealthy"]


def test_url_response_from_record(record: UrlRecord) -> None:
    response = URLResponse.from_record(record, "https://sho.rt/")

    assert response.short_url == "https://sho.rt/abcdefgh"
    assert response.short_code == "abcdefgh"
    assert response.visits == 0
    assert response.last_visited is None
    assert "from_attributes" not in URLResponse.model_config


def test_url_stats_from_statistics(record: UrlRecord) -> None:
    record.mark_visited(CREATED + datetime.timedelta(minutes=5))

    stats = URLStats.model_validate(record.statistics())

    assert stats.visits == 1
    assert stats.created_at == CREATED
    assert stats.last_visited == CREATED + datetime.timedelta(minutes=5)


def test_url_stats_accepts_statistics_snapshot() -> None:
    snapshot = UrlStatistics(
        short_code="abcdefgh",
        original_url="https://example.com",
        visits=0,
        created_at=CREATED,
    )
    assert URLStats.model_validate(snapshot).short_code == "abcdefgh"


def test_build_short_url() -> None:
    assert build_short_url("http://localhost:3000", "abc") == "http://localhost:3000/abc"


@pytest.mark.parametrize("url", ["not-a-url", "", "example.com", "ftp//broken"])
def test_url_create_rejects_malformed(url: str) -> None:
    with pytest.raises(ValidationError):
        URLCreate(url=url)


def test_registry_from_settings() -> None:
    settings = Settings(SHORT_CODE_LENGTH=6, CODE_ID_LENGTH=12, CODE_ALLOCATION_MAX_ATTEMPTS=3)
    registry = CodeRegistry.from_settings(settings)

    record = registry.register("https://example.com")

    assert len(record.short_code) == 6
    assert len(record.id) == 12
    assert record.id.startswith(record.short_code)
