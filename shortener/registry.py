"""Code Registry - Core Business Logic

This module owns the mapping between short codes and URL records. It generates
codes, stores records and serves the register / resolve / record-visit / list /
search / remove / statistics operations.

Architecture Overview
==================
::
    ┌──────────────────────────────────────────────────┐
    │                  CodeRegistry                    │
    │  ┌───────────────┐        ┌───────────────────┐  │
    │  │  threading.   │ guards │ dict[str,         │  │
    │  │  Lock         │───────▶│      UrlRecord]   │  │
    │  └───────────────┘        └───────────────────┘  │
    │          ▲                                       │
    │          │ every public operation                │
    └──────────┼───────────────────────────────────────┘
               │
    ┌──────────┴──────────┐
    │  HTTP routes        │
    │  (shortener.routes) │
    └─────────────────────┘

Registration Flow
-----------------
::
    ┌─────────────┐
    │ register()  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ acquire lock│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ draw id,    │◀─────┐
    │ take prefix │      │ taken and
    └──────┬──────┘      │ attempts left
    FREE? │              │
    ┌─────┴─────┐        │
    │ NO        │ YES    │
    ▼           ▼        │
 retry ─────────┘  ┌─────────────┐
                   │ insert,     │
                   │ release lock│
                   └─────────────┘

Lookups return ``None`` when a code is unknown. ``record_visit`` and
``remove`` return booleans instead of raising for a missing code.

Usage Examples
=============
```python
registry = CodeRegistry()
record = registry.register("https://example.com")
registry.record_visit(record.short_code)
stats = registry.statistics(record.short_code)
assert stats.visits == 1
```
"""

import datetime
import logging
import threading
from typing import Callable, Optional

from prometheus_client import Counter, Gauge

from shortener.codes import derive_short_code, generate_identifier
from shortener.config import Settings
from shortener.enums import RequestStatus
from shortener.exceptions import CodeAllocationError
from shortener.models import UrlRecord, UrlStatistics

__all__ = ["CodeRegistry", "MIN_SEARCH_QUERY_LENGTH"]

logger = logging.getLogger("shortener.registry")

DEFAULT_CODE_LENGTH = 8
DEFAULT_MAX_ATTEMPTS = 16
# product rule: shorter queries never match anything
MIN_SEARCH_QUERY_LENGTH = 3


# ============================================================================
# PROMETHEUS METRICS
# ============================================================================

REGISTRATIONS_TOTAL = Counter(
    "url_shortener_registrations_total",
    "Total register() calls",
    ["status"],
)
LOOKUPS_TOTAL = Counter(
    "url_shortener_lookups_total",
    "Total resolve() calls",
    ["status"],
)
VISITS_TOTAL = Counter(
    "url_shortener_visits_total",
    "Total visits recorded against live short codes",
)
REMOVALS_TOTAL = Counter(
    "url_shortener_removals_total",
    "Total records removed",
)
CODE_COLLISIONS_TOTAL = Counter(
    "url_shortener_code_collisions_total",
    "Short code draws rejected because the code was already registered",
)
RECORDS_LIVE = Gauge(
    "url_shortener_records_live",
    "Records currently held by the registry",
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class CodeRegistry:
    """Thread-safe in-memory store of short code -> UrlRecord.

    A single lock guards the mapping for the full duration of each operation.
    Operations are short (O(1), or O(n) for list/search) and never block on
    I/O, so one coarse lock is enough.

    Args:
        code_length: Number of identifier characters used as the short code.
        max_attempts: Draws allowed before ``register`` gives up.
        id_factory: Returns a fresh random identifier; defaults to nanoid.
        clock: Returns the current time; defaults to UTC now.
    """

    def __init__(
        self,
        code_length: int = DEFAULT_CODE_LENGTH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ) -> None:
        assert code_length > 0, f"code_length must be positive, got {code_length!r}"
        assert max_attempts > 0, f"max_attempts must be positive, got {max_attempts!r}"
        self._code_length = code_length
        self._max_attempts = max_attempts
        self._id_factory = id_factory or generate_identifier
        self._clock = clock or _utcnow
        self._records: dict[str, UrlRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CodeRegistry":
        return cls(
            code_length=settings.SHORT_CODE_LENGTH,
            max_attempts=settings.CODE_ALLOCATION_MAX_ATTEMPTS,
            id_factory=lambda: generate_identifier(settings.CODE_ID_LENGTH),
        )

    # ========================================================================
    # PUBLIC API METHODS
    # ========================================================================

    def register(self, original_url: str) -> UrlRecord:
        """Store ``original_url`` under a freshly allocated short code.

        The URL is expected to be validated by the caller. The existence check
        and the insert happen under the same lock, so two concurrent calls can
        never claim the same code.

        Raises:
            CodeAllocationError: If every draw collided with a live code.
        """
        with self._lock:
            for attempt in range(1, self._max_attempts + 1):
                identifier = self._id_factory()
                short_code = derive_short_code(identifier, self._code_length)
                if short_code in self._records:
                    CODE_COLLISIONS_TOTAL.inc()
                    logger.warning(f"Short code collision on attempt {attempt}: {short_code}")
                    continue

                record = UrlRecord(
                    id=identifier,
                    short_code=short_code,
                    original_url=original_url,
                    created_at=self._clock(),
                )
                self._records[short_code] = record
                RECORDS_LIVE.set(len(self._records))
                REGISTRATIONS_TOTAL.labels(status=RequestStatus.SUCCESS).inc()
                logger.info(f"Registered {short_code} -> {original_url}")
                return record.snapshot()

        REGISTRATIONS_TOTAL.labels(status=RequestStatus.ERROR).inc()
        logger.error(f"Short code allocation exhausted after {self._max_attempts} attempts")
        raise CodeAllocationError(self._max_attempts)

    def resolve(self, code: str) -> Optional[UrlRecord]:
        """Exact-match lookup. Returns ``None`` for an unknown code."""
        with self._lock:
            record = self._records.get(code)
            if record is None:
                LOOKUPS_TOTAL.labels(status=RequestStatus.NOT_FOUND).inc()
                return None
            LOOKUPS_TOTAL.labels(status=RequestStatus.SUCCESS).inc()
            return record.snapshot()

    def record_visit(self, code: str) -> bool:
        """Count one visit against ``code``.

        Returns False, without raising, when the code is not registered.
        """
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return False
            record.mark_visited(self._clock())
            VISITS_TOTAL.inc()
            return True

    def list_all(self) -> list[UrlRecord]:
        with self._lock:
            return [record.snapshot() for record in self._records.values()]

    def search(self, query: str) -> list[UrlRecord]:
        """Case-insensitive substring match on the original URL.

        Queries shorter than the minimum length match nothing, whatever the
        registry holds. Results come back in insertion order.
        """
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            return []

        needle = query.lower()
        with self._lock:
            return [
                record.snapshot()
                for record in self._records.values()
                if needle in record.original_url.lower()
            ]

    def remove(self, code: str) -> bool:
        with self._lock:
            record = self._records.pop(code, None)
            if record is None:
                return False
            RECORDS_LIVE.set(len(self._records))
            REMOVALS_TOTAL.inc()
            logger.info(f"Removed {code}")
            return True

    def statistics(self, code: str) -> Optional[UrlStatistics]:
        with self._lock:
            record = self._records.get(code)
            if record is None:
                return None
            return record.statistics()

    def clear(self) -> None:
        """Drop every record. Called at application shutdown."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
            RECORDS_LIVE.set(0)
        logger.info(f"Registry cleared ({count} records dropped)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._records
