"""In-memory record types for the URL shortener application.

This module defines the records held by the code registry. There is no
database: a record lives in the registry's mapping until it is removed or the
process exits.

Data Model Layout
=================
::
    UrlRecord
    ├─ id: str (random identifier, never reused)
    ├─ short_code: str (first 8 chars of id, UNIQUE key)
    ├─ original_url: str
    ├─ created_at: datetime (UTC)
    ├─ visits: int (starts at 0)
    └─ last_visited: datetime | None

    UrlStatistics
    ├─ short_code: str
    ├─ original_url: str
    ├─ visits: int
    ├─ created_at: datetime
    └─ last_visited: datetime | None

How to Use
===========
**Step 1 — Import**::
    from shortener.models import UrlRecord

**Step 2 — Take a snapshot before handing a record out**::
    record = UrlRecord(id=..., short_code=..., original_url=..., created_at=now)
    public = record.snapshot()

**Step 3 — Record a visit (registry only)**::
    record.mark_visited(now)

Key Behaviours
===============
- last_visited is None exactly while visits == 0.
- original_url, short_code, id and created_at never change after creation.
- Callers only ever see snapshots, never the stored instance.

Classes:
    UrlRecord:  A short code mapped to its original URL plus visit metadata.
    UrlStatistics:  Visit counters for a single record.
"""

import dataclasses
import datetime
from dataclasses import dataclass
from typing import Optional

__all__ = ["UrlRecord", "UrlStatistics"]


@dataclass
class UrlRecord:
    id: str
    short_code: str
    original_url: str
    created_at: datetime.datetime
    visits: int = 0
    last_visited: Optional[datetime.datetime] = None

    def mark_visited(self, when: datetime.datetime) -> None:
        self.visits += 1
        self.last_visited = when

    def snapshot(self) -> "UrlRecord":
        """Return a detached copy safe to hand outside the registry."""
        return dataclasses.replace(self)

    def statistics(self) -> "UrlStatistics":
        return UrlStatistics(
            short_code=self.short_code,
            original_url=self.original_url,
            visits=self.visits,
            created_at=self.created_at,
            last_visited=self.last_visited,
        )

    def __repr__(self) -> str:
        return f"<UrlRecord(short_code='{self.short_code}', visits={self.visits})>"


@dataclass(frozen=True)
class UrlStatistics:
    short_code: str
    original_url: str
    visits: int
    created_at: datetime.datetime
    last_visited: Optional[datetime.datetime] = None
