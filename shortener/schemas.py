"""Pydantic schemas for request/response validation in the URL shortener.

This module defines Pydantic models for API input validation and output serialization,
ensuring type safety and automatic OpenAPI documentation generation.

Schema Hierarchy
=================
::
    URLCreate (Input)
    └─ url: str (validated URL)

    URLResponse (Output)
    ├─ id: str
    ├─ short_code: str
    ├─ original_url: str
    ├─ short_url: str (computed)
    ├─ visits: int
    ├─ created_at: datetime
    └─ last_visited: datetime | None

    DecodeResponse (Output)
    └─ original_url: str

    URLStats (Output)
    ├─ short_code: str
    ├─ original_url: str
    ├─ visits: int
    ├─ created_at: datetime
    └─ last_visited: datetime | None

    HealthResponse (Output)
    ├─ status: str
    ├─ registry: str
    └─ records: int

How to Use
===========
**Step 1 — Input validation**::
    @router.post("/api/encode")
    async def encode_url(payload: URLCreate):
        # payload.url is already a well-formed absolute URL
        return registry.register(payload.url)

**Step 2 — Response serialization**::
    record = registry.resolve(code)
    return URLResponse.from_record(record, settings.BASE_URL)

Key Behaviours
===============
- URL validation uses the validators library (scheme and host required).
- Malformed URLs are rejected with 422 before the registry is touched.
- All datetime fields are timezone-aware UTC.
- Models read attributes directly from the registry dataclasses.

Classes:
    URLCreate:  Input schema for URL shortening requests.
    URLResponse:  Output schema for a stored record.
    DecodeResponse:  Output schema for decode lookups.
    URLStats:  Output schema for URL statistics.
    HealthResponse:  Output schema for health checks.
"""

import datetime
from typing import Optional

import validators
from pydantic import BaseModel, Field, field_validator

from shortener.enums import HealthStatus
from shortener.models import UrlRecord

__all__ = [
    "URLCreate",
    "URLResponse",
    "DecodeResponse",
    "URLStats",
    "HealthResponse",
    "build_short_url",
]


def build_short_url(base_url: str, short_code: str) -> str:
    return f"{base_url.rstrip('/')}/{short_code}"


class URLCreate(BaseModel):
    url: str = Field(..., description="The URL to be shortened", examples=["https://example.com/very/long/url"])

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not validators.url(v):
            raise ValueError("Invalid URL provided")
        return v


class URLResponse(BaseModel):
    id: str
    short_code: str
    original_url: str
    short_url: str
    visits: int
    created_at: datetime.datetime
    last_visited: Optional[datetime.datetime] = None

    @classmethod
    def from_record(cls, record: UrlRecord, base_url: str) -> "URLResponse":
        return cls(
            id=record.id,
            short_code=record.short_code,
            original_url=record.original_url,
            short_url=build_short_url(base_url, record.short_code),
            visits=record.visits,
            created_at=record.created_at,
            last_visited=record.last_visited,
        )


class DecodeResponse(BaseModel):
    original_url: str


class URLStats(BaseModel):
    short_code: str
    original_url: str
    visits: int
    created_at: datetime.datetime
    last_visited: Optional[datetime.datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: HealthStatus
    registry: HealthStatus
    records: int
