"""Shared enums for the URL shortener application.

This module defines all status enums used across the codebase.
Using enums instead of string literals provides type safety and prevents typos.
"""

from enum import StrEnum

__all__ = ["HealthStatus", "RequestStatus"]


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class RequestStatus(StrEnum):
    """Outcome labels for registry operation metrics."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"
