"""Dependency injection for the URL shortener API.

The code registry is created once per process in the application lifespan and
stored on ``app.state``. Handlers receive it through ``get_registry``; nothing
reaches it through module-level globals. Each request also gets a lightweight
``RequestContext`` carrying tracking information and a context-aware logger.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, Request

from shortener.config import Settings, get_settings
from shortener.registry import CodeRegistry

__all__ = [
    "RequestContext",
    "setup_logging",
    "get_registry",
    "get_request_context",
]

LOGGER_NAME = "shortener"


# ============================================================================
# LOGGING
# ============================================================================


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the application logger once."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger


# ============================================================================
# LIGHTWEIGHT REQUEST CONTEXT
# ============================================================================


@dataclass
class RequestContext:
    """Per-request tracking information and shared settings.

    Attributes:
        settings: Application settings
        request_id: Unique identifier for this request
        trace_id: Correlation ID taken from the X-Trace-ID header
        user_agent: Client user agent string
        client_ip: Client IP address
        start_time: Request start timestamp
        tags: Request tags for categorization
    """

    settings: Settings
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    trace_id: Optional[str] = None
    user_agent: Optional[str] = None
    client_ip: Optional[str] = None
    start_time: float = field(default_factory=lambda: time.time())
    tags: list[str] = field(default_factory=list)

    @property
    def logger(self) -> logging.LoggerAdapter:
        """Shared logger with request context attached as ``extra``."""
        return logging.LoggerAdapter(
            logging.getLogger(LOGGER_NAME),
            {
                "request_id": self.request_id,
                "trace_id": self.trace_id or self.request_id,
                "client_ip": self.client_ip,
                "user_agent": self.user_agent,
                "tags": ",".join(self.tags),
            },
        )

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def get_duration(self) -> float:
        """Get request duration in milliseconds."""
        return (time.time() - self.start_time) * 1000


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


def get_registry(request: Request) -> CodeRegistry:
    """Return the registry owned by the running application.

    Raises:
        RuntimeError: If the application lifespan has not created one.
    """
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("Code registry is not initialized; was the lifespan started?")
    return registry


async def get_request_context(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> RequestContext:
    client_ip = request.client.host if request.client else None
    return RequestContext(
        settings=settings,
        trace_id=request.headers.get("x-trace-id"),
        user_agent=request.headers.get("user-agent"),
        client_ip=client_ip,
    )
