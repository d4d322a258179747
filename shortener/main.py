"""FastAPI application entry point for the URL shortener service.

This module configures and initializes the FastAPI application with middleware,
lifecycle management, and route registration for the URL shortening service.

Application Lifecycle Diagram
===========================
::
    ┌──────────────┐
    │  uvicorn     │
    │  startup     │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ Create       │
    │ FastAPI app  │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ Add CORS     │
    │ middleware   │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ Include      │
    │ routes       │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ lifespan()   │
    │ startup:     │
    │ new registry │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ Serve HTTP   │
    │ requests     │
    └──────┬───────┘
           ▼
    ┌──────────────┐
    │ lifespan()   │
    │ shutdown:    │
    │ clear        │
    │ registry     │
    └──────────────┘

How to Use
===========
**Step 1 — Run with uvicorn**::
    uvicorn shortener.main:app --host 0.0.0.0 --port 3000 --reload

**Step 2 — Access interactive docs**::
    http://localhost:3000/docs

**Step 3 — Make API calls**::
    curl -X POST http://localhost:3000/api/encode \
         -H "Content-Type: application/json" \
         -d '{"url": "https://example.com"}'

Key Behaviours
===============
- All records live in memory; a restart erases them.
- CORS is limited to the configured frontend origins (GET, POST, DELETE).
- Prometheus metrics are exposed at /metrics.
"""

__all__ = ["app", "lifespan"]

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from shortener.config import get_settings
from shortener.dependencies import setup_logging
from shortener.registry import CodeRegistry
from shortener.routes import router

settings = get_settings()
logger = setup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    app.state.registry = CodeRegistry.from_settings(settings)
    logger.info(f"{settings.APP_NAME} started ({settings.APP_ENV})")
    yield
    # Shutdown
    app.state.registry.clear()
    app.state.registry = None
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="In-memory URL shortener API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=False,
    should_respect_env_var=False,
).instrument(app).expose(app)

app.include_router(router)
