"""Configuration management for the URL shortener application.

This module provides centralized configuration management using Pydantic BaseSettings
with environment variable support and caching for performance.

Flow Diagram — get_settings()
=============================
::
    ┌─────────────┐
    │  Call get_  │
    │  settings() │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Check cache  │
    │ (lru_cache)  │
    └──────┬──────┘
    HIT?  │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Create  │  │ Return  │
│ Settings│  │ cached  │
│ instance│  │ value   │
└─────────┘  └─────────┘

How to Use
===========
**Step 1 — Import**::
    from shortener.config import get_settings

**Step 2 — Get settings**::
    settings = get_settings()
    length = settings.SHORT_CODE_LENGTH

**Step 3 — Override from the environment**::
    BASE_URL=https://sho.rt SHORT_CODE_LENGTH=8 uvicorn shortener.main:app

Key Behaviours
===============
- Settings are cached after first access.
- Environment variables (and a local .env file) override defaults.
- CORS_ORIGINS accepts a JSON list, e.g. '["https://a.example"]'.

Classes:
    Settings:  Pydantic model for all configuration values.

"""

__all__ = ["Settings", "get_settings"]

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "url-shortener"
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Short code allocation
    SHORT_CODE_LENGTH: int = 8
    CODE_ID_LENGTH: int = 22
    CODE_ALLOCATION_MAX_ATTEMPTS: int = 16

    # Browser frontend
    CORS_ORIGINS: list[str] = ["http://localhost:3001"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
