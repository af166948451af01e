"""Application settings loaded from environment variables.

All settings have development defaults so the API can boot without any
environment.  ``get_settings`` is memoized; tests that change the
environment call ``get_settings.cache_clear()``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

__all__ = ["Settings", "get_settings"]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"Environment variable {name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None


def _split_keys(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(key.strip() for key in raw.split(",") if key.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API and its collaborators."""

    db_url: str | None = None
    redis_url: str | None = None
    encryption_keys: tuple[str, ...] = field(default_factory=tuple)
    frontend_url: str = "http://localhost:5173"
    client_url: str = "http://localhost:5173"
    api_prefix: str = "/api/v1"
    render_content_timeout_ms: int = 30_000
    render_pdf_timeout_ms: int = 60_000
    render_settle_ms: int = 1_500
    cache_ttl_seconds: int = 600


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from the current process environment."""
    return Settings(
        db_url=os.getenv("DB_URL") or None,
        redis_url=os.getenv("REDIS_URL") or None,
        encryption_keys=_split_keys(os.getenv("RESUME_ENCRYPTION_KEY")),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:5173"),
        client_url=os.getenv("CLIENT_URL", "http://localhost:5173").rstrip("/"),
        api_prefix=os.getenv("API_PREFIX", "/api/v1"),
        render_content_timeout_ms=_env_int("RENDER_CONTENT_TIMEOUT_MS", 30_000),
        render_pdf_timeout_ms=_env_int("RENDER_PDF_TIMEOUT_MS", 60_000),
        render_settle_ms=_env_int("RENDER_SETTLE_MS", 1_500),
        cache_ttl_seconds=_env_int("CACHE_TTL_SECONDS", 600),
    )
