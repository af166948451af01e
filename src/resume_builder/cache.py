"""Best-effort response cache.

The cache is never on the correctness path: a backend failure is logged and
treated as a miss, and mutations always go to the document store first.
Values are JSON-serializable dicts.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import threading
import time
from typing import Any, Protocol

import redis

from resume_builder.config import get_settings

logger = logging.getLogger(__name__)

__all__ = ["Cache", "MemoryCache", "RedisCache", "get_cache", "reset_cache"]


class Cache(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def delete_pattern(self, pattern: str) -> None: ...


class MemoryCache:
    """In-process TTL cache used when no Redis URL is configured."""

    def __init__(self, default_ttl: int = 600) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
        return json.loads(payload)

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        payload = json.dumps(value, default=str)
        now = time.monotonic()
        with self._lock:
            # List keys vary per query and may never be read again.
            for stale in [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]:
                del self._entries[stale]
            self._entries[key] = (now + ttl, payload)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def delete_pattern(self, pattern: str) -> None:
        with self._lock:
            for key in [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]:
                del self._entries[key]


class RedisCache:
    """Redis-backed cache; every call swallows backend errors."""

    def __init__(self, url: str, default_ttl: int = 600) -> None:
        self.default_ttl = default_ttl
        self._client = redis.Redis.from_url(url, socket_connect_timeout=10)
        self._error_types: tuple[type[Exception], ...] = (redis.RedisError, OSError)

    def get(self, key: str) -> Any | None:
        try:
            raw = self._client.get(key)
        except self._error_types:
            logger.warning("Cache get failed for %s", key, exc_info=True)
            return None
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl
        try:
            self._client.set(key, json.dumps(value, default=str), ex=ttl)
        except self._error_types:
            logger.warning("Cache set failed for %s", key, exc_info=True)

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except self._error_types:
            logger.warning("Cache delete failed for %s", key, exc_info=True)

    def delete_pattern(self, pattern: str) -> None:
        try:
            keys = list(self._client.scan_iter(match=pattern))
            if keys:
                self._client.delete(*keys)
        except self._error_types:
            logger.warning("Cache pattern delete failed for %s", pattern, exc_info=True)


_cache: Cache | None = None


def get_cache() -> Cache:
    """Return the process-wide cache, creating it from settings on first use."""
    global _cache
    if _cache is None:
        settings = get_settings()
        if settings.redis_url:
            _cache = RedisCache(settings.redis_url, settings.cache_ttl_seconds)
        else:
            _cache = MemoryCache(settings.cache_ttl_seconds)
    return _cache


def reset_cache(cache: Cache | None = None) -> None:
    """Replace the process-wide cache (``None`` re-reads settings lazily)."""
    global _cache
    _cache = cache
