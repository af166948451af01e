"""Tests for the best-effort cache backends."""

from __future__ import annotations

import pytest
import redis

from resume_builder import cache as cache_module
from resume_builder.cache import MemoryCache, RedisCache, get_cache, reset_cache
from resume_builder.config import get_settings


class _FailingRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise redis.ConnectionError("down")

        return fail


class TestMemoryCache:
    def test_set_get_delete(self) -> None:
        cache = MemoryCache()
        cache.set("resume:1:user:alice", {"title": "CV"})

        assert cache.get("resume:1:user:alice") == {"title": "CV"}
        cache.delete("resume:1:user:alice")
        assert cache.get("resume:1:user:alice") is None

    def test_values_are_copies(self) -> None:
        cache = MemoryCache()
        value = {"items": [1]}
        cache.set("k", value)
        value["items"].append(2)

        assert cache.get("k") == {"items": [1]}

    def test_expiry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
        cache = MemoryCache()
        cache.set("k", 1, ttl_seconds=5)

        now[0] += 4
        assert cache.get("k") == 1
        now[0] += 1
        assert cache.get("k") is None

    def test_set_prunes_expired_entries(self, monkeypatch: pytest.MonkeyPatch) -> None:
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
        cache = MemoryCache()
        cache.set("resumes:list:alice:a", [1], ttl_seconds=5)
        cache.set("resumes:list:alice:b", [2], ttl_seconds=60)

        now[0] += 10
        cache.set("resumes:list:alice:c", [3], ttl_seconds=5)

        assert set(cache._entries) == {"resumes:list:alice:b", "resumes:list:alice:c"}

    def test_delete_pattern(self) -> None:
        cache = MemoryCache()
        cache.set("resumes:user:alice:page=1", 1)
        cache.set("resumes:user:alice:page=2", 2)
        cache.set("resumes:user:bob:page=1", 3)

        cache.delete_pattern("resumes:user:alice:*")

        assert cache.get("resumes:user:alice:page=1") is None
        assert cache.get("resumes:user:alice:page=2") is None
        assert cache.get("resumes:user:bob:page=1") == 3


class TestRedisCache:
    def test_backend_errors_are_misses(self, caplog: pytest.LogCaptureFixture) -> None:
        cache = RedisCache("redis://localhost:6379/0")
        cache._client = _FailingRedis()

        assert cache.get("k") is None
        cache.set("k", {"a": 1})
        cache.delete("k")
        cache.delete_pattern("k*")

        assert "Cache get failed" in caplog.text


class TestGetCache:
    def test_memory_without_redis_url(self) -> None:
        reset_cache(None)

        assert isinstance(get_cache(), MemoryCache)

    def test_redis_when_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
        get_settings.cache_clear()
        reset_cache(None)

        assert isinstance(get_cache(), RedisCache)
