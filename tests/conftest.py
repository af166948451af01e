from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

import resume_builder.data.db as app_db
from resume_builder.cache import MemoryCache, reset_cache
from resume_builder.config import get_settings
from resume_builder.data.db import init_db

FIXTURES = Path(__file__).parent / "fixtures"


class FakePdfRenderer:
    """Stands in for the headless browser; records what it was asked to print."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def html_to_pdf(self, html: str, css: str) -> bytes:
        self.calls.append((html, css))
        return b"%PDF-1.7\n%fake\n"


@pytest.fixture(autouse=True)
def encryption_key(monkeypatch: pytest.MonkeyPatch) -> Generator[str]:
    """Fresh Fernet key, in-memory cache and settings for every test."""
    key = Fernet.generate_key().decode("ascii")
    monkeypatch.setenv("RESUME_ENCRYPTION_KEY", key)
    monkeypatch.delenv("REDIS_URL", raising=False)
    get_settings.cache_clear()
    reset_cache(MemoryCache())
    yield key
    reset_cache(None)
    get_settings.cache_clear()


@pytest.fixture
def api_db(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, encryption_key: str
) -> Generator[None]:
    """Use a temporary SQLite DB."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    get_settings.cache_clear()
    app_db.reset_engine()
    init_db()
    yield
    # Dispose engine to release connections
    app_db.reset_engine()


@pytest.fixture(scope="session")
def layout_golden() -> dict:
    """Expected regions per layout variant for one sample résumé."""
    return json.loads((FIXTURES / "layout_golden.json").read_text(encoding="utf-8"))


@pytest.fixture
def fake_renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests in API test files; their client fixtures request api_db."""
    for item in items:
        test_file_path = Path(str(item.fspath))
        if "api" in test_file_path.stem.lower():
            item.add_marker(pytest.mark.api)
