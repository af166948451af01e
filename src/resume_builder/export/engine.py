"""Headless Chromium used to turn HTML+CSS into PDF bytes.

One browser process is shared by every export request and launched lazily on
first use; each request gets its own page, which is always closed again.
Content loading and PDF generation are bounded by separate timeouts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from resume_builder.config import get_settings
from resume_builder.errors import ExportFailed
from resume_builder.rendering.html import wrap_document

logger = logging.getLogger(__name__)

__all__ = [
    "PdfRenderer",
    "RenderEngine",
    "get_render_engine",
    "shutdown_render_engine",
]

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"]


class PdfRenderer(Protocol):
    async def html_to_pdf(self, html: str, css: str) -> bytes: ...


class RenderEngine:
    """Process-wide Playwright browser with scoped pages."""

    def __init__(
        self,
        *,
        content_timeout_ms: int = 30_000,
        pdf_timeout_ms: int = 60_000,
        settle_ms: int = 1_500,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self.content_timeout_ms = content_timeout_ms
        self.pdf_timeout_ms = pdf_timeout_ms
        self.settle_ms = settle_ms
        self._playwright_factory = playwright_factory
        self._playwright = None
        self._browser = None
        self._lock = asyncio.Lock()

    @property
    def started(self) -> bool:
        return self._browser is not None

    async def _ensure_browser(self):
        async with self._lock:
            if self._browser is not None and self._browser.is_connected():
                return self._browser
            if self._browser is not None:
                stale, self._browser = self._browser, None
                await stale.close()
            if self._playwright is None:
                self._playwright = await self._playwright_factory().start()
            self._browser = await self._playwright.chromium.launch(
                headless=True, args=_LAUNCH_ARGS
            )
            logger.info("Render engine launched")
            return self._browser

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Any]:
        """Yield a fresh page; it is closed on success and on failure."""
        browser = await self._ensure_browser()
        page = await browser.new_page()
        try:
            yield page
        finally:
            await page.close()

    async def html_to_pdf(self, html: str, css: str) -> bytes:
        """Render a markup/stylesheet pair to an A4 PDF.

        Raises:
            ExportFailed: On a browser error or when either phase times out.
        """
        document = wrap_document(html, css)
        try:
            async with self.page() as page:
                await page.set_content(
                    document, wait_until="networkidle", timeout=self.content_timeout_ms
                )
                await asyncio.wait_for(
                    page.evaluate("() => document.fonts.ready"),
                    timeout=self.content_timeout_ms / 1000,
                )
                await page.wait_for_timeout(self.settle_ms)
                return await asyncio.wait_for(
                    page.pdf(
                        format="A4",
                        print_background=True,
                        margin={"top": "0", "right": "0", "bottom": "0", "left": "0"},
                        prefer_css_page_size=False,
                    ),
                    timeout=self.pdf_timeout_ms / 1000,
                )
        except (PlaywrightError, TimeoutError) as exc:
            logger.exception("PDF rendering failed")
            raise ExportFailed("Failed to generate PDF") from exc

    async def shutdown(self) -> None:
        async with self._lock:
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
                logger.info("Render engine shut down")


_engine: RenderEngine | None = None


def get_render_engine() -> RenderEngine:
    """Return the shared engine. The browser itself starts on first render."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = RenderEngine(
            content_timeout_ms=settings.render_content_timeout_ms,
            pdf_timeout_ms=settings.render_pdf_timeout_ms,
            settle_ms=settings.render_settle_ms,
        )
    return _engine


async def shutdown_render_engine() -> None:
    global _engine
    if _engine is not None:
        await _engine.shutdown()
        _engine = None
