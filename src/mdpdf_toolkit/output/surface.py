"""
Module: output.surface

Purpose:
    The isolated rendering surface shared by preview and export. A
    headless Chromium page holds the assembled document; nothing from
    the host process styles it, so preview, print and capture all see
    the same layout.

Key Classes:
    - RenderSurface: Protocol the export pipeline depends on
    - BrowserSurface: Playwright-backed implementation

Dependencies:
    - playwright: Headless Chromium (imported on start())

Used By:
    - output.exporter: export_to_pdf()
    - controller: DocumentSession.show()
    - cli: export / print commands
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncIterator, Optional, Protocol

from mdpdf_toolkit.config import SurfaceConfig
from mdpdf_toolkit.layout import PAGE_SELECTOR, SCALE_PROPERTY

from .errors import SurfaceUnavailableError

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    """What the export pipeline needs from a rendering surface."""

    capture_scale: float

    @property
    def is_available(self) -> bool:
        """True once a document is loaded and the surface is open."""
        ...

    async def count_pages(self) -> int:
        """Number of page elements in the loaded document."""
        ...

    async def capture_page(self, index: int) -> bytes:
        """Rasterize one page element to PNG bytes."""
        ...

    def capture_mode(self) -> AsyncContextManager[None]:
        """Context in which pages render at their unscaled print size."""
        ...


class BrowserSurface:
    """
    Headless Chromium page used as the rendering surface.

    Captures use the context's device scale factor
    (``SurfaceConfig.capture_scale``) and print media emulation, so each
    page is captured at its physical size without the preview transform
    or the page label.

    Example:
        >>> async with BrowserSurface() as surface:
        ...     await surface.load(document_html)
        ...     png = await surface.capture_page(0)
    """

    def __init__(self, config: Optional[SurfaceConfig] = None) -> None:
        self.config = config or SurfaceConfig()
        self.capture_scale = self.config.capture_scale
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._page: Any = None
        self._loaded = False

    async def __aenter__(self) -> "BrowserSurface":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Launch Chromium and open the page."""
        if self._page is not None:
            return

        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.config.headless)
            self._context = await self._browser.new_context(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
                device_scale_factor=self.config.capture_scale,
            )
            self._page = await self._context.new_page()
        except Exception:
            await self.close()
            raise
        self._page.set_default_timeout(self.config.timeout_ms)
        logger.debug(
            f"Rendering surface started ({self.config.viewport_width}x"
            f"{self.config.viewport_height}, scale {self.capture_scale})"
        )

    async def load(self, document_html: str) -> None:
        """
        Replace the surface content with an assembled document.

        Raises:
            SurfaceUnavailableError: If the surface was not started
        """
        page = self._require_page()
        self._loaded = False
        await page.set_content(document_html, wait_until="load")
        self._loaded = True
        logger.debug(f"Loaded document ({len(document_html)} characters)")

    @property
    def is_available(self) -> bool:
        return self._loaded and self._page is not None and not self._page.is_closed()

    async def count_pages(self) -> int:
        page = self._require_page()
        return await page.locator(PAGE_SELECTOR).count()

    async def capture_page(self, index: int) -> bytes:
        page = self._require_page()
        element = page.locator(PAGE_SELECTOR).nth(index)
        return await element.screenshot(type="png", animations="disabled", scale="device")

    @asynccontextmanager
    async def capture_mode(self) -> AsyncIterator[None]:
        """Render with print media for the duration of a capture pass."""
        page = self._require_page()
        await page.emulate_media(media="print")
        try:
            yield
        finally:
            if not page.is_closed():
                await page.emulate_media(media="null")

    async def preview_scale(self) -> float:
        """Current value of the preview scale custom property."""
        page = self._require_page()
        value = await page.evaluate(
            "(name) => getComputedStyle(document.documentElement).getPropertyValue(name)",
            SCALE_PROPERTY,
        )
        return float(str(value).strip())

    async def set_viewport_width(self, width: int) -> None:
        """Resize the viewport; the preview script recomputes the scale."""
        page = self._require_page()
        await page.set_viewport_size({"width": width, "height": self.config.viewport_height})
        # Let the resize listener run before callers read the scale
        await page.evaluate("() => new Promise(requestAnimationFrame)")

    async def print_to_pdf(self) -> bytes:
        """
        Print the loaded document with the browser's own print engine.

        Uses the stylesheet's @page size and print rules.
        """
        page = self._require_page()
        if not self._loaded:
            raise SurfaceUnavailableError("No document loaded in rendering surface")
        return await page.pdf(prefer_css_page_size=True, print_background=True)

    async def close(self) -> None:
        """
        Tear down the page, browser and Playwright driver.

        Every step runs even if an earlier one fails, so the driver is
        always stopped; the failure is re-raised afterwards.
        """
        self._loaded = False
        context, browser, driver = self._context, self._browser, self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        try:
            if context is not None:
                await context.close()
        finally:
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if driver is not None:
                    await driver.stop()
                logger.debug("Rendering surface closed")

    def _require_page(self) -> Any:
        if self._page is None or self._page.is_closed():
            raise SurfaceUnavailableError("Cannot access rendering surface content")
        return self._page
