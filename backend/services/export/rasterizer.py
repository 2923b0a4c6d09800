"""Rasterization of rendered preview HTML to a PNG bitmap."""

import logging
from typing import Protocol

from exceptions import UpstreamServiceError


logger = logging.getLogger(__name__)

# CSS width of the preview surface; A4 at 96 dpi.
SURFACE_WIDTH_PX = 794


class SurfaceRasterizer(Protocol):
    async def rasterize(self, html: str, scale: int) -> bytes:
        """Render ``html`` and return a PNG screenshot at ``scale``x."""
        ...


class PlaywrightRasterizer:
    """Screenshots the preview in an isolated headless Chromium page."""

    def __init__(self, width: int = SURFACE_WIDTH_PX, timeout_ms: int = 30000):
        self.width = width
        self.timeout_ms = timeout_ms

    async def rasterize(self, html: str, scale: int) -> bytes:
        try:
            from playwright.async_api import async_playwright, Error as PlaywrightError
        except ImportError as e:
            raise ImportError(
                "playwright is required for PDF export. "
                "Install it with: pip install playwright && playwright install chromium"
            ) from e

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch()
                try:
                    context = await browser.new_context(
                        viewport={"width": self.width, "height": 1123},
                        device_scale_factor=scale,
                        java_script_enabled=False,
                    )
                    page = await context.new_page()
                    await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                    png = await page.screenshot(full_page=True, type="png")
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.error(f"Rasterization failed: {e}")
            raise UpstreamServiceError("rendering", None, str(e)) from e

        logger.debug(f"Rasterized preview at {scale}x ({len(png)} bytes)")
        return png
