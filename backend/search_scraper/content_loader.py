"""
Content Loader

Scrolls the results page in fixed steps so lazy listings and images
render before extraction.
"""

import asyncio
from typing import Optional

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from .config import ScraperConfig
from .logger import get_logger

log = get_logger('content_loader')

PAGE_METRICS_JS = "() => [document.body.scrollHeight, window.innerHeight]"
SCROLL_BY_JS = "(distance) => window.scrollBy(0, distance)"


class ContentLoader:
    """
    Height-based incremental scroller.

    Stops once the cumulative scrolled distance reaches the scrollable
    height minus one viewport. Pages that grow as fast as they are
    scrolled never satisfy that, so max_seconds caps the whole loop.
    """

    def __init__(self, page: Page, step_px: int = 100, interval_seconds: float = 0.1,
                 max_seconds: Optional[float] = 120.0, settle_timeout_ms: int = 5000):
        self.page = page
        self.step_px = step_px
        self.interval_seconds = interval_seconds
        self.max_seconds = max_seconds
        self.settle_timeout_ms = settle_timeout_ms
        self.hit_time_limit = False

    @classmethod
    def from_config(cls, page: Page, config: ScraperConfig) -> 'ContentLoader':
        return cls(
            page,
            step_px=config.scroll_step_px,
            interval_seconds=config.scroll_interval_seconds,
            max_seconds=config.max_scroll_seconds,
            settle_timeout_ms=config.settle_timeout_ms,
        )

    async def expand_content(self) -> int:
        """
        Scroll until no more content can be exposed.

        Returns:
            Total distance scrolled in pixels.
        """
        loop = asyncio.get_running_loop()
        started = loop.time()
        total = 0
        steps = 0

        while True:
            await asyncio.sleep(self.interval_seconds)
            scroll_height, viewport_height = await self.page.evaluate(PAGE_METRICS_JS)
            await self.page.evaluate(SCROLL_BY_JS, self.step_px)
            total += self.step_px
            steps += 1

            if total >= scroll_height - viewport_height:
                break

            if self.max_seconds is not None and loop.time() - started >= self.max_seconds:
                self.hit_time_limit = True
                log.warning(
                    f"Scroll stopped after {self.max_seconds:g}s with page still growing "
                    f"(scrolled {total}px of {scroll_height}px)"
                )
                break

        log.info(f"Scrolled {total}px in {steps} steps")
        await self._settle()
        return total

    async def _settle(self):
        """Give lazy requests triggered by the last steps a chance to finish."""
        if self.settle_timeout_ms <= 0:
            return
        try:
            await self.page.wait_for_load_state('networkidle', timeout=self.settle_timeout_ms)
        except PlaywrightTimeout:
            # Timeout is ok - site might have constant polling
            pass
