"""
Browser Session

One Playwright browser with a single page, owned by one run and closed
on every exit path.
"""

from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from .config import ScraperConfig
from .logger import get_logger

log = get_logger('browser')


def get_launch_args():
    """Chromium launch arguments for an unattended scraping browser."""
    return [
        '--no-sandbox',
        '--disable-setuid-sandbox',
        '--disable-dev-shm-usage',
        '--disable-web-security',
        '--disable-features=IsolateOrigins,site-per-process',
        '--disable-blink-features=AutomationControlled',
    ]


class BrowserSession:
    """
    Context manager for a single-use browser session.

    Usage:
        async with BrowserSession(config) as session:
            await session.page.goto('https://example.com')
    """

    def __init__(self, config: ScraperConfig):
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> 'BrowserSession':
        try:
            await self._open()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _open(self):
        config = self.config
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=config.headless,
            args=get_launch_args(),
        )

        # Headful runs use the real window size, like a person's browser
        viewport_options = {'no_viewport': True} if not config.headless else {
            'viewport': {'width': 1920, 'height': 1080},
        }
        self._context = await self._browser.new_context(
            user_agent=config.user_agent,
            java_script_enabled=True,
            ignore_https_errors=True,
            extra_http_headers={'Accept-Language': config.accept_language},
            **viewport_options,
        )

        self._page = await self._context.new_page()
        self._page.set_default_navigation_timeout(config.default_timeout_ms)
        self._page.set_default_timeout(config.default_timeout_ms)
        log.debug(f"Browser session opened (headless={config.headless})")

    async def close(self):
        """Close context, browser and driver. Each step runs even if the previous failed."""
        closers = [
            ('context', self._context, lambda c: c.close()),
            ('browser', self._browser, lambda b: b.close()),
            ('playwright', self._playwright, lambda p: p.stop()),
        ]
        for name, resource, closer in closers:
            if resource is None:
                continue
            try:
                await closer(resource)
            except Exception as e:
                log.warning(f"Error closing {name}: {e}")

        self._context = self._browser = self._playwright = self._page = None
        log.debug("Browser session closed")

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not open")
        return self._page
