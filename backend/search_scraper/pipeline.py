"""
Search Scraper - end-to-end run.

Sequence: load site (retry) -> challenge gate -> submit search ->
confirm results -> scroll -> extract -> validate -> persist.

The browser session is owned by the run and closed on every exit path.
Only navigation retries; any other failure ends the run after an error
screenshot is captured.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from playwright.async_api import Page

from .browser import BrowserSession
from .challenge import ChallengeGate
from .config import ScraperConfig
from .content_loader import ContentLoader
from .extractor import extract_listings
from .logger import get_logger
from .models import RunResult
from .navigation import NavigationController
from .storage import SnapshotWriter, RESULTS_SCREENSHOT, ERROR_SCREENSHOT
from .validator import filter_usable

log = get_logger('pipeline')


class SearchScraper:
    """Runs one search and persists its listings."""

    def __init__(self, config: ScraperConfig,
                 writer: Optional[SnapshotWriter] = None,
                 session_factory: Callable[[ScraperConfig], BrowserSession] = BrowserSession):
        self.config = config
        self.writer = writer or SnapshotWriter(config.output_dir, config.snapshot_prefix)
        self.session_factory = session_factory
        self.snapshot_path = None

    async def run(self) -> RunResult:
        """
        Execute the full pipeline once.

        Returns:
            RunResult with the retained records.

        Raises:
            ScrapeError subclasses or browser errors, after the error
            screenshot has been captured.
        """
        log.debug(f"Run config: {self.config.to_dict()}")
        self.writer.ensure_dir()

        async with self.session_factory(self.config) as session:
            page = session.page
            try:
                result = await self.scrape(page)
                # evidence first: a run without its screenshot leaves no snapshot
                await self._screenshot(page, RESULTS_SCREENSHOT)
                self.snapshot_path = self.writer.write(result)
            except Exception as e:
                log.error(f"Error during scraping: {e}")
                await self._capture_error(page)
                raise

        return result

    async def scrape(self, page: Page) -> RunResult:
        """Drive the page from the storefront to extracted records."""
        config = self.config
        navigator = NavigationController(page, config)

        await navigator.load_site(config.target_url)
        await ChallengeGate.from_config(page, config).check_and_wait()
        await navigator.locate_and_submit_search(config.search_query)
        await navigator.confirm_results_present()
        await ContentLoader.from_config(page, config).expand_content()

        html = await page.content()
        candidates = extract_listings(html, base_url=page.url)
        records = filter_usable(candidates)
        log.info(f"Kept {len(records)} of {len(candidates)} listings")

        return RunResult(
            records=tuple(records),
            created_at=datetime.now(timezone.utc),
            candidates_seen=len(candidates),
        )

    async def _screenshot(self, page: Page, name: str):
        path = self.writer.screenshot_path(name)
        await page.screenshot(path=str(path), full_page=True)
        log.info(f"Screenshot saved to {path}")
        return path

    async def _capture_error(self, page: Page):
        """Best effort; never masks the failure being reported."""
        try:
            await self._screenshot(page, ERROR_SCREENSHOT)
        except Exception as e:
            log.warning(f"Could not capture error screenshot: {e}")
