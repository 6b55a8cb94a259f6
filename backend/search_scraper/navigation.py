"""
Navigation Controller

Loads the storefront with bounded retry, then finds the search box and
the results container through ordered selector fallbacks.
"""

import asyncio
import random
from typing import Optional

from playwright.async_api import Page, Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from .config import ScraperConfig
from .errors import NavigationFailure, SearchBoxNotFound, ResultsNotFound
from .logger import get_logger
from .models import NavigationAttempt, SelectorCandidates
from .site_selectors import SEARCH_BOX, RESULTS_CONTAINER

log = get_logger('navigation')


async def wait_for_first(page: Page, candidates: SelectorCandidates) -> Optional[str]:
    """
    Wait for each candidate in priority order; return the first that appears.

    Later candidates are never tried once one has matched. Returns None
    when every candidate timed out or failed.
    """
    for selector in candidates:
        try:
            await page.wait_for_selector(selector, timeout=candidates.timeout_ms)
        except PlaywrightTimeout:
            log.debug(f"{candidates.purpose}: '{selector}' not found within {candidates.timeout_ms}ms")
            continue
        except PlaywrightError as e:
            # e.g. the document was replaced mid-wait; the next candidate is independent
            log.debug(f"{candidates.purpose}: '{selector}' failed: {e}")
            continue
        log.debug(f"{candidates.purpose}: matched '{selector}'")
        return selector
    return None


class NavigationController:
    """Page loading and search submission for one session page."""

    def __init__(self, page: Page, config: ScraperConfig,
                 search_box: SelectorCandidates = SEARCH_BOX,
                 results: SelectorCandidates = RESULTS_CONTAINER):
        self.page = page
        self.config = config
        self.search_box = search_box.with_timeout(config.search_box_timeout_ms)
        self.results = results.with_timeout(config.results_timeout_ms)

    async def load_site(self, url: str) -> NavigationAttempt:
        """
        Load the target page, retrying transient failures.

        Raises:
            NavigationFailure: after max_navigation_attempts failures. The
                final attempt's exception is chained as the cause.
        """
        max_attempts = max(1, self.config.max_navigation_attempts)
        attempt = None

        for number in range(1, max_attempts + 1):
            attempt = NavigationAttempt(number=number, max_attempts=max_attempts)
            log.info(f"Navigation attempt {number}/{max_attempts}: {url}")
            try:
                await self.page.goto(
                    url,
                    wait_until='networkidle',
                    timeout=self.config.navigation_timeout_ms,
                )
                return attempt
            except PlaywrightError as e:
                attempt.error = e
                log.warning(f"Attempt {number} failed: {e}")

            if not attempt.is_last:
                await asyncio.sleep(self.config.retry_backoff_seconds)

        raise NavigationFailure(url, max_attempts, attempt.error) from attempt.error

    async def locate_and_submit_search(self, query: str) -> str:
        """
        Type the query into the first search box that appears and submit it.

        Returns:
            The selector that matched.

        Raises:
            SearchBoxNotFound: no candidate appeared.
        """
        selector = await wait_for_first(self.page, self.search_box)
        if selector is None:
            raise SearchBoxNotFound(self.search_box.purpose, self.search_box.selectors)

        await self.page.focus(selector)
        low, high = self.config.keystroke_delay_ms
        for char in query:
            await self.page.keyboard.type(char)
            await asyncio.sleep(random.uniform(low, high) / 1000)

        low, high = self.config.submit_pause_seconds
        await asyncio.sleep(random.uniform(low, high))
        await self.page.keyboard.press('Enter')

        log.info(f"Submitted search '{query}' via {selector}")
        return selector

    async def confirm_results_present(self) -> str:
        """
        Wait until a populated results container shows up.

        Raises:
            ResultsNotFound: no candidate appeared.
        """
        selector = await wait_for_first(self.page, self.results)
        if selector is None:
            raise ResultsNotFound(self.results.purpose, self.results.selectors)

        log.info(f"Search results present ({selector})")
        return selector
