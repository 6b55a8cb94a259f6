"""
Challenge Gate

Detects an interactive human-verification page and holds the run until
someone solves it in the browser window, or the wait runs out.
Solving the challenge automatically is not attempted.
"""

import asyncio

from playwright.async_api import Page, Error as PlaywrightError

from .config import ScraperConfig
from .errors import ChallengeTimeout
from .logger import get_logger
from .site_selectors import CHALLENGE_SELECTOR

log = get_logger('challenge')


class ChallengeGate:
    """Suspension point for manual CAPTCHA resolution."""

    def __init__(self, page: Page, timeout_seconds: float = 120.0,
                 poll_seconds: float = 1.0, selector: str = CHALLENGE_SELECTOR):
        self.page = page
        self.timeout_seconds = timeout_seconds
        self.poll_seconds = poll_seconds
        self.selector = selector

    @classmethod
    def from_config(cls, page: Page, config: ScraperConfig) -> 'ChallengeGate':
        return cls(
            page,
            timeout_seconds=config.challenge_timeout_seconds,
            poll_seconds=config.challenge_poll_seconds,
        )

    async def is_challenged(self) -> bool:
        """Recomputed on every call; nothing is cached."""
        return await self.page.query_selector(self.selector) is not None

    async def check_and_wait(self) -> bool:
        """
        Return immediately when no challenge is shown, otherwise poll until
        the markers disappear.

        Returns:
            True if a challenge was shown and then resolved, False if none.

        Raises:
            ChallengeTimeout: markers still present after timeout_seconds.
        """
        if not await self.is_challenged():
            return False

        log.warning(
            f"CAPTCHA detected. Please solve it manually in the browser "
            f"(waiting up to {self.timeout_seconds:g}s)..."
        )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds
        polls = 0

        while True:
            await asyncio.sleep(self.poll_seconds)
            polls += 1
            try:
                challenged = await self.is_challenged()
            except PlaywrightError as e:
                # Solving the challenge navigates; the old document may be gone
                log.debug(f"Challenge check interrupted: {e}")
                challenged = True
            if not challenged:
                log.info(f"CAPTCHA solved after {polls} checks, continuing...")
                return True
            if loop.time() >= deadline:
                log.error(f"CAPTCHA still present after {self.timeout_seconds:g}s")
                raise ChallengeTimeout(self.timeout_seconds)
