"""
Failures surfaced by the scraping pipeline.

Navigation is the only step that retries. Everything here is run-fatal
once it reaches the orchestrator.
"""

from typing import Optional, Sequence


class ScrapeError(Exception):
    """Base class for pipeline failures."""


class NavigationFailure(ScrapeError):
    """The target page could not be loaded within the attempt ceiling."""

    def __init__(self, url: str, attempts: int, cause: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        reason = f": {cause}" if cause else ""
        super().__init__(f"Failed to load {url} after {attempts} attempts{reason}")


class ChallengeTimeout(ScrapeError):
    """An interactive challenge was still on the page when the wait ran out."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Challenge not resolved within {timeout_seconds:g}s")


class SelectorNotFound(ScrapeError):
    """None of the selector candidates for a purpose appeared in time."""

    def __init__(self, purpose: str, selectors: Sequence[str]):
        self.purpose = purpose
        self.selectors = tuple(selectors)
        super().__init__(
            f"Could not find {purpose} (tried {len(self.selectors)} selectors: "
            f"{', '.join(self.selectors)})"
        )


class SearchBoxNotFound(SelectorNotFound):
    """No search input candidate appeared."""


class ResultsNotFound(SelectorNotFound):
    """No results container candidate appeared."""
