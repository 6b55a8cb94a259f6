"""
Search Results Scraper

Drives a real browser through a product search, waits out interactive
challenges, loads lazy content and extracts listing records from the
results page.
"""

from .config import ScraperConfig
from .errors import (
    ScrapeError, NavigationFailure, ChallengeTimeout,
    SelectorNotFound, SearchBoxNotFound, ResultsNotFound,
)
from .models import ListingRecord, RunResult
from .pipeline import SearchScraper

__all__ = [
    "ScraperConfig",
    "ScrapeError",
    "NavigationFailure",
    "ChallengeTimeout",
    "SelectorNotFound",
    "SearchBoxNotFound",
    "ResultsNotFound",
    "ListingRecord",
    "RunResult",
    "SearchScraper",
]
