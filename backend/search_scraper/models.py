"""
Data models for search result extraction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple, List, Dict, Any


@dataclass(frozen=True)
class SelectorCandidates:
    """
    Ordered lookup strategies for one purpose.

    Order encodes confidence: most specific first, most permissive last.
    The first selector that yields a usable result wins.
    """
    purpose: str
    selectors: Tuple[str, ...]
    timeout_ms: int = 5000

    def __iter__(self):
        return iter(self.selectors)

    def with_timeout(self, timeout_ms: int) -> 'SelectorCandidates':
        return SelectorCandidates(self.purpose, self.selectors, timeout_ms)


@dataclass
class NavigationAttempt:
    """One page-load attempt inside the retry loop."""
    number: int
    max_attempts: int
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def is_last(self) -> bool:
        return self.number >= self.max_attempts


@dataclass(frozen=True)
class ListingRecord:
    """One product listing as extracted from the results page."""
    title: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    url: Optional[str] = None
    asin: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "price": self.price,
            "imageUrl": self.image_url,
            "url": self.url,
            "asin": self.asin,
        }


def format_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC timestamp safe for filenames.

    '2026-10-18T09:05:03.120Z' becomes '2026-10-18T09-05-03-120Z'.
    """
    moment = moment.astimezone(timezone.utc)
    iso = moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"
    return iso.replace(':', '-').replace('.', '-')


@dataclass(frozen=True)
class RunResult:
    """Valid records from one run, in page order."""
    records: Tuple[ListingRecord, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    candidates_seen: int = 0

    def __len__(self) -> int:
        return len(self.records)

    @property
    def timestamp(self) -> str:
        return format_timestamp(self.created_at)

    def to_list(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self.records]
