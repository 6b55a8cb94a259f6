"""
Listing Field Extractor

Turns the rendered results HTML into ListingRecords. Each field is
resolved through an ordered list of lookups (pure functions from a
listing subtree to an optional string); the first non-empty result wins.
A missing field is None, never an error.
"""

import re
from typing import Callable, List, Optional, Sequence
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .logger import get_logger
from .models import ListingRecord
from .site_selectors import (
    LISTING_SELECTORS, TITLE_SELECTORS, PRICE_SELECTORS,
    IMAGE_SELECTORS, LINK_SELECTORS,
)

log = get_logger('extractor')

Lookup = Callable[[Tag], Optional[str]]

# Integer part with optional thousands separators, then a fractional part
PRICE_PATTERN = re.compile(r'\d+(?:,\d+)*\.\d+')

ASIN_IN_URL = re.compile(r'/(?:dp|gp/product)/([A-Z0-9]{10})(?:[/?]|$)')

# Arabic-Indic digits and separators as rendered on localized storefronts
_LOCALE_TRANSLATION = str.maketrans({
    **{chr(0x0660 + i): str(i) for i in range(10)},
    **{chr(0x06F0 + i): str(i) for i in range(10)},
    '٫': '.',  # Arabic decimal separator
    '٬': ',',  # Arabic thousands separator
})


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = ' '.join(text.split())
    return text or None


def text_lookup(selector: str) -> Lookup:
    """Lookup returning the text of the first element matching selector."""
    def lookup(element: Tag) -> Optional[str]:
        found = element.select_one(selector)
        return _clean(found.get_text()) if found else None
    return lookup


def attr_lookup(selector: str, *attributes: str) -> Lookup:
    """Lookup returning the first non-empty attribute of the first match."""
    def lookup(element: Tag) -> Optional[str]:
        found = element.select_one(selector)
        if found is None:
            return None
        for attribute in attributes:
            value = _clean(found.get(attribute))
            if value:
                return value
        return None
    return lookup


def first_match(element: Tag, lookups: Sequence[Lookup]) -> Optional[str]:
    """Try lookups in priority order; stop at the first non-empty result."""
    for lookup in lookups:
        value = lookup(element)
        if value:
            return value
    return None


def parse_price(text: Optional[str]) -> Optional[float]:
    """
    Parse a locale-formatted price like 'EGP 1,299.50' into 1299.5.

    Only the first numeric token with a fractional part counts. Text with
    no such token gives None, not zero.
    """
    if not text:
        return None
    match = PRICE_PATTERN.search(text.translate(_LOCALE_TRANSLATION))
    if not match:
        return None
    return float(match.group(0).replace(',', ''))


TITLE_LOOKUPS: List[Lookup] = [text_lookup(s) for s in TITLE_SELECTORS]
PRICE_LOOKUPS: List[Lookup] = [text_lookup(s) for s in PRICE_SELECTORS]
# Direct source first, lazy-load placeholder second
IMAGE_LOOKUPS: List[Lookup] = [attr_lookup(s, 'src', 'data-src') for s in IMAGE_SELECTORS]
LINK_LOOKUPS: List[Lookup] = [attr_lookup(s, 'href') for s in LINK_SELECTORS]


def extract_price(element: Tag) -> Optional[float]:
    """First price candidate whose text yields a number."""
    for lookup in PRICE_LOOKUPS:
        price = parse_price(lookup(element))
        if price is not None:
            return price
    return None


def extract_asin(element: Tag, url: Optional[str]) -> Optional[str]:
    asin = _clean(element.get('data-asin'))
    if asin:
        return asin
    if url:
        match = ASIN_IN_URL.search(url)
        if match:
            return match.group(1)
    return None


def extract_listing(element: Tag, base_url: str = '') -> ListingRecord:
    """Extract one ListingRecord from a listing subtree."""
    href = first_match(element, LINK_LOOKUPS)
    url = urljoin(base_url, href) if href else None
    image = first_match(element, IMAGE_LOOKUPS)

    return ListingRecord(
        title=first_match(element, TITLE_LOOKUPS),
        price=extract_price(element),
        image_url=urljoin(base_url, image) if image else None,
        url=url,
        asin=extract_asin(element, url),
    )


def select_listings(soup: BeautifulSoup,
                    selectors: Sequence[str] = LISTING_SELECTORS) -> List[Tag]:
    """Listing elements from the first container selector that matches any."""
    for selector in selectors:
        listings = soup.select(selector)
        if listings:
            log.debug(f"Found {len(listings)} listings via '{selector}'")
            return listings
    return []


def extract_listings(html: str, base_url: str = '') -> List[ListingRecord]:
    """Extract every listing on a results page, in document order."""
    soup = BeautifulSoup(html, 'html.parser')
    records = [extract_listing(element, base_url) for element in select_listings(soup)]
    log.info(f"Extracted {len(records)} candidate listings")
    return records
