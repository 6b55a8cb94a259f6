"""
Selector contract for the target storefront.

The site's markup drifts, so every purpose carries several independent
selectors in priority order. Update these lists when the layout changes.
"""

from .models import SelectorCandidates


SEARCH_BOX = SelectorCandidates(
    purpose="search box",
    selectors=(
        '#twotabsearchtextbox',
        'input[name="field-keywords"]',
        '#nav-search-bar-form input[type="text"]',
    ),
    timeout_ms=5000,
)

RESULTS_CONTAINER = SelectorCandidates(
    purpose="search results",
    selectors=(
        '[data-component-type="s-search-result"]',
        '.s-result-item',
        '.s-main-slot',
    ),
    timeout_ms=15000,
)

# Interactive human-verification markers
CHALLENGE_SELECTOR = '#captchacharacters, form[action*="captcha"]'

# Listing containers; sponsored slots are excluded where the markup allows it
LISTING_SELECTORS = (
    '[data-component-type="s-search-result"]:not(.AdHolder)',
    '.s-result-item:not(.s-ad-slot)',
    '.s-main-slot .s-result-item',
)

# Per-listing fields
TITLE_SELECTORS = (
    'h2 a span',
    '.a-size-medium',
    'h2.a-size-mini a',
    '.s-title-instructions-style h2',
    'h2',
)

PRICE_SELECTORS = (
    '.a-price .a-offscreen',
    '.a-price-whole',
    '.a-color-price',
    '.s-price-instructions-style .a-color-base',
)

IMAGE_SELECTORS = (
    '.s-image',
    'img[data-image-latency="s-product-image"]',
    '.s-product-image-container img',
)

LINK_SELECTORS = (
    'h2 a',
    'a.s-line-clamp-2',
    '.s-product-image-container a',
    'a[href*="/dp/"]',
)
