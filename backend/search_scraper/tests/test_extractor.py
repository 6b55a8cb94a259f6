#!/usr/bin/env python3
"""
Extractor Tests
===============

Field lookups, price parsing and listing selection against static
results markup.

Run:
    python -m unittest backend.search_scraper.tests.test_extractor
"""

import unittest

from bs4 import BeautifulSoup

from backend.search_scraper.extractor import (
    parse_price, first_match, extract_listing, extract_listings,
    select_listings, text_lookup,
)
from backend.search_scraper.tests.fakes import listing_html, results_page

BASE_URL = 'https://www.amazon.eg/s?k=laptops'


def element(html):
    """First top-level element of an HTML fragment."""
    return BeautifulSoup(html, 'html.parser').find()


# =============================================================================
# PRICE PARSING
# =============================================================================

class TestParsePrice(unittest.TestCase):

    def test_thousands_separator_stripped(self):
        self.assertEqual(parse_price("1,299.50"), 1299.50)

    def test_currency_prefix(self):
        self.assertEqual(parse_price("EGP 25,999.00"), 25999.0)

    def test_multiple_separators(self):
        self.assertEqual(parse_price("12,345,678.9"), 12345678.9)

    def test_first_numeric_token_wins(self):
        self.assertEqual(parse_price("EGP 899.00 (was 1,099.00)"), 899.0)

    def test_no_fractional_part_is_absent(self):
        """The token must carry a decimal part."""
        self.assertIsNone(parse_price("1299"))

    def test_no_number_is_absent(self):
        self.assertIsNone(parse_price("Currently unavailable"))

    def test_empty_and_none(self):
        self.assertIsNone(parse_price(""))
        self.assertIsNone(parse_price(None))

    def test_arabic_indic_digits(self):
        self.assertEqual(parse_price("١٬٢٩٩٫٥٠ جنيه"), 1299.50)


# =============================================================================
# LOOKUP CHAINS
# =============================================================================

class TestFirstMatch(unittest.TestCase):

    def test_short_circuits_on_first_hit(self):
        """Later lookups are never called once one returns a value."""
        called = []

        def make(name, value):
            def lookup(_):
                called.append(name)
                return value
            return lookup

        node = element('<div></div>')
        result = first_match(node, [make('a', 'first'), make('b', 'second')])

        self.assertEqual(result, 'first')
        self.assertEqual(called, ['a'])

    def test_skips_empty_results(self):
        node = element('<div><h2></h2><span class="alt">Fallback</span></div>')
        result = first_match(node, [text_lookup('h2'), text_lookup('.alt')])
        self.assertEqual(result, 'Fallback')

    def test_all_missing(self):
        node = element('<div></div>')
        self.assertIsNone(first_match(node, [text_lookup('h2'), text_lookup('.alt')]))


# =============================================================================
# SINGLE LISTING
# =============================================================================

class TestExtractListing(unittest.TestCase):

    def test_all_fields(self):
        node = element(listing_html(
            'B0TEST0001', title='X-Laptop 15"', price='EGP 1,299.50',
            image='https://m.media-amazon.com/images/I/x.jpg',
        ))
        record = extract_listing(node, BASE_URL)

        self.assertEqual(record.title, 'X-Laptop 15"')
        self.assertEqual(record.price, 1299.50)
        self.assertEqual(record.image_url, 'https://m.media-amazon.com/images/I/x.jpg')
        self.assertEqual(record.url, 'https://www.amazon.eg/dp/B0TEST0001')
        self.assertEqual(record.asin, 'B0TEST0001')

    def test_missing_fields_are_none(self):
        node = element(listing_html('B0TEST0002', title='No Price Laptop'))
        record = extract_listing(node, BASE_URL)

        self.assertEqual(record.title, 'No Price Laptop')
        self.assertIsNone(record.price)
        self.assertIsNone(record.image_url)

    def test_title_whitespace_collapsed(self):
        node = element('<div data-asin="A"><h2><a href="/x"><span>\n  Big \n Laptop </span></a></h2></div>')
        self.assertEqual(extract_listing(node).title, 'Big Laptop')

    def test_title_fallback_selector(self):
        node = element('<div data-asin="A"><span class="a-size-medium">Alt Title</span></div>')
        self.assertEqual(extract_listing(node).title, 'Alt Title')

    def test_price_falls_through_unparseable_candidate(self):
        """A candidate whose text has no number does not stop the chain."""
        node = element(
            '<div data-asin="A">'
            '<span class="a-price"><span class="a-offscreen"></span></span>'
            '<span class="a-color-price">EGP 999.00</span>'
            '</div>'
        )
        self.assertEqual(extract_listing(node).price, 999.0)

    def test_image_prefers_src(self):
        node = element(listing_html(
            'A', title='T', image='https://img/direct.jpg', lazy_image='https://img/lazy.jpg',
        ))
        self.assertEqual(extract_listing(node).image_url, 'https://img/direct.jpg')

    def test_image_lazy_placeholder_fallback(self):
        node = element(listing_html('A', title='T', lazy_image='https://img/lazy.jpg'))
        self.assertEqual(extract_listing(node).image_url, 'https://img/lazy.jpg')

    def test_asin_from_url_when_attribute_missing(self):
        node = element(
            '<div class="s-result-item">'
            '<h2><a href="/Some-Laptop/dp/B0ABCDEFGH/ref=sr_1_1"><span>T</span></a></h2>'
            '</div>'
        )
        record = extract_listing(node, BASE_URL)
        self.assertEqual(record.url, 'https://www.amazon.eg/Some-Laptop/dp/B0ABCDEFGH/ref=sr_1_1')
        self.assertEqual(record.asin, 'B0ABCDEFGH')

    def test_empty_asin_attribute_is_absent(self):
        node = element('<div data-asin=""><span class="a-size-medium">T</span></div>')
        self.assertIsNone(extract_listing(node).asin)


# =============================================================================
# RESULTS PAGE
# =============================================================================

class TestExtractListings(unittest.TestCase):

    def test_document_order(self):
        html = results_page([
            listing_html(f'B00000000{i}', title=f'Laptop {i}', price=f'{i},000.00')
            for i in range(5)
        ])
        records = extract_listings(html, BASE_URL)

        self.assertEqual([r.asin for r in records], [f'B00000000{i}' for i in range(5)])
        self.assertEqual(records[3].price, 3000.0)

    def test_sponsored_slots_excluded(self):
        html = results_page([
            listing_html('AD1', title='Sponsored', price='1.00', extra_classes='AdHolder'),
            listing_html('ORG1', title='Organic', price='2.00'),
        ])
        records = extract_listings(html, BASE_URL)
        self.assertEqual([r.asin for r in records], ['ORG1'])

    def test_container_fallback(self):
        """Without search-result markers, generic result items are used."""
        html = (
            '<div class="s-main-slot">'
            '<div class="s-result-item" data-asin="G1"><h2>Generic</h2></div>'
            '<div class="s-result-item s-ad-slot" data-asin="AD"><h2>Ad</h2></div>'
            '</div>'
        )
        listings = select_listings(BeautifulSoup(html, 'html.parser'))
        self.assertEqual([node['data-asin'] for node in listings], ['G1'])

    def test_empty_page(self):
        self.assertEqual(extract_listings('<html><body></body></html>'), [])


if __name__ == "__main__":
    unittest.main()
