#!/usr/bin/env python3
"""
CLI Tests
=========

Run:
    python -m unittest backend.search_scraper.tests.test_cli
"""

import unittest
from pathlib import Path
from unittest import mock

from backend.search_scraper import cli
from backend.search_scraper.config import ScraperConfig
from backend.search_scraper.errors import ResultsNotFound
from backend.search_scraper.models import ListingRecord, RunResult


class TestArguments(unittest.TestCase):

    def test_flags_override_config(self):
        args = cli.build_parser().parse_args(
            ['--query', 'gaming mouse', '--headless', '-o', 'out', '--challenge-timeout', '45']
        )
        with mock.patch.object(ScraperConfig, 'from_env', return_value=ScraperConfig()):
            config = cli.config_from_args(args)

        self.assertEqual(config.search_query, 'gaming mouse')
        self.assertTrue(config.headless)
        self.assertEqual(config.output_dir, Path('out'))
        self.assertEqual(config.challenge_timeout_seconds, 45.0)

    def test_unset_flags_keep_config(self):
        args = cli.build_parser().parse_args([])
        base = ScraperConfig(search_query='from-env', headless=True)
        with mock.patch.object(ScraperConfig, 'from_env', return_value=base):
            config = cli.config_from_args(args)

        self.assertEqual(config, base)


class TestRun(unittest.IsolatedAsyncioTestCase):

    async def test_success_exit_code(self):
        result = RunResult(records=(ListingRecord(title='T', price=1.0, asin='A'),), candidates_seen=2)
        scraper = mock.Mock()
        scraper.run = mock.AsyncMock(return_value=result)
        scraper.snapshot_path = Path('data/x.json')

        with mock.patch.object(cli, 'SearchScraper', return_value=scraper):
            code = await cli.run(ScraperConfig())

        self.assertEqual(code, 0)
        scraper.run.assert_awaited_once()

    async def test_scrape_error_exit_code(self):
        scraper = mock.Mock()
        scraper.run = mock.AsyncMock(side_effect=ResultsNotFound('search results', ['.s-main-slot']))

        with mock.patch.object(cli, 'SearchScraper', return_value=scraper):
            code = await cli.run(ScraperConfig())

        self.assertEqual(code, 1)

    async def test_unexpected_error_exit_code(self):
        scraper = mock.Mock()
        scraper.run = mock.AsyncMock(side_effect=RuntimeError('browser crashed'))

        with mock.patch.object(cli, 'SearchScraper', return_value=scraper):
            code = await cli.run(ScraperConfig())

        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
