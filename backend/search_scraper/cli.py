#!/usr/bin/env python3
"""
CLI for search result scraping.

Usage:
    # Scrape the default storefront and query
    python -m backend.search_scraper.cli

    # Different query, headless, custom output directory
    python -m backend.search_scraper.cli --query "gaming mouse" --headless --output-dir out

Every option can also be set through SCRAPER_* environment variables or
a .env file (see ScraperConfig).
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import ScraperConfig
from .errors import ScrapeError
from .logger import set_level
from .models import RunResult
from .pipeline import SearchScraper

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape product listings from a storefront search")
    parser.add_argument("--url", help="Storefront URL to load")
    parser.add_argument("--query", "-q", help="Search query text")
    parser.add_argument("--output-dir", "-o", help="Directory for the snapshot and screenshots")
    parser.add_argument("--user-agent", help="Browser user agent")
    parser.add_argument("--headless", action="store_true", default=None,
                        help="Run in headless mode (default: headful, so challenges can be solved)")
    parser.add_argument("--challenge-timeout", type=float,
                        help="Seconds to wait for a manual CAPTCHA solve")
    parser.add_argument("--env-file", help="Load settings from this .env file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> ScraperConfig:
    config = ScraperConfig.from_env(args.env_file)
    return config.with_overrides(
        target_url=args.url,
        search_query=args.query,
        output_dir=args.output_dir,
        user_agent=args.user_agent,
        headless=args.headless,
        challenge_timeout_seconds=args.challenge_timeout,
    )


def print_summary(result: RunResult, snapshot_path, limit: int = 10):
    """Pretty print the first few records."""
    table = Table(title=f"{len(result)} of {result.candidates_seen} listings kept")
    table.add_column("#", justify="right")
    table.add_column("Title", overflow="ellipsis", max_width=60)
    table.add_column("Price", justify="right")
    table.add_column("ASIN")

    for i, record in enumerate(result.records[:limit], 1):
        table.add_row(str(i), record.title, f"{record.price:,.2f}", record.asin or "N/A")

    console.print(table)
    if len(result) > limit:
        console.print(f"  ... and {len(result) - limit} more")
    console.print(f"\nSaved to: {snapshot_path}")


async def run(config: ScraperConfig) -> int:
    scraper = SearchScraper(config)
    try:
        result = await scraper.run()
    except ScrapeError as e:
        console.print(f"[red]Scrape failed:[/red] {e}")
        return 1
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e!r}")
        return 1

    print_summary(result, scraper.snapshot_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    return asyncio.run(run(config_from_args(args)))


if __name__ == "__main__":
    sys.exit(main())
