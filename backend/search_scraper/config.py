"""
Configuration Management
=======================

Run configuration for the search scraper. Defaults reproduce a single
run against the Amazon Egypt storefront; every value can be overridden
through SCRAPER_* environment variables (optionally from a .env file)
or command-line flags.
"""

import os
from dataclasses import dataclass, fields, replace, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv


DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
    'AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/120.0.0.0 Safari/537.36'
)

ENV_PREFIX = 'SCRAPER_'


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_range(value: str) -> Tuple[float, float]:
    """Parse 'low,high' into a tuple."""
    low, _, high = value.partition(',')
    low_value = float(low)
    return low_value, float(high) if high else low_value


@dataclass(frozen=True)
class ScraperConfig:
    """Everything one scraping run needs to know."""

    # Target
    target_url: str = 'https://www.amazon.eg'
    search_query: str = 'laptops'

    # Output
    output_dir: Path = Path('data')
    snapshot_prefix: str = 'amazon-eg-products'

    # Browser
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = 'en-US,en;q=0.9'
    headless: bool = False  # a human has to be able to solve challenges
    default_timeout_ms: int = 60000

    # Navigation
    navigation_timeout_ms: int = 30000  # per attempt
    max_navigation_attempts: int = 3
    retry_backoff_seconds: float = 5.0

    # Search
    search_box_timeout_ms: int = 5000
    results_timeout_ms: int = 15000
    keystroke_delay_ms: Tuple[float, float] = (50.0, 150.0)
    submit_pause_seconds: Tuple[float, float] = (1.0, 3.0)

    # Challenge
    challenge_timeout_seconds: float = 120.0
    challenge_poll_seconds: float = 1.0

    # Scrolling
    scroll_step_px: int = 100
    scroll_interval_seconds: float = 0.1
    max_scroll_seconds: Optional[float] = 120.0
    settle_timeout_ms: int = 5000

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'ScraperConfig':
        """
        Build a config from SCRAPER_* environment variables.

        Args:
            env_file: Optional .env path. When omitted, a .env in the
                current directory is used if present.
        """
        load_dotenv(env_file)

        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None or raw == '':
                continue
            values[f.name] = _coerce(f.name, raw, getattr(cls, f.name))

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> 'ScraperConfig':
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if 'output_dir' in changes:
            changes['output_dir'] = Path(changes['output_dir'])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary"""
        data = asdict(self)
        data['output_dir'] = str(self.output_dir)
        return data


def _coerce(name: str, raw: str, default: Any) -> Any:
    """Convert an environment string to the type of the field default."""
    if isinstance(default, bool):
        return _env_bool(raw)
    if isinstance(default, Path):
        return Path(raw)
    if isinstance(default, tuple):
        return _env_range(raw)
    if isinstance(default, int):
        return int(raw)
    if name == 'max_scroll_seconds' and raw.strip().lower() in ('none', 'off'):
        return None
    if isinstance(default, float):
        return float(raw)
    return raw
