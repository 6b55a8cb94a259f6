"""
Run output: the JSON snapshot and the screenshot evidence files.
"""

import json
from pathlib import Path
from typing import Union

from .logger import get_logger
from .models import RunResult

log = get_logger('storage')

RESULTS_SCREENSHOT = 'results-screenshot.png'
ERROR_SCREENSHOT = 'error-screenshot.png'


class SnapshotWriter:
    """Writes run artifacts into one output directory."""

    def __init__(self, output_dir: Union[str, Path], prefix: str = 'amazon-eg-products'):
        self.output_dir = Path(output_dir)
        self.prefix = prefix

    def ensure_dir(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def snapshot_path(self, result: RunResult) -> Path:
        return self.output_dir / f"{self.prefix}-{result.timestamp}.json"

    def screenshot_path(self, name: str) -> Path:
        """Evidence files are overwritten on every run."""
        return self.output_dir / name

    def write(self, result: RunResult) -> Path:
        """Serialize the run's records; returns the snapshot path."""
        self.ensure_dir()
        path = self.snapshot_path(result)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(result.to_list(), f, indent=2, ensure_ascii=False)
        log.info(f"Successfully saved {len(result)} products to {path}")
        return path

