"""
Record validation for extracted listings.
"""

import math
from typing import Iterable, List

from .models import ListingRecord


def is_usable(record: ListingRecord) -> bool:
    """A record is kept only with a non-empty title and a finite, non-negative price."""
    if not (record.title and record.title.strip()):
        return False
    return record.price is not None and math.isfinite(record.price) and record.price >= 0


def filter_usable(records: Iterable[ListingRecord]) -> List[ListingRecord]:
    """Stable filter: retained records keep their page order."""
    return [record for record in records if is_usable(record)]
