"""
Logging configuration for search scraping.
"""

import logging
import sys

# Create logger
logger = logging.getLogger('search_scraper')
logger.setLevel(logging.INFO)
logger.propagate = False

# Console handler with formatting
console = logging.StreamHandler(sys.stdout)
console.setLevel(logging.DEBUG)

formatter = logging.Formatter(
    '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
    datefmt='%H:%M:%S'
)
console.setFormatter(formatter)

logger.addHandler(console)


def set_level(level):
    """Change verbosity of the scraper logger and all its children."""
    logger.setLevel(level)


# Component-specific loggers
def get_logger(name):
    """Get a child logger for a specific component."""
    return logger.getChild(name)
