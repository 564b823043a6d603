"""
Utility functions and helpers for the plugin host.
Includes logging setup.
"""

import logging
import sys
from typing import Optional

from config.settings import settings

def setup_logging(level: Optional[str] = None) -> None:
    """
    Set up logging configuration for the host.

    Log records go to stderr; stdout is reserved for plugin output.

    Args:
        level: Level name, defaults to settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    logger = logging.getLogger(__name__)
    logger.debug("Logging system initialized")

