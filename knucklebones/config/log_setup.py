"""
Knucklebones - Logging Setup

Root logger configuration for scripts and presentation layers embedding
the engine. Library modules only ever call logging.getLogger(__name__).
"""

import logging
import sys

from knucklebones.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name; defaults to the settings' effective level
    """
    level = (level or get_settings().effective_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
