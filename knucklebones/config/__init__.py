"""
Knucklebones Configuration.

Environment variables, settings, and logging configuration.
"""

from knucklebones.config.log_setup import configure_logging
from knucklebones.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
