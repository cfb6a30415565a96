"""Configuration and settings management."""

from iconbox.config.logging import get_logger, setup_logging
from iconbox.config.settings import Settings, clear_settings_cache, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "setup_logging",
    "get_logger",
]
