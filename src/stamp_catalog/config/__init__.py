"""Configuration management for the stamp catalog.

Usage:
    >>> from stamp_catalog.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.LOG_LEVEL)
"""

from stamp_catalog.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
