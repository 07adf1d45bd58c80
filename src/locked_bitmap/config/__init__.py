"""
Configuration management for locked_bitmap.

Settings are loaded from TOML files and environment variables:

Configuration hierarchy:
1. Default values (built-in)
2. config/default.toml (project defaults)
3. config/local.toml (user overrides, gitignored)
4. LOCKED_BITMAP_CONFIG_PATH
5. Environment variables (LOCKED_BITMAP_* prefix)
6. Command-line arguments

Example:
    >>> from locked_bitmap.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> settings.search.comparator
    'exact'
"""

from locked_bitmap.config.settings import (
    LoggingSettings,
    SearchSettings,
    Settings,
    TransformSettings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "LoggingSettings",
    "SearchSettings",
    "Settings",
    "TransformSettings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
