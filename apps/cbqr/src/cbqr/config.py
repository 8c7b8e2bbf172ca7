"""
Configuration settings for the cbqr command-line application.

Settings are loaded lazily through the cached factory so tests can change the
environment and call get_settings.cache_clear() before a command runs.
"""

from cbqr_core.config import (
    AppSettings,
    ClipboardWatcherSettings,
    HistorySettings,
    get_settings,
)


def app_settings() -> AppSettings:
    """Application-wide settings (root, environment, log level, log dir)."""
    return get_settings(AppSettings)


def history_settings() -> HistorySettings:
    """History store settings (limit, store path, quota)."""
    return get_settings(HistorySettings)


def watcher_settings() -> ClipboardWatcherSettings:
    """Clipboard watcher settings (poll interval)."""
    return get_settings(ClipboardWatcherSettings)
