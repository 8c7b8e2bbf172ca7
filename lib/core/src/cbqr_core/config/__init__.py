"""
cbqr_core.config
Configuration and settings management for cbqr.
Overview:
- Provides Pydantic-based settings classes for the history store, the clipboard
    watcher and the application shell.
- Each settings class inherits from FactoryBaseSettings and supports environment
    variable overrides via Field aliases.
Contents:
- Settings Classes:
    - HistorySettings:
        History capacity, location of the SQLite key-value store and the storage
        quota emulated by the stores.
    - ClipboardWatcherSettings:
        Poll interval for the background clipboard watcher.
    - AppSettings:
        Application root, environment, log level and log directory.
Design Notes:
- Default values are provided for all fields enabling zero-configuration startup.
- Path fields accept strings and are coerced to Path.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator

from cbqr_core.config.base import APP_ENV, APP_ROOT
from cbqr_core.config.factory import FactoryBaseSettings
from cbqr_core.config.factory import get_settings  # noqa: F401  This is used externally
from cbqr_core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_QUOTA_BYTES


class HistorySettings(FactoryBaseSettings):
    """
    Clipboard history configuration settings.
    """

    limit: int = Field(
        default=DEFAULT_HISTORY_LIMIT,
        alias="CBQR_HISTORY_LIMIT",
        description="Maximum number of entries kept in the history.",
    )
    store_path: Path = Field(
        default=APP_ROOT / ".cache" / "cbqr.db",
        alias="CBQR_STORE_PATH",
        description="Path to the SQLite file backing the key-value store.",
    )
    quota_bytes: Optional[int] = Field(
        default=DEFAULT_QUOTA_BYTES,
        alias="CBQR_QUOTA_BYTES",
        description="Bytes the store may hold before writes fail with a quota error. (None disables the check)",
    )

    @field_validator("limit", mode="before")
    def parse_limit(cls, v):
        # Negative limits behave like 0 (an always-empty history)
        if isinstance(v, str) and v.strip().lstrip("-").isdigit():
            v = int(v)
        if isinstance(v, int) and v < 0:
            return 0
        return v


class ClipboardWatcherSettings(FactoryBaseSettings):
    """
    Configuration for the Clipboard Watcher Service.
    """

    poll_interval: float = Field(
        default=1.0,
        description="Interval for polling the clipboard. (Seconds) [Default: 1.0]",
        alias="CBQR_WATCHER_POLL_INTERVAL",
    )


class AppSettings(FactoryBaseSettings):
    """Application configuration settings."""

    app_root: Path = Field(
        default=Path(APP_ROOT),
        description="Root directory for application data storage.",
    )
    environment: str = Field(
        default=APP_ENV,
        description="Current application environment (prod, docker, dev).",
        alias="ENVIRONMENT",
    )
    log_level: str = Field(
        default="info",
        description="Log level for the console and the JSON log file.",
        alias="CBQR_LOG_LEVEL",
    )
    log_dir: Optional[Path] = Field(
        default=None,
        description="Directory for log files. Defaults to <app_root>/logs.",
        alias="CBQR_LOGS_DIR",
    )

    @property
    def logs_dir(self) -> Path:
        """Base directory for logs."""
        return self.log_dir or self.app_root / "logs"

    @property
    def cache_dir(self) -> Path:
        """Base directory for cache."""
        return self.app_root / ".cache"


__all__ = [
    "AppSettings",
    "ClipboardWatcherSettings",
    "FactoryBaseSettings",
    "HistorySettings",
    "get_settings",
]
