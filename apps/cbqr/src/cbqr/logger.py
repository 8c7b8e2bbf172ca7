from datetime import datetime
import logging
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path

from cbqr_core.config import AppSettings
from cbqr_core.utils import get_time

logger: T_Logger = logging.getLogger("cbqr")
system_logger = logger.getChild("SYSTEM")

LOG_FILE_NAME = "cbqr.jsonl"


def build_config(log_file_path: Path, log_level: str) -> dict:
    """dictConfig for a JSON-lines file handler plus a console handler."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file_path),
                "formatter": "json",
                "level": log_level,
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": log_level,
            },
        },
        "loggers": {
            "cbqr": {
                "handlers": ["file", "console"],
                "level": log_level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }


def setup_logging(settings: AppSettings) -> Path:
    """Archive yesterday's log, prune old archives and configure logging.

    Returns:
        Path: The active JSON log file.
    """
    log_file_path = settings.logs_dir / LOG_FILE_NAME
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    _archive_daily_log_file(log_file_path)
    _manage_logfile_archives(log_file_path)

    dictConfig(build_config(log_file_path, settings.log_level.upper()))
    system_logger.debug("Logger for cbqr initialized.")
    return log_file_path


def _archive_daily_log_file(log_file_path: Path) -> None:
    """Archive the log file daily by renaming it with a timestamp."""
    current_time = get_time()
    # skip if an archive was made in the last 24 hours
    archive_files = sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    if archive_files:
        latest_archive = archive_files[0]
        timestamp_str = latest_archive.stem.replace(f"{log_file_path.stem}_", "")
        try:
            timestamp = datetime.strptime(timestamp_str, "%Y%m%d_%H%M%S")
        except ValueError:
            system_logger.warning(
                f"Could not parse timestamp from archive file {latest_archive}, skipping."
            )
            return
        if (current_time - timestamp).total_seconds() < 24 * 3600:
            return

    if log_file_path.exists():
        timestamp = current_time.strftime("%Y%m%d_%H%M%S")
        archive_path = log_file_path.with_name(f"{log_file_path.stem}_{timestamp}.jsonl")
        log_file_path.rename(archive_path)


def _manage_logfile_archives(log_file_path: Path, days_to_keep: int = 10) -> None:
    """Keep only the most recent log archives."""
    archive_files = sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    for archive_file in archive_files[days_to_keep:]:
        archive_file.unlink()
