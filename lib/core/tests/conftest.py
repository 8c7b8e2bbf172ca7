import asyncio
from typing import Any, Mapping

import pytest

from cbqr_core.config import get_settings
from cbqr_core.constants import HISTORY_KEY
from cbqr_core.errors import QuotaExceededError, StorageError


class RecordingStore:
    """Store double that records writes and can fail on demand."""

    def __init__(self, fail_when=None, latency: float = 0.0):
        self.data: dict[str, Any] = {}
        self.attempts: list[dict[str, Any]] = []
        self.fail_when = fail_when
        self.latency = latency

    async def get(self, keys):
        await asyncio.sleep(self.latency)
        return {k: self.data[k] for k in keys if k in self.data}

    async def set(self, items: Mapping[str, Any]) -> None:
        await asyncio.sleep(self.latency)
        items = dict(items)
        self.attempts.append(items)
        if self.fail_when is not None:
            error = self.fail_when(items)
            if error is not None:
                raise error
        self.data.update(items)


@pytest.fixture
def recording_store() -> RecordingStore:
    """A store that accepts every write."""
    return RecordingStore()


@pytest.fixture
def quota_store() -> RecordingStore:
    """A store that rejects histories longer than two entries as over quota."""

    def fail_when(items):
        if len(items.get(HISTORY_KEY, [])) > 2:
            return QuotaExceededError("QUOTA_BYTES quota exceeded")
        return None

    return RecordingStore(fail_when=fail_when)


@pytest.fixture
def broken_store() -> RecordingStore:
    """A store that rejects every write with a non-capacity error."""
    return RecordingStore(fail_when=lambda items: StorageError("permission denied"))


@pytest.fixture
def clean_settings(monkeypatch):
    """Clear cbqr env vars and the settings cache around a test."""
    for name in (
        "CBQR_HISTORY_LIMIT",
        "CBQR_STORE_PATH",
        "CBQR_QUOTA_BYTES",
        "CBQR_WATCHER_POLL_INTERVAL",
        "CBQR_LOG_LEVEL",
        "CBQR_LOGS_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
