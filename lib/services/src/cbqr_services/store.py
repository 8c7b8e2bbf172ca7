# region Docstring
"""
cbqr_services.store
Asynchronous key-value stores holding the cbqr snapshot.
Overview:
- Stores have full-overwrite-per-key semantics: set() replaces each given key's
    value, get() returns the values of the requested keys that exist.
- Both stores emulate a byte quota the way a browser extension's local storage
    does: a write that would take the bytes in use over quota_bytes fails with
    QuotaExceededError and leaves the store unchanged.
Contents:
- KeyValueStore: Protocol implemented by the stores.
- measure_bytes(mapping) -> int: bytes-in-use estimate for a mapping.
- MemoryStore: dict-backed store for tests and single-process use.
- SqliteStore: sqlite-utils backed store (table "kv", JSON values).
- load_snapshot(store) -> ReconciliationSnapshot: read and parse the snapshot keys.
"""
# endregion
# region Imports
import asyncio
import copy
import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from sqlite_utils import Database

from cbqr_core.constants import SNAPSHOT_KEYS
from cbqr_core.errors import QuotaExceededError, StorageError
from cbqr_core.models import ReconciliationSnapshot

# endregion

logger = logging.getLogger("cbqr").getChild("store")


class KeyValueStore(Protocol):
    async def get(self, keys: Iterable[str]) -> dict[str, Any]: ...

    async def set(self, items: Mapping[str, Any]) -> None: ...


def measure_bytes(items: Mapping[str, Any]) -> int:
    """
    Estimate the bytes a mapping occupies in the store.

    Example:
        >>> measure_bytes({"a": ["x"]})
        6
    """
    return sum(
        len(key.encode("utf-8")) + len(json.dumps(value).encode("utf-8"))
        for key, value in items.items()
    )


def _check_quota(
    current: Mapping[str, Any], items: Mapping[str, Any], quota_bytes: Optional[int]
) -> None:
    if quota_bytes is None:
        return
    merged = {**current, **items}
    used = measure_bytes(merged)
    if used > quota_bytes:
        raise QuotaExceededError(
            f"QUOTA_BYTES quota exceeded ({used} > {quota_bytes} bytes)"
        )


# region MemoryStore


class MemoryStore:
    """
    In-memory key-value store.

    Attributes:
        quota_bytes (Optional[int]): Byte quota, or None for unlimited.
        latency (float): Seconds every get/set waits before touching the data.
        writes (int): Number of successful set() calls.
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, Any]] = None,
        quota_bytes: Optional[int] = None,
        latency: float = 0.0,
    ) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))
        self.quota_bytes = quota_bytes
        self.latency = latency
        self.writes = 0

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        await asyncio.sleep(self.latency)
        return {key: copy.deepcopy(self._data[key]) for key in keys if key in self._data}

    async def set(self, items: Mapping[str, Any]) -> None:
        await asyncio.sleep(self.latency)
        _check_quota(self._data, items, self.quota_bytes)
        self._data.update(copy.deepcopy(dict(items)))
        self.writes += 1

    def snapshot(self) -> dict[str, Any]:
        """Synchronous copy of everything in the store."""
        return copy.deepcopy(self._data)


# endregion
# region SqliteStore


class SqliteStore:
    """
    Key-value store persisted in a SQLite file through sqlite-utils.

    Blocking database calls run in a worker thread; a lock keeps them from
    overlapping on the shared connection.
    """

    table_name = "kv"

    def __init__(
        self, path: Union[str, Path], quota_bytes: Optional[int] = None
    ) -> None:
        self.path = Path(path)
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.quota_bytes = quota_bytes
        self._lock = threading.Lock()
        self.db = Database(sqlite3.connect(str(self.path), check_same_thread=False))
        self.db[self.table_name].create(
            {"key": str, "value": str}, pk="key", if_not_exists=True
        )

    def _read_all(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for row in self.db[self.table_name].rows:
            try:
                data[row["key"]] = json.loads(row["value"])
            except (TypeError, json.JSONDecodeError):
                logger.warning("Ignoring undecodable value for key %r", row["key"])
        return data

    def _get(self, keys: list[str]) -> dict[str, Any]:
        with self._lock:
            data = self._read_all()
        return {key: data[key] for key in keys if key in data}

    def _set(self, items: Mapping[str, Any]) -> None:
        with self._lock:
            _check_quota(self._read_all(), items, self.quota_bytes)
            rows = [
                {"key": key, "value": json.dumps(value)} for key, value in items.items()
            ]
            with self.db.conn:
                self.db[self.table_name].upsert_all(rows, pk="key")

    async def get(self, keys: Iterable[str]) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(self._get, list(keys))
        except sqlite3.Error as error:
            raise StorageError(
                "Failed to read from the store", original_error=error
            ) from error

    async def set(self, items: Mapping[str, Any]) -> None:
        try:
            await asyncio.to_thread(self._set, dict(items))
        except sqlite3.Error as error:
            raise StorageError(
                "Failed to write to the store", original_error=error
            ) from error

    def close(self) -> None:
        self.db.close()


# endregion


async def load_snapshot(store: KeyValueStore) -> ReconciliationSnapshot:
    """Read the snapshot keys from the store and parse them."""
    saved = await store.get(SNAPSHOT_KEYS)
    return ReconciliationSnapshot.from_store(saved)


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "load_snapshot",
    "measure_bytes",
]
