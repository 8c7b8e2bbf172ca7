"""
cbqr services package.

Collaborators around the cbqr core: key-value stores, the system clipboard
reader, the history writer that owns every store update, the panel session,
the copy capture hook and the clipboard watcher.
"""

from .capture import CopyCapture  # noqa: F401
from .clipboard import ClipboardReader, SystemClipboard  # noqa: F401
from .panel import PanelSession  # noqa: F401
from .store import (  # noqa: F401
    KeyValueStore,
    MemoryStore,
    SqliteStore,
    load_snapshot,
    measure_bytes,
)
from .watcher import ClipboardWatcher  # noqa: F401
from .writer import HistoryWriter  # noqa: F401

__all__ = [
    "ClipboardReader",
    "ClipboardWatcher",
    "CopyCapture",
    "HistoryWriter",
    "KeyValueStore",
    "MemoryStore",
    "PanelSession",
    "SqliteStore",
    "SystemClipboard",
    "load_snapshot",
    "measure_bytes",
]
