"""
cbqr core package.

History queue engine and initial-state reconciliation for the cbqr clipboard
history: text normalization, the bounded deduplicating history queue, the
write serializer, the quota-aware persister and the reconciler. Everything in
this package is either pure or talks to the store only through the small
async protocol used by QuotaAwarePersister.

Settings live in cbqr_core.config and are built with pydantic-settings.
"""

from . import constants  # noqa: F401
from .capture import extract_copied_text
from .errors import (
    CbqrError,
    QuotaExceededError,
    StorageError,
    is_capacity_error,
)
from .history import coerce, most_recent, upsert
from .models import (
    ClipboardAddMessage,
    CopyEvent,
    DocumentState,
    InitialState,
    MessageResponse,
    PanelState,
    PersistOutcome,
    ReconciliationSnapshot,
    TextControl,
)
from .persister import QuotaAwarePersister
from .reconcile import reconcile, reconcile_snapshot
from .serial import SerialQueue
from .text import is_valid, normalize

__all__ = [
    "CbqrError",
    "ClipboardAddMessage",
    "CopyEvent",
    "DocumentState",
    "InitialState",
    "MessageResponse",
    "PanelState",
    "PersistOutcome",
    "QuotaAwarePersister",
    "QuotaExceededError",
    "ReconciliationSnapshot",
    "SerialQueue",
    "StorageError",
    "TextControl",
    "coerce",
    "extract_copied_text",
    "is_capacity_error",
    "is_valid",
    "most_recent",
    "normalize",
    "reconcile",
    "reconcile_snapshot",
    "upsert",
]
