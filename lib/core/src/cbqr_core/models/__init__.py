"""
cbqr_core.models
Pydantic models shared by the cbqr core and its collaborators.
Contents:
- Persisted state:
    - ReconciliationSnapshot: parsed form of the stored snapshot keys.
- Results:
    - InitialState: output of the reconciler.
    - PersistOutcome: output of the quota-aware persister.
    - PanelState: InitialState plus the PersistOutcome of writing it back.
- Messages:
    - ClipboardAddMessage, MessageResponse: capture surface <-> history writer.
- Copy capture:
    - CopyEvent, DocumentState, TextControl: inputs to extract_copied_text.
"""

from .capture import CopyEvent, DocumentState, TextControl  # noqa: F401
from .messages import ClipboardAddMessage, MessageResponse  # noqa: F401
from .snapshot import ReconciliationSnapshot  # noqa: F401
from .state import InitialState, PanelState, PersistOutcome  # noqa: F401

__all__ = [
    "ClipboardAddMessage",
    "CopyEvent",
    "DocumentState",
    "InitialState",
    "MessageResponse",
    "PanelState",
    "PersistOutcome",
    "ReconciliationSnapshot",
    "TextControl",
]
