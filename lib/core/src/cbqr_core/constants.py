# region Docstring
"""
cbqr_core.constants
Shared constants for the history store, messages and error classification.
Contents:
- Storage keys:
    - HISTORY_KEY, LAST_CLIPBOARD_KEY, CURRENT_TEXT_KEY: keys of the persisted
        snapshot in the key-value store.
    - SNAPSHOT_KEYS: all three, in read order.
- Limits:
    - DEFAULT_HISTORY_LIMIT: default history capacity.
    - DEFAULT_QUOTA_BYTES: default store quota, matching a browser extension's
        local storage area.
- Message types:
    - MessageType: enumeration of messages accepted by the history writer.
- Error classification:
    - QUOTA_ERROR_CODE: code carried by QuotaExceededError.
    - CAPACITY_ERROR_MARKERS: lowercase substrings that identify a capacity
        failure in a store error message.
- Copy capture:
    - TEXT_CONTROL_TAGS: element tags whose selection bounds are trusted.
"""
# endregion
# region Imports
import enum

# endregion
# region Storage

HISTORY_KEY = "clipboardHistory"
LAST_CLIPBOARD_KEY = "lastClipboard"
CURRENT_TEXT_KEY = "currentText"
SNAPSHOT_KEYS = [HISTORY_KEY, LAST_CLIPBOARD_KEY, CURRENT_TEXT_KEY]

DEFAULT_HISTORY_LIMIT = 10
DEFAULT_QUOTA_BYTES = 10_485_760

# endregion
# region Messages


class MessageType(str, enum.Enum):
    """Enumeration of messages handled by the history writer."""

    CLIPBOARD_ADD = "CLIPBOARD_ADD"


# endregion
# region Errors

QUOTA_ERROR_CODE = "QUOTA_BYTES"
CAPACITY_ERROR_MARKERS = (
    "quota",
    "quota_bytes",
    "exceeded",
    "database or disk is full",
    "no space left",
)

# endregion
# region Capture

TEXT_CONTROL_TAGS = {"INPUT", "TEXTAREA"}

# endregion
