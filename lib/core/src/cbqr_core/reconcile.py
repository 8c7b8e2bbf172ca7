# region Docstring
"""
cbqr_core.reconcile
Decides what the panel shows when it opens, and what is written back.
Overview:
- Between two panel sessions the user may have copied something new, edited
    the panel text, or done neither. reconcile() merges the stored snapshot
    with the clipboard content observed now.
Rules (first match wins):
    1. The clipboard holds new content (non-empty, different from the stored
        clipboard snapshot):
        a. A user edit that differs from the old clipboard snapshot is pushed
            into the history first; nothing else records it.
        b. The new clipboard content is pushed into the history.
        c. It becomes the displayed text, user text and clipboard snapshot.
    2. Otherwise, a stored user text is shown as-is; history untouched.
    3. Otherwise, the newest history entry (or "") is shown.
Design notes:
- reconcile() is a pure, total function: all reads and writes happen in the
    caller, and malformed inputs are normalized rather than rejected.
"""
# endregion
# region Imports
from typing import Any

from cbqr_core.constants import DEFAULT_HISTORY_LIMIT
from cbqr_core.history import coerce, most_recent, upsert
from cbqr_core.models.snapshot import ReconciliationSnapshot
from cbqr_core.models.state import InitialState
from cbqr_core.text import normalize

# endregion


def reconcile(
    last_clipboard: Any,
    last_user_text: Any,
    new_clipboard: Any,
    history: Any,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> InitialState:
    """
    Compute the initial panel state.

    Args:
        last_clipboard (Any): Clipboard snapshot stored at the last reconciliation.
        last_user_text (Any): Text last edited or selected in the panel.
        new_clipboard (Any): Clipboard content read now ("" if unreadable).
        history (Any): Stored history, oldest first.
        limit (int): History capacity.

    Returns:
        InitialState: Display text, history and snapshot values to persist.

    Example:
        >>> state = reconcile("item1", "item 12", "item2", ["item1"])
        >>> state.new_history
        ['item1', 'item 12', 'item2']
    """
    last_clipboard = normalize(last_clipboard)
    last_user_text = normalize(last_user_text)
    new_clipboard = normalize(new_clipboard)
    clean_history = coerce(history)

    if new_clipboard and new_clipboard != last_clipboard:
        updated = clean_history
        if last_user_text and last_user_text != last_clipboard:
            updated = upsert(updated, last_user_text, limit)
        updated = upsert(updated, new_clipboard, limit)
        return InitialState(
            display_text=new_clipboard,
            new_history=updated,
            new_last_clipboard=new_clipboard,
            new_user_text=new_clipboard,
            clipboard_changed=True,
        )

    if last_user_text:
        return InitialState(
            display_text=last_user_text,
            new_history=clean_history,
            new_last_clipboard=last_clipboard,
            new_user_text=last_user_text,
            clipboard_changed=False,
        )

    fallback = most_recent(clean_history)
    return InitialState(
        display_text=fallback,
        new_history=clean_history,
        new_last_clipboard=last_clipboard,
        new_user_text=fallback,
        clipboard_changed=False,
    )


def reconcile_snapshot(
    snapshot: ReconciliationSnapshot,
    new_clipboard: Any,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> InitialState:
    """reconcile() over a parsed snapshot."""
    return reconcile(
        snapshot.last_clipboard,
        snapshot.last_user_text,
        new_clipboard,
        snapshot.history,
        limit,
    )


__all__ = ["reconcile", "reconcile_snapshot"]
