# region Docstring
"""
cbqr_core.history
Bounded, deduplicating history queue of normalized text.
Overview:
- The history is a plain list of strings with the newest entry at the end.
- Functions here are pure: they never mutate their input and never raise.
Contents:
- upsert(queue, text, limit) -> list[str]:
    Move or append the normalized text to the tail, then drop the oldest
    entries until the list fits the limit.
- coerce(value) -> list[str]:
    Sanitize an untrusted value (usually read from the store) into a list of
    normalized, non-empty strings.
- most_recent(queue) -> str:
    Last entry or "".
"""
# endregion
# region Imports
from typing import Any, Sequence

from cbqr_core.constants import DEFAULT_HISTORY_LIMIT
from cbqr_core.text import normalize

# endregion
# region Queue Operations


def coerce(value: Any) -> list[str]:
    """
    Sanitize a stored history value.

    Lists and tuples are normalized item by item and empty items dropped; any
    other shape (None, a bare string, a mapping) yields an empty history.
    """
    if not isinstance(value, (list, tuple)):
        return []
    items = (normalize(item) for item in value)
    return [item for item in items if item]


def upsert(
    queue: Sequence[str], text: Any, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[str]:
    """
    Insert text at the tail of the history, refreshing it if already present.

    Args:
        queue (Sequence[str]): Current history, oldest first.
        text (Any): Raw text to insert. Invalid text leaves the history unchanged.
        limit (int): Maximum length of the result. limit <= 0 yields [].

    Returns:
        list[str]: A new history list.

    Example:
        >>> upsert(["item1", "item2"], "item1", 10)
        ['item2', 'item1']
        >>> upsert(["1", "2", "3"], "4", 3)
        ['2', '3', '4']
    """
    items = coerce(queue)
    normalized = normalize(text)
    if not normalized:
        return items

    items = [item for item in items if item != normalized]
    items.append(normalized)

    limit = max(int(limit), 0)
    if len(items) > limit:
        del items[: len(items) - limit]
    return items


def most_recent(queue: Sequence[str]) -> str:
    """Return the newest entry, or "" for an empty history."""
    items = coerce(queue)
    return items[-1] if items else ""


# endregion

__all__ = ["coerce", "most_recent", "upsert"]
