from typing import Any


def normalize(value: Any) -> str:
    """
    Canonical form of a raw text value.

    None and non-string values become the empty string; strings are stripped of
    leading and trailing whitespace.

    Example:
        >>> normalize("  item1\\n")
        'item1'
        >>> normalize(None)
        ''
        >>> normalize(42)
        ''
    """
    if not isinstance(value, str):
        return ""
    return value.strip()


def is_valid(value: Any) -> bool:
    """True if the value normalizes to a non-empty string."""
    return normalize(value) != ""


__all__ = ["is_valid", "normalize"]
