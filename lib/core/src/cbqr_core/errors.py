"""Exceptions raised at the cbqr I/O boundary, and the capacity error predicate."""

import time
from typing import Optional

from cbqr_core.constants import CAPACITY_ERROR_MARKERS, QUOTA_ERROR_CODE


class CbqrError(Exception):
    """Base exception class for cbqr."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.original_error = original_error
        self.timestamp = time.time()

    def __str__(self):
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class StorageError(CbqrError):
    """A key-value store read or write failed."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message, original_error=original_error)
        self.code = code


class QuotaExceededError(StorageError):
    """A write would take the store over its byte quota."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message, code=QUOTA_ERROR_CODE, original_error=original_error)


def is_capacity_error(error: BaseException) -> bool:
    """
    Best-effort check whether a store failure means "no room for this write".

    Matches the error code first, then falls back to substring matching on the
    message, since stores report quota failures inconsistently.

    Args:
        error (BaseException): The failure raised by the store.

    Returns:
        bool: True if the failure looks like a capacity/quota error.

    Example:
        >>> is_capacity_error(QuotaExceededError("too big"))
        True
        >>> is_capacity_error(StorageError("permission denied"))
        False
    """
    if isinstance(error, QuotaExceededError):
        return True
    code = getattr(error, "code", None)
    if isinstance(code, str) and code.upper() == QUOTA_ERROR_CODE:
        return True
    message = str(error).lower()
    return any(marker in message for marker in CAPACITY_ERROR_MARKERS)


__all__ = [
    "CbqrError",
    "QuotaExceededError",
    "StorageError",
    "is_capacity_error",
]
