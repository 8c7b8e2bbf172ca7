# region Docstring
"""
cbqr_core.persister
Quota-aware history writes.
Overview:
- QuotaAwarePersister writes the history list (plus optional companion keys) to
    a key-value store. When the store rejects the write as over capacity, the
    oldest entry is dropped and the write retried, so every retry is strictly
    smaller than the last and the loop ends after at most len(queue) attempts.
- A capacity failure with one entry left, or any other failure, ends the loop:
    the error is logged and returned in the PersistOutcome for the caller to show.
Design notes:
- Which errors count as capacity errors is decided by an injectable predicate
    (cbqr_core.errors.is_capacity_error by default).
- On failure the outcome carries the last history this persister saw land in
    the store, or the pre-attempt queue if nothing has landed yet.
"""
# endregion
# region Imports
import logging
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from cbqr_core.constants import HISTORY_KEY
from cbqr_core.errors import is_capacity_error
from cbqr_core.history import coerce
from cbqr_core.models.state import PersistOutcome

# endregion

logger = logging.getLogger("cbqr").getChild("persister")


class WritableStore(Protocol):
    async def set(self, items: Mapping[str, Any]) -> None: ...


class QuotaAwarePersister:
    """
    Persist a history list, evicting the oldest entries on quota errors.

    Attributes:
        key (str): Store key the history is written under.
        last_persisted (Optional[list[str]]): Last history confirmed written.
    """

    def __init__(
        self,
        store: WritableStore,
        key: str = HISTORY_KEY,
        is_capacity_error: Callable[[BaseException], bool] = is_capacity_error,
    ) -> None:
        self._store = store
        self._is_capacity_error = is_capacity_error
        self.key = key
        self.last_persisted: Optional[list[str]] = None

    async def persist(
        self, queue: Sequence[str], extra: Optional[Mapping[str, Any]] = None
    ) -> PersistOutcome:
        """
        Write the queue, shrinking it from the head until the store accepts it.

        Args:
            queue (Sequence[str]): History to store, oldest first.
            extra (Optional[Mapping[str, Any]]): Other keys written in the same
                store call (e.g. the clipboard snapshot).

        Returns:
            PersistOutcome: Stored history, number of evicted entries and the
                error, if the write could not be completed.
        """
        original = coerce(queue)
        candidate = list(original)
        evicted = 0

        while True:
            try:
                await self._store.set({**(extra or {}), self.key: candidate})
            except Exception as error:
                if self._is_capacity_error(error) and len(candidate) > 1:
                    candidate = candidate[1:]
                    evicted += 1
                    logger.warning(
                        "Store over capacity, evicting oldest history entry (%d evicted so far)",
                        evicted,
                    )
                    continue

                logger.error("Failed to persist history: %s", error)
                fallback = (
                    self.last_persisted if self.last_persisted is not None else original
                )
                return PersistOutcome(
                    history=list(fallback), evicted=evicted, error=str(error) or repr(error)
                )

            self.last_persisted = list(candidate)
            if evicted:
                logger.info("History persisted after evicting %d entries", evicted)
            return PersistOutcome(history=candidate, evicted=evicted)


__all__ = ["QuotaAwarePersister", "WritableStore"]
