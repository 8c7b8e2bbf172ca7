# region Docstring
"""
cbqr_services.writer
The single owner of every read-modify-write cycle on the history store.
Overview:
- The background listener, the panel and the copy capture hook all change the
    same stored snapshot. Each of them goes through one HistoryWriter, whose
    SerialQueue runs the read, the computation and the write of one update as a
    single task, so no update is lost to an interleaved write.
- Every task reads the store when it starts running, never earlier.
Contents:
- HistoryWriter:
    - add(text): append copied text to the history.
    - record_user_text(text): remember the panel text without touching history.
    - commit(text): push text into the history and make it the panel text
        (history selection and paste).
    - reconcile(new_clipboard): run the reconciler against the stored snapshot
        and write its result back.
    - handle_message(message): entry point for CLIPBOARD_ADD messages.
"""
# endregion
# region Imports
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from cbqr_core.constants import (
    CURRENT_TEXT_KEY,
    DEFAULT_HISTORY_LIMIT,
    LAST_CLIPBOARD_KEY,
    MessageType,
)
from cbqr_core.history import upsert
from cbqr_core.models import (
    ClipboardAddMessage,
    MessageResponse,
    PanelState,
    PersistOutcome,
    ReconciliationSnapshot,
)
from cbqr_core.persister import QuotaAwarePersister
from cbqr_core.reconcile import reconcile_snapshot
from cbqr_core.serial import SerialQueue
from cbqr_core.text import normalize

from .store import KeyValueStore, load_snapshot

# endregion

logger = logging.getLogger("cbqr").getChild("writer")


class HistoryWriter:
    """
    Serialized writer for the stored snapshot.

    Attributes:
        store (KeyValueStore): Store holding the snapshot.
        limit (int): History capacity.
        queue (SerialQueue): Chain every update runs on. Share it with any other
            code that writes to the same store from this event loop.
        persister (QuotaAwarePersister): Writes the history with quota eviction.
    """

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = DEFAULT_HISTORY_LIMIT,
        queue: Optional[SerialQueue] = None,
        persister: Optional[QuotaAwarePersister] = None,
    ) -> None:
        self.store = store
        self.limit = limit
        self.queue = queue or SerialQueue()
        self.persister = persister or QuotaAwarePersister(store)

    # region Public API

    async def add(self, text: Any) -> Optional[PersistOutcome]:
        """Append text to the history. Returns None if the text is empty."""
        normalized = normalize(text)
        if not normalized:
            return None
        return await self.queue.enqueue(lambda: self._append(normalized))

    async def record_user_text(self, text: Any) -> PersistOutcome:
        """Store the panel text as the user's text. Empty text is recorded too."""
        normalized = normalize(text)
        return await self.queue.enqueue(lambda: self._write_user_text(normalized))

    async def commit(self, text: Any) -> Optional[PersistOutcome]:
        """Push text into the history and record it as the user's text."""
        normalized = normalize(text)
        if not normalized:
            return None
        return await self.queue.enqueue(lambda: self._commit(normalized))

    async def reconcile(self, new_clipboard: Any) -> PanelState:
        """Reconcile the stored snapshot with the clipboard content read now."""
        return await self.queue.enqueue(lambda: self._reconcile(new_clipboard))

    async def read(self) -> ReconciliationSnapshot:
        """Snapshot as stored once every update enqueued so far has run."""
        return await self.queue.enqueue(lambda: load_snapshot(self.store))

    async def handle_message(
        self, message: Mapping[str, Any]
    ) -> Optional[MessageResponse]:
        """
        Apply a message from a capture surface.

        Returns:
            Optional[MessageResponse]: The reply, or None if the message is not
                addressed to the writer.
        """
        if not isinstance(message, Mapping):
            return None
        if message.get("type") != MessageType.CLIPBOARD_ADD.value:
            return None

        try:
            request = ClipboardAddMessage.model_validate(message)
        except ValidationError as e:
            logger.debug("Rejected malformed message: %s", e)
            return MessageResponse(ok=False)

        try:
            outcome = await self.add(request.text)
        except Exception as e:
            logger.debug("Failed to store copy event: %s", e)
            return MessageResponse(ok=False)
        return MessageResponse(ok=outcome is None or outcome.ok)

    # endregion
    # region Serialized tasks

    async def _append(self, text: str) -> PersistOutcome:
        snapshot = await load_snapshot(self.store)
        updated = upsert(snapshot.history, text, self.limit)
        logger.debug("Appending history entry (%d entries)", len(updated))
        return await self.persister.persist(updated)

    async def _write_user_text(self, text: str) -> PersistOutcome:
        snapshot = await load_snapshot(self.store)
        return await self.persister.persist(
            snapshot.history, extra={CURRENT_TEXT_KEY: text}
        )

    async def _commit(self, text: str) -> PersistOutcome:
        snapshot = await load_snapshot(self.store)
        updated = upsert(snapshot.history, text, self.limit)
        return await self.persister.persist(updated, extra={CURRENT_TEXT_KEY: text})

    async def _reconcile(self, new_clipboard: Any) -> PanelState:
        snapshot = await load_snapshot(self.store)
        initial = reconcile_snapshot(snapshot, new_clipboard, self.limit)
        logger.debug(
            "Reconciled panel state (clipboard_changed=%s)", initial.clipboard_changed
        )
        outcome = await self.persister.persist(
            initial.new_history,
            extra={
                LAST_CLIPBOARD_KEY: initial.new_last_clipboard,
                CURRENT_TEXT_KEY: initial.new_user_text,
            },
        )
        return PanelState(initial=initial, outcome=outcome)

    # endregion


__all__ = ["HistoryWriter"]
