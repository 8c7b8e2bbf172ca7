# region Docstring
"""
cbqr_services.panel
Foreground panel session: what happens when the panel opens and when the user
edits, pastes or picks a history entry.
Overview:
- PanelSession keeps the text currently shown (``text``) and the history shown
    in the dropdown (``entries``). It never reads or writes the store itself;
    every change goes through the shared HistoryWriter.
- Status lines (clipboard loaded, history trimmed, save failed) are reported
    through an ``on_status(message, kind)`` callback; kind is "success",
    "warning", "error" or "".
"""
# endregion
# region Imports
import logging
from typing import Callable, Optional

from cbqr_core.errors import StorageError
from cbqr_core.models import PanelState, PersistOutcome, ReconciliationSnapshot
from cbqr_core.reconcile import reconcile_snapshot
from cbqr_core.text import normalize

from .clipboard import ClipboardReader
from .writer import HistoryWriter

# endregion

logger = logging.getLogger("cbqr").getChild("panel")

StatusCallback = Callable[[str, str], None]


def _log_status(message: str, kind: str = "") -> None:
    logger.info("Status [%s]: %s", kind or "info", message)


class PanelSession:
    """
    State of one open panel.

    Attributes:
        text (str): Text currently shown in the panel.
        entries (list[str]): History shown in the dropdown, oldest first.
    """

    def __init__(
        self,
        writer: HistoryWriter,
        clipboard: ClipboardReader,
        on_status: Optional[StatusCallback] = None,
    ) -> None:
        self.writer = writer
        self.clipboard = clipboard
        self.on_status = on_status or _log_status
        self.text = ""
        self.entries: list[str] = []

    async def open(self) -> PanelState:
        """Read the clipboard, reconcile it with the stored state and show the result."""
        new_clipboard = await self.clipboard.read_text()
        try:
            state = await self.writer.reconcile(new_clipboard)
        except StorageError as e:
            logger.error("Could not load stored history: %s", e)
            self.on_status(f"Could not load history: {e}", "error")
            # Show something sensible without writing over the unreadable store
            initial = reconcile_snapshot(
                ReconciliationSnapshot(), new_clipboard, self.writer.limit
            )
            state = PanelState(
                initial=initial,
                outcome=PersistOutcome(history=initial.new_history, error=str(e)),
            )
            self._show(state.display_text, state.history)
            return state

        self._show(state.display_text, state.history)
        if state.initial.clipboard_changed:
            self.on_status("Loaded from clipboard", "success")
        self._report(state.outcome)
        return state

    async def edit(self, text: str) -> PersistOutcome:
        """The user typed in the panel."""
        outcome = await self.writer.record_user_text(text)
        self.text = normalize(text)
        self._report(outcome)
        return outcome

    async def paste(self, text: str) -> Optional[PersistOutcome]:
        """The user pasted text into the panel."""
        return await self._commit(text)

    async def select(self, index: int) -> Optional[PersistOutcome]:
        """
        The user picked a history entry.

        Args:
            index (int): Position in ``entries`` (negative indexes count from
                the newest entry). Out-of-range indexes are ignored.
        """
        if not -len(self.entries) <= index < len(self.entries):
            return None
        return await self._commit(self.entries[index])

    async def refresh(self) -> list[str]:
        """Reload the dropdown from the store."""
        snapshot = await self.writer.read()
        self.entries = snapshot.history
        return self.entries

    async def _commit(self, text: str) -> Optional[PersistOutcome]:
        outcome = await self.writer.commit(text)
        if outcome is None:
            return None
        self._show(normalize(text), outcome.history)
        self._report(outcome)
        return outcome

    def _show(self, text: str, entries: list[str]) -> None:
        self.text = text
        self.entries = list(entries)

    def _report(self, outcome: PersistOutcome) -> None:
        message = outcome.status_message
        if message is None:
            return
        self.on_status(message, "error" if outcome.error else "warning")


__all__ = ["PanelSession", "StatusCallback"]
