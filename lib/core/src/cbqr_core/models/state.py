# region Imports
from typing import Optional

from pydantic import BaseModel, Field

# endregion
# region Pydantic Models


class InitialState(BaseModel):
    """
    What the panel shows and what gets written back after a reconciliation.

    Attributes:
        display_text (str): Text to show in the panel.
        new_history (list[str]): History to persist.
        new_last_clipboard (str): Clipboard snapshot to persist.
        new_user_text (str): User text to persist.
        clipboard_changed (bool): True if the clipboard held new content.
    """

    display_text: str = Field("", description="Text to show in the panel")
    new_history: list[str] = Field(
        default_factory=list, description="History to persist, newest entry last"
    )
    new_last_clipboard: str = Field("", description="Clipboard snapshot to persist")
    new_user_text: str = Field("", description="User text to persist")
    clipboard_changed: bool = Field(
        False, description="Whether the clipboard held content not seen before"
    )


class PersistOutcome(BaseModel):
    """
    Result of a quota-aware history write.

    Attributes:
        history (list[str]): The history that is in the store after the call
            (on failure, the last value known to be stored).
        evicted (int): Oldest entries dropped to fit the store quota.
        error (Optional[str]): Failure description when the write did not land.
    """

    history: list[str] = Field(default_factory=list)
    evicted: int = Field(0, ge=0)
    error: Optional[str] = Field(None)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_message(self) -> Optional[str]:
        """User-facing status line, or None when there is nothing to report."""
        if self.error is not None:
            return f"Could not save history: {self.error}"
        if self.evicted:
            noun = "entry" if self.evicted == 1 else "entries"
            return f"Storage full: removed {self.evicted} oldest history {noun}"
        return None


class PanelState(BaseModel):
    """Reconciliation result paired with the outcome of writing it back."""

    initial: InitialState
    outcome: PersistOutcome

    @property
    def display_text(self) -> str:
        return self.initial.display_text

    @property
    def history(self) -> list[str]:
        """History to show: what was stored, or the computed one if the write failed."""
        if self.outcome.ok:
            return self.outcome.history
        return self.initial.new_history


# endregion

__all__ = ["InitialState", "PanelState", "PersistOutcome"]
