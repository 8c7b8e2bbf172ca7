# region Docstring
"""
cbqr_core.models.snapshot
Persisted state carried between panel sessions.
Overview:
- ReconciliationSnapshot is the parsed form of the three store keys. Values in
    the store are untrusted (legacy shapes, hand edits, partial writes), so
    every read goes through ReconciliationSnapshot.from_store, which never
    raises and substitutes defaults for anything malformed.
Contents:
- ReconciliationSnapshot:
    - from_store(mapping) -> ReconciliationSnapshot
    - to_store() -> dict: the store layout (history, lastClipboard, currentText).
"""
# endregion
# region Imports
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cbqr_core.constants import CURRENT_TEXT_KEY, HISTORY_KEY, LAST_CLIPBOARD_KEY
from cbqr_core.history import coerce
from cbqr_core.text import normalize

# endregion
# region Pydantic Model


class ReconciliationSnapshot(BaseModel):
    """
    Last observed clipboard, last user text and the history queue.

    Attributes:
        last_clipboard (str): Clipboard content seen at the last reconciliation.
        last_user_text (str): Text last shown or edited in the panel.
        history (list[str]): History queue, oldest first.
    """

    last_clipboard: str = Field(
        "", description="Normalized clipboard content seen at the last reconciliation"
    )
    last_user_text: str = Field(
        "", description="Normalized text last edited or selected by the user"
    )
    history: list[str] = Field(
        default_factory=list, description="History queue, newest entry last"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "last_clipboard": "item1",
                    "last_user_text": "item 12",
                    "history": ["item1", "item 12"],
                }
            ]
        },
    )

    @field_validator("last_clipboard", "last_user_text", mode="before")
    def parse_text(cls, v: Any) -> str:
        return normalize(v)

    @field_validator("history", mode="before")
    def parse_history(cls, v: Any) -> list[str]:
        return coerce(v)

    @classmethod
    def from_store(cls, saved: Optional[Mapping[str, Any]]) -> "ReconciliationSnapshot":
        """Parse a raw store mapping; missing or malformed values become defaults."""
        if not isinstance(saved, Mapping):
            saved = {}
        return cls(
            last_clipboard=saved.get(LAST_CLIPBOARD_KEY),
            last_user_text=saved.get(CURRENT_TEXT_KEY),
            history=saved.get(HISTORY_KEY),
        )

    def to_store(self) -> dict[str, Any]:
        """Store layout of this snapshot."""
        return {
            HISTORY_KEY: list(self.history),
            LAST_CLIPBOARD_KEY: self.last_clipboard,
            CURRENT_TEXT_KEY: self.last_user_text,
        }


# endregion

__all__ = ["ReconciliationSnapshot"]
