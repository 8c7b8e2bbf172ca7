# region Imports
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cbqr_core.constants import MessageType
from cbqr_core.text import normalize

# endregion
# region Pydantic Models


class ClipboardAddMessage(BaseModel):
    """
    Request from a capture surface to append text to the history.
    Attributes:
        type (Literal["CLIPBOARD_ADD"]): Message discriminator.
        text (str): Copied text, normalized on validation.
    """

    type: Literal["CLIPBOARD_ADD"] = Field(
        MessageType.CLIPBOARD_ADD.value, description="Message discriminator"
    )
    text: str = Field("", description="Copied text")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"type": "CLIPBOARD_ADD", "text": "item1"}]},
    )

    @field_validator("text", mode="before")
    def parse_text(cls, v: Any) -> str:
        return normalize(v)


class MessageResponse(BaseModel):
    """Reply sent back to the surface that posted a message."""

    ok: bool = Field(..., description="Whether the message was applied")


# endregion

__all__ = ["ClipboardAddMessage", "MessageResponse"]
