# region Imports
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# endregion
# region Pydantic Models


class TextControl(BaseModel):
    """
    An editable element that may hold the copied selection.
    Attributes:
        tag_name (str): Element tag, e.g. "INPUT" or "TEXTAREA".
        value (Any): Current element value; only strings are used.
        selection_start (Any): Selection start offset, if known.
        selection_end (Any): Selection end offset, if known.
    """

    tag_name: str = Field("", description="Element tag name")
    value: Any = Field(None, description="Element value")
    selection_start: Any = Field(None, description="Selection start offset")
    selection_end: Any = Field(None, description="Selection end offset")


class CopyEvent(BaseModel):
    """A copy notification from a page or application."""

    clipboard_data: Optional[Mapping[str, Any]] = Field(
        None, description="Data attached to the event, keyed by MIME type"
    )
    target: Optional[TextControl] = Field(
        None, description="Element the event was dispatched to"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"clipboard_data": {"text/plain": " item3 "}},
                {
                    "target": {
                        "tag_name": "TEXTAREA",
                        "value": "item1 item2",
                        "selection_start": 0,
                        "selection_end": 5,
                    }
                },
            ]
        },
    )


class DocumentState(BaseModel):
    """Focus and selection of the document at the time of the copy."""

    active_element: Optional[TextControl] = Field(
        None, description="Element that had focus"
    )
    selection: Any = Field(None, description="Document selection as text")


# endregion

__all__ = ["CopyEvent", "DocumentState", "TextControl"]
