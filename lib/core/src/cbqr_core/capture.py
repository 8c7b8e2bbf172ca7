"""
cbqr_core.capture
Best-effort extraction of the text that a copy event put on the clipboard.

Lookup order:
1. text/plain data attached to the event.
2. The selected range of the focused INPUT/TEXTAREA.
3. The selected range of the event target, when it is such a control.
4. The document selection.
"""

from typing import Optional

from cbqr_core.constants import TEXT_CONTROL_TAGS
from cbqr_core.models.capture import CopyEvent, DocumentState, TextControl
from cbqr_core.text import normalize


def _from_text_control(element: Optional[TextControl]) -> str:
    if element is None:
        return ""
    if (element.tag_name or "").upper() not in TEXT_CONTROL_TAGS:
        return ""

    value = element.value if isinstance(element.value, str) else ""
    start, end = element.selection_start, element.selection_end
    # bool is an int subclass but never a valid offset
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in (start, end)):
        return ""
    if start == end:
        return ""
    return value[start:end]


def extract_copied_text(
    event: Optional[CopyEvent], document: Optional[DocumentState] = None
) -> str:
    """
    Return the normalized copied text, or "" when it cannot be determined.

    Example:
        >>> extract_copied_text(CopyEvent(clipboard_data={"text/plain": " item3 "}))
        'item3'
    """
    event = event or CopyEvent()

    data = event.clipboard_data or {}
    text = normalize(data.get("text/plain"))
    if text:
        return text

    if document is None:
        return ""

    for element in (document.active_element, event.target):
        text = normalize(_from_text_control(element))
        if text:
            return text

    return normalize(document.selection)


__all__ = ["extract_copied_text"]
