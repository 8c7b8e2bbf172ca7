"""
cbqr_services.capture
Copy capture hook: records copy events into the history even when the panel is
closed, by messaging the history writer.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from cbqr_core.capture import extract_copied_text
from cbqr_core.constants import MessageType
from cbqr_core.models import CopyEvent, DocumentState
from cbqr_core.serial import SerialQueue

logger = logging.getLogger("cbqr").getChild("capture")

SendMessage = Callable[[Mapping[str, Any]], Awaitable[Any]]


class CopyCapture:
    """
    Forwards copied text to the history writer.

    Messages are sent one at a time, in copy order, on the capture's own
    SerialQueue. A failed send is logged and dropped; it must never interfere
    with the user's copy.
    """

    def __init__(self, send: SendMessage, queue: Optional[SerialQueue] = None) -> None:
        self._send = send
        self.queue = queue or SerialQueue()
        self._scheduled: set[asyncio.Task] = set()

    async def on_copy(
        self, event: Optional[CopyEvent], document: Optional[DocumentState] = None
    ) -> bool:
        """Handle a copy event. Returns True if a message was sent."""
        try:
            text = extract_copied_text(event, document)
            if not text:
                return False
            return await self.queue.enqueue(lambda: self._send_text(text))
        except Exception as e:
            logger.debug("Failed to store copy event: %s", e)
            return False

    def schedule(
        self, event: Optional[CopyEvent], document: Optional[DocumentState] = None
    ) -> "asyncio.Task[bool]":
        """
        Fire-and-forget variant of on_copy for event callbacks.

        The capture keeps the task alive until it settles, so callers may drop
        the returned task.
        """
        task = asyncio.ensure_future(self.on_copy(event, document))
        self._scheduled.add(task)
        task.add_done_callback(self._scheduled.discard)
        return task

    async def _send_text(self, text: str) -> bool:
        try:
            await self._send({"type": MessageType.CLIPBOARD_ADD.value, "text": text})
        except Exception as e:
            logger.debug("Failed to send copy event: %s", e)
            return False
        return True


__all__ = ["CopyCapture", "SendMessage"]
