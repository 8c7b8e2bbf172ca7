"""
cbqr_services.watcher
Background listener that polls the system clipboard and appends new content to
the history through the history writer.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from cbqr_core.errors import CbqrError
from cbqr_core.models import PersistOutcome
from cbqr_core.text import normalize

from .clipboard import ClipboardReader
from .writer import HistoryWriter

logger = logging.getLogger("cbqr").getChild("watcher")


class ClipboardWatcher:
    """
    Polls the clipboard every ``poll_interval`` seconds.

    Attributes:
        last_seen (str): Last clipboard content added to the history.
    """

    def __init__(
        self,
        clipboard: ClipboardReader,
        writer: HistoryWriter,
        poll_interval: float = 1.0,
        last_seen: str = "",
    ) -> None:
        self.clipboard = clipboard
        self.writer = writer
        self.poll_interval = poll_interval
        self.last_seen = normalize(last_seen)

    async def poll_once(self) -> Optional[PersistOutcome]:
        """
        Forward the clipboard content if it changed since the last poll.

        A failed store read or write is logged and the content is retried on
        the next poll; the watcher itself keeps running.
        """
        content = await self.clipboard.read_text()
        if not content or content == self.last_seen:
            return None
        logger.debug("Clipboard changed, adding to history")
        try:
            outcome = await self.writer.add(content)
        except CbqrError as e:
            logger.error("Failed to add clipboard content to history: %s", e)
            return None
        self.last_seen = content
        if outcome is not None and outcome.status_message:
            logger.warning(outcome.status_message)
        return outcome

    async def run(self, stop: asyncio.Event) -> None:
        """Poll until ``stop`` is set."""
        logger.info("Watching clipboard every %.2fs", self.poll_interval)
        while not stop.is_set():
            await self.poll_once()
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop.wait(), timeout=self.poll_interval)
        logger.info("Clipboard watcher stopped")


__all__ = ["ClipboardWatcher"]
