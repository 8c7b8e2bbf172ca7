"""System clipboard access for cbqr."""

import asyncio
import logging
from typing import Protocol

import pyperclip

from cbqr_core.text import normalize

logger = logging.getLogger("cbqr").getChild("clipboard")


class ClipboardReader(Protocol):
    async def read_text(self) -> str: ...


class SystemClipboard:
    """
    Reads the system clipboard with pyperclip.

    A read that fails (no clipboard mechanism, no display, permission denied)
    is reported as an empty clipboard, since it happens routinely and only
    means "nothing new".
    """

    async def read_text(self) -> str:
        try:
            content = await asyncio.to_thread(pyperclip.paste)
        except (pyperclip.PyperclipException, OSError) as e:
            logger.debug("Could not read clipboard: %s", e)
            return ""
        return normalize(content)


__all__ = ["ClipboardReader", "SystemClipboard"]
