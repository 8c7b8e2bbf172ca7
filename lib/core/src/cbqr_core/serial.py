# region Docstring
"""
cbqr_core.serial
Single-consumer task chain for read-modify-write cycles.
Overview:
- Two triggers that both read the history, compute the next value and write it
    back can interleave at the store's await points, and the second write then
    silently drops the first update. Running each whole cycle as one task on a
    SerialQueue rules that out within an event loop.
- A SerialQueue holds a single reference: the tail of the chain. Each enqueued
    task waits for the previous tail to settle (success or failure alike)
    before it starts.
Contents:
- SerialQueue:
    - enqueue(task) -> asyncio.Task: schedule a zero-argument coroutine function.
    - drain(): wait for everything enqueued so far.
Design notes:
- One instance per execution context, shared by reference between the callers
    that write to the same store. There is no module-level instance.
- Tasks are never cancelled by the queue; a task that was enqueued always runs
    to completion or failure.
"""
# endregion
# region Imports
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

# endregion

T = TypeVar("T")

logger = logging.getLogger("cbqr").getChild("serial")


class SerialQueue:
    """
    Runs enqueued coroutine functions one at a time in submission order.

    Attributes:
        pending (int): Number of tasks enqueued but not yet settled.
    """

    def __init__(self) -> None:
        self._tail: Optional[asyncio.Task] = None
        self.pending = 0

    def enqueue(self, task: Callable[[], Awaitable[T]]) -> "asyncio.Task[T]":
        """
        Append a task to the chain.

        Must be called from a running event loop. The returned asyncio.Task
        resolves with this task's own result or raises its own exception; the
        outcome of earlier tasks never leaks into it.

        Args:
            task (Callable[[], Awaitable[T]]): Zero-argument coroutine function.
                It should read any shared state when it runs, not when enqueued.

        Returns:
            asyncio.Task[T]: The scheduled task.
        """
        previous = self._tail
        self.pending += 1

        async def run() -> T:
            try:
                if previous is not None and not previous.done():
                    # asyncio.wait never raises the awaited task's exception
                    await asyncio.wait([previous])
                return await task()
            finally:
                self.pending -= 1

        current = asyncio.ensure_future(run())
        current.add_done_callback(self._log_failure)
        self._tail = current
        return current

    async def drain(self) -> None:
        """Wait until every task enqueued so far has settled."""
        while self._tail is not None and not self._tail.done():
            await asyncio.wait([self._tail])

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug("Serialized task failed: %r", error)


__all__ = ["SerialQueue"]
