import asyncio

import pytest

from cbqr_core.history import upsert
from cbqr_core.serial import SerialQueue


def test_serializes_async_tasks_to_avoid_lost_updates():
    """Side effects land in enqueue order, not completion order."""

    async def scenario():
        history: list[str] = []
        queue = SerialQueue()

        def add(text, delay):
            async def task():
                nonlocal history
                snapshot = list(history)
                await asyncio.sleep(delay)
                history = upsert(snapshot, text, 10)

            return queue.enqueue(task)

        await asyncio.gather(add("item1", 0.03), add("item2", 0.01), add("item3", 0))
        return history

    assert asyncio.run(scenario()) == ["item1", "item2", "item3"]


def test_failed_task_does_not_block_the_chain():
    """A failing task raises to its own caller and the next task still runs."""

    async def scenario():
        queue = SerialQueue()
        ran = []

        async def boom():
            await asyncio.sleep(0.01)
            raise RuntimeError("boom")

        async def ok():
            ran.append("ok")
            return "done"

        failing = queue.enqueue(boom)
        following = queue.enqueue(ok)
        with pytest.raises(RuntimeError, match="boom"):
            await failing
        return await following, ran

    result, ran = asyncio.run(scenario())
    assert result == "done"
    assert ran == ["ok"]


def test_each_enqueue_resolves_to_its_own_result():
    async def scenario():
        queue = SerialQueue()

        async def value(v, delay):
            await asyncio.sleep(delay)
            return v

        first = queue.enqueue(lambda: value(1, 0.02))
        second = queue.enqueue(lambda: value(2, 0))
        return await second, await first

    assert asyncio.run(scenario()) == (2, 1)


def test_tasks_do_not_overlap():
    async def scenario():
        queue = SerialQueue()
        running = 0
        peak = 0

        async def task():
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.005)
            running -= 1

        await asyncio.gather(*(queue.enqueue(task) for _ in range(5)))
        return peak

    assert asyncio.run(scenario()) == 1


def test_drain_waits_for_pending_tasks():
    async def scenario():
        queue = SerialQueue()
        done = []

        async def task(n):
            await asyncio.sleep(0.01)
            done.append(n)

        queue.enqueue(lambda: task(1))
        queue.enqueue(lambda: task(2))
        assert queue.pending == 2
        await queue.drain()
        return done, queue.pending

    done, pending = asyncio.run(scenario())
    assert done == [1, 2]
    assert pending == 0


def test_cancelled_waiting_task_is_not_counted_as_pending():
    async def scenario():
        queue = SerialQueue()

        async def slow():
            await asyncio.sleep(0.02)

        queue.enqueue(slow)
        waiting = queue.enqueue(slow)
        await asyncio.sleep(0)
        waiting.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiting
        during = queue.pending
        await queue.drain()
        return during, queue.pending

    assert asyncio.run(scenario()) == (1, 0)
