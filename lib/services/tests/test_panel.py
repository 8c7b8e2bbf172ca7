import asyncio

import pytest

from cbqr_core.constants import CURRENT_TEXT_KEY, HISTORY_KEY, LAST_CLIPBOARD_KEY
from cbqr_core.errors import StorageError
from cbqr_services import HistoryWriter, MemoryStore, PanelSession


@pytest.fixture
def panel(writer, clipboard, statuses) -> PanelSession:
    return PanelSession(writer, clipboard, on_status=lambda m, k: statuses.append((m, k)))


# region open


def test_open_cold_start(panel, statuses):
    state = asyncio.run(panel.open())
    assert state.display_text == ""
    assert panel.text == ""
    assert panel.entries == []
    assert statuses == []


def test_open_loads_new_clipboard(panel, clipboard, memory_store, statuses):
    clipboard.content = "item1"
    asyncio.run(panel.open())
    assert panel.text == "item1"
    assert panel.entries == ["item1"]
    assert ("Loaded from clipboard", "success") in statuses
    assert memory_store.snapshot()[LAST_CLIPBOARD_KEY] == "item1"


def test_edit_then_reopen_with_same_clipboard_shows_edit(panel, clipboard):
    clipboard.content = "item1"

    async def scenario():
        await panel.open()
        await panel.edit("item 12")
        return await panel.open()

    state = asyncio.run(scenario())
    assert state.display_text == "item 12"
    assert state.initial.clipboard_changed is False
    assert panel.entries == ["item1"]


def test_edit_is_kept_when_new_copy_arrives(panel, clipboard):
    clipboard.content = "item1"

    async def scenario():
        await panel.open()
        await panel.edit("item 12")
        clipboard.content = "item2"
        return await panel.open()

    state = asyncio.run(scenario())
    assert state.display_text == "item2"
    assert panel.entries == ["item1", "item 12", "item2"]


def test_open_reports_write_failure(clipboard, statuses):
    class ReadOnly(MemoryStore):
        async def set(self, items):
            raise StorageError("permission denied")

    panel = PanelSession(
        HistoryWriter(ReadOnly()), clipboard, on_status=lambda m, k: statuses.append((m, k))
    )
    clipboard.content = "item1"
    state = asyncio.run(panel.open())
    assert not state.outcome.ok
    assert panel.text == "item1"
    assert panel.entries == ["item1"]
    assert any(kind == "error" for _, kind in statuses)


def test_open_reports_unreadable_store(clipboard, statuses):
    class Unreadable(MemoryStore):
        async def get(self, keys):
            raise StorageError("corrupt")

    store = Unreadable()
    panel = PanelSession(
        HistoryWriter(store), clipboard, on_status=lambda m, k: statuses.append((m, k))
    )
    clipboard.content = "item1"
    state = asyncio.run(panel.open())
    assert state.display_text == "item1"
    assert state.outcome.error is not None
    assert store.writes == 0
    assert statuses[0][1] == "error"


# endregion
# region select / paste


def test_select_moves_entry_to_tail(panel, writer, memory_store):
    async def scenario():
        await writer.add("a")
        await writer.add("b")
        await writer.add("c")
        await panel.refresh()
        return await panel.select(0)

    outcome = asyncio.run(scenario())
    assert outcome.ok
    assert panel.text == "a"
    assert panel.entries == ["b", "c", "a"]
    assert memory_store.snapshot()[CURRENT_TEXT_KEY] == "a"


def test_select_out_of_range_is_ignored(panel, memory_store):
    assert asyncio.run(panel.select(3)) is None
    assert memory_store.writes == 0


def test_paste(panel, memory_store):
    outcome = asyncio.run(panel.paste("  pasted "))
    assert outcome.ok
    assert panel.text == "pasted"
    assert memory_store.snapshot()[HISTORY_KEY] == ["pasted"]


def test_paste_empty_is_noop(panel):
    assert asyncio.run(panel.paste("")) is None


def test_eviction_is_reported(clipboard, statuses):
    store = MemoryStore(quota_bytes=70)
    panel = PanelSession(
        HistoryWriter(store), clipboard, on_status=lambda m, k: statuses.append((m, k))
    )

    async def scenario():
        for text in ["aaaaaaaaaa", "bbbbbbbbbb", "cccccccccc"]:
            await panel.paste(text)

    asyncio.run(scenario())
    assert any(kind == "warning" and "removed" in message for message, kind in statuses)


# endregion
