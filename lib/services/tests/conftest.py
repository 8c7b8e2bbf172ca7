import pytest

from cbqr_services import HistoryWriter, MemoryStore, SqliteStore


class FakeClipboard:
    """Clipboard double returning a settable value."""

    def __init__(self, content: str = ""):
        self.content = content
        self.reads = 0

    async def read_text(self) -> str:
        self.reads += 1
        return self.content


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = SqliteStore(tmp_path / "cache" / "cbqr.db")
    yield store
    store.close()


@pytest.fixture
def writer(memory_store) -> HistoryWriter:
    return HistoryWriter(memory_store, limit=10)


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def statuses() -> list:
    """Collected (message, kind) status lines."""
    return []
