import pytest

from cbqr_core.models import ReconciliationSnapshot
from cbqr_core.reconcile import reconcile, reconcile_snapshot


class TestReconcile:
    """Tests for the initial-state decision procedure."""

    def test_new_clipboard_without_pending_edit(self):
        state = reconcile("item1", "item1", "item2", ["item1"])
        assert state.display_text == "item2"
        assert state.new_history == ["item1", "item2"]
        assert state.new_last_clipboard == "item2"
        assert state.new_user_text == "item2"
        assert state.clipboard_changed is True

    def test_edit_is_preserved_before_new_copy(self):
        state = reconcile("item1", "item 12", "item2", ["item1"])
        assert state.new_history == ["item1", "item 12", "item2"]
        assert state.display_text == "item2"
        assert state.clipboard_changed is True

    def test_unchanged_clipboard_shows_edit(self):
        state = reconcile("item1", "item 12", "item1", ["item1", "item 12"])
        assert state.display_text == "item 12"
        assert state.new_user_text == "item 12"
        assert state.new_last_clipboard == "item1"
        assert state.new_history == ["item1", "item 12"]
        assert state.clipboard_changed is False

    def test_cold_start(self):
        state = reconcile("", "", "", [])
        assert state.display_text == ""
        assert state.new_history == []
        assert state.new_user_text == ""
        assert state.clipboard_changed is False

    def test_unreadable_clipboard_shows_edit(self):
        state = reconcile("item1", "draft", "", ["item1"])
        assert state.display_text == "draft"
        assert state.new_history == ["item1"]
        assert state.clipboard_changed is False

    def test_falls_back_to_most_recent_history_entry(self):
        state = reconcile("item1", "   ", "item1", ["item0", "item1"])
        assert state.display_text == "item1"
        assert state.new_user_text == "item1"
        assert state.new_last_clipboard == "item1"
        assert state.clipboard_changed is False

    def test_inputs_are_normalized(self):
        state = reconcile(" item1 ", "item1\n", "  item1", ["item1"])
        assert state.clipboard_changed is False
        assert state.display_text == "item1"

    def test_edit_equal_to_old_clipboard_is_not_reinserted(self):
        state = reconcile("item1", "item1", "item2", ["item1", "item0"])
        assert state.new_history == ["item1", "item0", "item2"]

    def test_new_copy_respects_limit(self):
        state = reconcile("a", "edited", "b", ["x", "y", "a"], limit=3)
        assert state.new_history == ["a", "edited", "b"]

    @pytest.mark.parametrize(
        "history", [None, "item1", {"history": []}, [None, "", 3]]
    )
    def test_malformed_history_is_treated_as_empty(self, history):
        state = reconcile(None, None, None, history)
        assert state.display_text == ""
        assert state.new_history == []

    def test_never_raises_on_odd_inputs(self):
        state = reconcile(42, ["x"], {"a": 1}, ["ok"])
        assert state.display_text == "ok"


class TestReconcileSnapshot:
    def test_uses_parsed_snapshot(self):
        snapshot = ReconciliationSnapshot.from_store(
            {"clipboardHistory": ["item1"], "lastClipboard": "item1", "currentText": "item 12"}
        )
        state = reconcile_snapshot(snapshot, "item2")
        assert state.new_history == ["item1", "item 12", "item2"]
