from pathlib import Path

import pytest

from cbqr_core.config import (
    AppSettings,
    ClipboardWatcherSettings,
    HistorySettings,
    get_settings,
)
from cbqr_core.config.base import AppEnv
from cbqr_core.constants import CURRENT_TEXT_KEY, HISTORY_KEY, LAST_CLIPBOARD_KEY
from cbqr_core.models import ClipboardAddMessage, PanelState, PersistOutcome, ReconciliationSnapshot
from cbqr_core.models.state import InitialState

# region ReconciliationSnapshot


class TestReconciliationSnapshot:
    """Tests for parsing stored snapshot values."""

    def test_empty_store(self):
        snapshot = ReconciliationSnapshot.from_store({})
        assert snapshot.last_clipboard == ""
        assert snapshot.last_user_text == ""
        assert snapshot.history == []

    @pytest.mark.parametrize("saved", [None, "garbage", ["list"]])
    def test_non_mapping_store_value(self, saved):
        assert ReconciliationSnapshot.from_store(saved) == ReconciliationSnapshot()

    def test_malformed_values_are_sanitized(self):
        snapshot = ReconciliationSnapshot.from_store(
            {
                HISTORY_KEY: "item1",
                LAST_CLIPBOARD_KEY: 7,
                CURRENT_TEXT_KEY: "  draft ",
            }
        )
        assert snapshot.history == []
        assert snapshot.last_clipboard == ""
        assert snapshot.last_user_text == "draft"

    def test_round_trip_layout(self):
        saved = {HISTORY_KEY: ["a", "b"], LAST_CLIPBOARD_KEY: "b", CURRENT_TEXT_KEY: "a"}
        assert ReconciliationSnapshot.from_store(saved).to_store() == saved


# endregion
# region Result models


class TestResultModels:
    def test_clipboard_add_message_normalizes_text(self):
        message = ClipboardAddMessage.model_validate({"type": "CLIPBOARD_ADD", "text": " a "})
        assert message.text == "a"

    def test_panel_state_history_falls_back_to_computed_on_error(self):
        state = PanelState(
            initial=InitialState(display_text="b", new_history=["a", "b"]),
            outcome=PersistOutcome(history=["a"], error="denied"),
        )
        assert state.history == ["a", "b"]
        assert state.display_text == "b"

    def test_status_message_singular(self):
        assert PersistOutcome(history=["a"], evicted=1).status_message == (
            "Storage full: removed 1 oldest history entry"
        )


# endregion
# region Settings


class TestSettings:
    """Tests for pydantic-settings based configuration."""

    def test_defaults(self, clean_settings):
        settings = HistorySettings()
        assert settings.limit == 10
        assert settings.quota_bytes == 10_485_760
        assert settings.store_path.name == "cbqr.db"
        assert ClipboardWatcherSettings().poll_interval == 1.0

    def test_env_overrides(self, clean_settings, tmp_path):
        clean_settings.setenv("CBQR_HISTORY_LIMIT", "3")
        clean_settings.setenv("CBQR_STORE_PATH", str(tmp_path / "h.db"))
        clean_settings.setenv("CBQR_WATCHER_POLL_INTERVAL", "0.25")
        settings = get_settings(HistorySettings)
        assert settings.limit == 3
        assert settings.store_path == Path(tmp_path / "h.db")
        assert get_settings(ClipboardWatcherSettings).poll_interval == 0.25

    def test_env_beats_init_kwargs(self, clean_settings):
        clean_settings.setenv("CBQR_HISTORY_LIMIT", "3")
        clean_settings.setenv("CBQR_QUOTA_BYTES", "2048")
        settings = HistorySettings(limit=5, quota_bytes=64)
        assert settings.limit == 3
        assert settings.quota_bytes == 2048

    def test_negative_limit_is_clamped(self, clean_settings):
        clean_settings.setenv("CBQR_HISTORY_LIMIT", "-4")
        assert HistorySettings().limit == 0

    def test_get_settings_is_cached(self, clean_settings):
        assert get_settings(HistorySettings) is get_settings(HistorySettings)

    def test_logs_dir(self, clean_settings, tmp_path):
        clean_settings.setenv("CBQR_LOGS_DIR", str(tmp_path / "logs"))
        assert AppSettings().logs_dir == tmp_path / "logs"
        clean_settings.delenv("CBQR_LOGS_DIR")
        settings = AppSettings()
        assert settings.logs_dir == settings.app_root / "logs"

    @pytest.mark.parametrize("env", ["prod", "docker", "dev"])
    def test_environment_variable_wins(self, monkeypatch, env):
        monkeypatch.setenv("ENVIRONMENT", env)
        assert AppEnv.environment() == env

    def test_root_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CBQR_ROOT", str(tmp_path))
        assert AppEnv.app_root() == tmp_path.resolve()


# endregion
