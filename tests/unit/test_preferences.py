"""Unit tests for PreferenceStore and its storage backends."""

import json
from pathlib import Path

from versepoint.errors import FailureReason
from versepoint.preferences.store import (
    SETTINGS_KEY,
    THEME_KEY,
    JsonFileStore,
    MemoryStore,
    PreferenceStore,
    default_preferences,
)

DEFAULTS = {
    "darkMode": True,
    "language": "English",
    "defaultModel": "ChatGPT-5",
    "showModelSuggestions": True,
    "emailNotifications": False,
    "processCompleteNotifications": True,
    "saveChatHistory": True,
    "shareUsageData": False,
}


class TestLoad:
    """Tests for loading preferences over defaults."""

    def test_defaults_match_settings_panel(self) -> None:
        """Every key has the documented default."""
        assert default_preferences() == DEFAULTS

    def test_empty_storage_yields_defaults(self) -> None:
        """Nothing stored loads exactly the defaults."""
        store = PreferenceStore(MemoryStore())

        assert store.load() == DEFAULTS
        assert store.theme == "dark"

    def test_corrupt_json_yields_defaults(self) -> None:
        """Unparseable stored settings fall back to defaults silently."""
        store = PreferenceStore(MemoryStore({SETTINGS_KEY: "{not json"}))

        assert store.load() == DEFAULTS

    def test_non_object_json_yields_defaults(self) -> None:
        """A stored JSON list is ignored."""
        store = PreferenceStore(MemoryStore({SETTINGS_KEY: "[1, 2, 3]"}))

        assert store.load() == DEFAULTS

    def test_valid_values_override_defaults(self) -> None:
        """Stored values of the right type replace defaults key by key."""
        stored = {"language": "French", "emailNotifications": True}
        store = PreferenceStore(MemoryStore({SETTINGS_KEY: json.dumps(stored)}))

        loaded = store.load()

        assert loaded["language"] == "French"
        assert loaded["emailNotifications"] is True
        assert loaded["saveChatHistory"] is True

    def test_wrong_types_and_unknown_keys_are_ignored(self) -> None:
        """Values of the wrong type, unlisted choices and unknown keys keep defaults."""
        stored = {
            "darkMode": "yes",
            "language": "Klingon",
            "shareUsageData": 1,
            "fontSize": 14,
        }
        store = PreferenceStore(MemoryStore({SETTINGS_KEY: json.dumps(stored)}))

        assert store.load() == DEFAULTS

    def test_theme_flag_applies_without_dark_mode_setting(self) -> None:
        """A stored light theme turns darkMode off when settings do not say otherwise."""
        store = PreferenceStore(MemoryStore({THEME_KEY: "light"}))

        loaded = store.load()

        assert loaded["darkMode"] is False
        assert store.theme == "light"

    def test_dark_mode_setting_wins_over_theme_flag(self) -> None:
        """Stored darkMode is authoritative over the theme flag."""
        storage = MemoryStore(
            {SETTINGS_KEY: json.dumps({"darkMode": True}), THEME_KEY: "light"}
        )
        store = PreferenceStore(storage)

        store.load()

        assert store.theme == "dark"

    def test_invalid_theme_flag_is_ignored(self) -> None:
        store = PreferenceStore(MemoryStore({THEME_KEY: "purple"}))

        assert store.load()["darkMode"] is True
        assert store.theme == "dark"


class TestSetAndToggle:
    """Tests for write-through mutation."""

    def test_set_persists_immediately(self) -> None:
        """A valid set is written to storage before returning."""
        storage = MemoryStore()
        store = PreferenceStore(storage)

        result = store.set("language", "German")

        assert result.success is True
        assert json.loads(storage.data[SETTINGS_KEY])["language"] == "German"

    def test_set_invalid_choice_is_noop(self) -> None:
        """An unlisted value for a select key changes nothing."""
        storage = MemoryStore()
        store = PreferenceStore(storage)

        result = store.set("language", "Latin")

        assert result.success is False
        assert result.reason == FailureReason.INVALID_PREFERENCE
        assert store.get("language") == "English"
        assert SETTINGS_KEY not in storage.data

    def test_set_wrong_type_for_toggle_is_noop(self) -> None:
        store = PreferenceStore(MemoryStore())

        result = store.set("darkMode", "false")

        assert result.success is False
        assert store.get("darkMode") is True

    def test_set_unknown_key_fails(self) -> None:
        store = PreferenceStore(MemoryStore())

        result = store.set("fontSize", "large")

        assert result.success is False
        assert "Unknown preference" in result.error

    def test_toggle_flips_boolean(self) -> None:
        """Toggling a boolean key flips and persists it."""
        storage = MemoryStore()
        store = PreferenceStore(storage)

        store.toggle("emailNotifications")

        assert store.get("emailNotifications") is True
        assert json.loads(storage.data[SETTINGS_KEY])["emailNotifications"] is True

    def test_toggle_select_key_fails(self) -> None:
        """Select keys cannot be toggled."""
        store = PreferenceStore(MemoryStore())

        result = store.toggle("language")

        assert result.success is False
        assert store.get("language") == "English"

    def test_toggle_dark_mode_writes_theme_flag(self) -> None:
        """darkMode and the theme flag stay in sync."""
        storage = MemoryStore()
        store = PreferenceStore(storage)

        store.toggle("darkMode")

        assert storage.data[THEME_KEY] == "light"
        assert store.theme == "light"

    def test_toggle_theme_round_trip(self) -> None:
        store = PreferenceStore(MemoryStore())

        store.toggle_theme()
        store.toggle_theme()

        assert store.theme == "dark"
        assert store.get("darkMode") is True

    def test_set_theme_rejects_unknown_theme(self) -> None:
        store = PreferenceStore(MemoryStore())

        assert store.set_theme("sepia").success is False

    def test_customized_tracks_stored_and_set_keys(self) -> None:
        """Only keys that came from storage or a set count as customized."""
        storage = MemoryStore({SETTINGS_KEY: json.dumps({"language": "Spanish"})})
        store = PreferenceStore(storage)
        store.load()

        assert store.is_customized("language") is True
        assert store.is_customized("defaultModel") is False

        store.set("defaultModel", "Claude")

        assert store.is_customized("defaultModel") is True


class TestJsonFileStore:
    """Tests for the JSON file backend."""

    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "missing.json")

        assert store.get(SETTINGS_KEY) is None

    def test_values_survive_restart(self, tmp_path: Path) -> None:
        """Preferences written by one store load in a new one."""
        path = tmp_path / "nested" / "prefs.json"
        first = PreferenceStore(JsonFileStore(path))
        first.set("language", "Spanish")
        first.toggle("darkMode")

        second = PreferenceStore(JsonFileStore(path))
        loaded = second.load()

        assert loaded["language"] == "Spanish"
        assert loaded["darkMode"] is False
        assert second.theme == "light"

    def test_garbage_file_loads_defaults(self, tmp_path: Path) -> None:
        """A corrupt preference file never breaks loading."""
        path = tmp_path / "prefs.json"
        path.write_text("\x00\x01 definitely not json", encoding="utf-8")

        store = PreferenceStore(JsonFileStore(path))

        assert store.load() == DEFAULTS
