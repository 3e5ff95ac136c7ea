"""Durable UI preferences and theme flag.

Preferences are a flat key -> value map where every key has a default, so a
missing or corrupt stored record always loads as defaults. Writes go straight
through to the backing ``KeyValueStore``.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from versepoint.errors import FailureReason
from versepoint.models.catalog import model_names
from versepoint.models.schemas import OperationResult

logger = logging.getLogger(__name__)

SETTINGS_KEY = "verse-point-settings"
THEME_KEY = "verse-point-theme"

DARK = "dark"
LIGHT = "light"


class KeyValueStore(Protocol):
    """Narrow interface to durable local string storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local store, used when nothing should touch disk."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Key-value records kept together in one JSON file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def _read_all(self) -> dict[str, str]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preference file {self._path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring malformed preference file {self._path}")
            return {}
        return {k: v for k, v in raw.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        records = self._read_all()
        records[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)


class PreferenceOption(BaseModel):
    """Definition of one preference key.

    Attributes:
        key: Setting key.
        label: Display label.
        category: Settings panel section.
        default: Value used when nothing valid is stored.
        choices: Allowed values for select options; empty for toggles.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    category: str
    default: bool | str
    choices: tuple[str, ...] = ()

    @property
    def is_toggle(self) -> bool:
        return isinstance(self.default, bool)

    def accepts(self, value: object) -> bool:
        if self.is_toggle:
            return isinstance(value, bool)
        return isinstance(value, str) and value in self.choices


PREFERENCE_OPTIONS: tuple[PreferenceOption, ...] = (
    PreferenceOption(key="darkMode", label="Dark Mode", category="Appearance", default=True),
    PreferenceOption(
        key="language",
        label="Language",
        category="Appearance",
        default="English",
        choices=("English", "Spanish", "French", "German"),
    ),
    PreferenceOption(
        key="defaultModel",
        label="Default Model",
        category="AI Models",
        default="ChatGPT-5",
        choices=model_names(),
    ),
    PreferenceOption(
        key="showModelSuggestions",
        label="Show Model Suggestions",
        category="AI Models",
        default=True,
    ),
    PreferenceOption(
        key="emailNotifications",
        label="Email Notifications",
        category="Notifications",
        default=False,
    ),
    PreferenceOption(
        key="processCompleteNotifications",
        label="Processing Complete Alerts",
        category="Notifications",
        default=True,
    ),
    PreferenceOption(
        key="saveChatHistory", label="Save Chat History", category="Privacy", default=True
    ),
    PreferenceOption(
        key="shareUsageData", label="Share Usage Analytics", category="Privacy", default=False
    ),
)

_OPTIONS = {option.key: option for option in PREFERENCE_OPTIONS}


def default_preferences() -> dict[str, bool | str]:
    return {option.key: option.default for option in PREFERENCE_OPTIONS}


def _invalid(message: str) -> OperationResult:
    logger.warning(message)
    return OperationResult(
        success=False, reason=FailureReason.INVALID_PREFERENCE, error=message
    )


class PreferenceStore:
    """In-memory preferences with write-through persistence."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._values = default_preferences()
        self._customized: set[str] = set()
        self._theme = DARK

    @property
    def theme(self) -> str:
        return self._theme

    def get(self, key: str) -> bool | str | None:
        return self._values.get(key)

    def as_dict(self) -> dict[str, bool | str]:
        return dict(self._values)

    def options(self, key: str) -> PreferenceOption | None:
        return _OPTIONS.get(key)

    def is_customized(self, key: str) -> bool:
        """Whether the value came from storage or an explicit set, not a default."""
        return key in self._customized

    def load(self) -> dict[str, bool | str]:
        """Read persisted preferences merged over defaults.

        Returns:
            The loaded preference map.
        """
        values = default_preferences()
        accepted: set[str] = set()
        for key, value in self._read_settings().items():
            option = _OPTIONS.get(key)
            if option is None:
                continue
            if option.accepts(value):
                values[key] = value
                accepted.add(key)
            else:
                logger.warning(f"Ignoring stored preference {key}={value!r}")

        # A valid darkMode setting wins over the separate theme flag
        theme = self._storage.get(THEME_KEY)
        if "darkMode" not in accepted and theme in (DARK, LIGHT):
            values["darkMode"] = theme == DARK
        self._theme = DARK if values["darkMode"] else LIGHT

        self._values = values
        self._customized = accepted
        return self.as_dict()

    def _read_settings(self) -> dict[str, object]:
        raw = self._storage.get(SETTINGS_KEY)
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored preferences are corrupt, using defaults: {e}")
            return {}
        if not isinstance(parsed, dict):
            logger.warning("Stored preferences are not an object, using defaults")
            return {}
        return parsed

    def _save(self) -> None:
        self._storage.set(SETTINGS_KEY, json.dumps(self._values))

    def _save_theme(self) -> None:
        self._storage.set(THEME_KEY, self._theme)

    def set(self, key: str, value: bool | str) -> OperationResult:
        """Set one preference after validating it.

        Args:
            key: Preference key.
            value: New value; must match the option's type and choices.

        Returns:
            Success, or an ``invalid_preference`` failure with nothing changed.
        """
        option = _OPTIONS.get(key)
        if option is None:
            return _invalid(f"Unknown preference: {key}")
        if not option.accepts(value):
            return _invalid(f"Invalid value for {option.label}: {value!r}")

        self._values[key] = value
        self._customized.add(key)
        self._save()
        if key == "darkMode":
            self._theme = DARK if value else LIGHT
            self._save_theme()
        logger.debug(f"Preference {key} set to {value!r}")
        return OperationResult(success=True)

    def toggle(self, key: str) -> OperationResult:
        """Flip a boolean preference."""
        option = _OPTIONS.get(key)
        if option is None:
            return _invalid(f"Unknown preference: {key}")
        if not option.is_toggle:
            return _invalid(f"{option.label} is not a toggle")
        return self.set(key, not self._values[key])

    def set_theme(self, theme: str) -> OperationResult:
        if theme not in (DARK, LIGHT):
            return _invalid(f"Invalid theme: {theme!r}")
        return self.set("darkMode", theme == DARK)

    def toggle_theme(self) -> OperationResult:
        return self.set_theme(LIGHT if self._theme == DARK else DARK)
