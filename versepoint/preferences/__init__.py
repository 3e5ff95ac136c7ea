"""Durable UI preferences.

Stores the flat settings map and theme flag through a narrow key-value
storage interface so any local backend (JSON file, memory) can be used.
"""

from versepoint.preferences.store import (
    PREFERENCE_OPTIONS,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    PreferenceOption,
    PreferenceStore,
    default_preferences,
)

__all__ = [
    "PREFERENCE_OPTIONS",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PreferenceOption",
    "PreferenceStore",
    "default_preferences",
]
