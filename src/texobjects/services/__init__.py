"""Service layer helpers (settings persistence)."""

from .settings import SettingsStore, TextObjectSettings

__all__ = ["SettingsStore", "TextObjectSettings"]
