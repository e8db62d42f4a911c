"""Settings dataclasses and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

__all__ = ["TextObjectSettings", "SettingsStore", "DEFAULT_SETTINGS_PATH"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".texobjects"
DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXOBJECTS_DEBUG_LOGGING": "debug_logging",
    "TEXOBJECTS_STRIP_COMMENTS": "strip_comments",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXOBJECTS_DEFAULT_COUNT": "default_count",
}
_PATH_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXOBJECTS_LOG_DIR": "log_dir",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True)
class TextObjectSettings:
    """User-configurable settings persisted between sessions."""

    key_overrides: dict[str, str] = field(default_factory=dict)
    strip_comments: bool = True
    default_count: int = 1
    debug_logging: bool = False
    log_dir: str | None = None

    def __post_init__(self) -> None:
        self.default_count = max(1, int(self.default_count))


class SettingsStore:
    """Persistence adapter for :class:`TextObjectSettings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> TextObjectSettings:
        """Load settings from disk, applying CLI/environment overrides when present."""

        payload = self._read_payload()
        settings = TextObjectSettings()
        if payload:
            data = _filter_fields(payload)
            try:
                settings = TextObjectSettings(**data)
            except (TypeError, ValueError) as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = TextObjectSettings()
            LOGGER.debug("Settings loaded from %s", self._path)

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        return self._apply_env_overrides(settings)

    def save(self, settings: TextObjectSettings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain a JSON object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: TextObjectSettings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> TextObjectSettings:
        allowed = {item.name for item in fields(TextObjectSettings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed:
                LOGGER.warning("Ignoring unknown %s override %r", source, key)
                continue
            filtered[key] = value
        if not filtered:
            return settings
        LOGGER.debug("Applying %s overrides: %s", source, sorted(filtered))
        return replace(settings, **filtered)

    def _apply_env_overrides(self, settings: TextObjectSettings) -> TextObjectSettings:
        updates: Dict[str, Any] = {}
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw is not None:
                updates[field_name] = raw.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw is None:
                continue
            try:
                updates[field_name] = int(raw.strip())
            except ValueError:
                LOGGER.warning("Ignoring non-integer %s=%r", env_name, raw)
        for env_name, field_name in _PATH_ENV_OVERRIDES.items():
            raw = os.environ.get(env_name, "").strip()
            if raw:
                updates[field_name] = raw
        if not updates:
            return settings
        return self._apply_overrides(settings, updates, source="environment")


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {item.name for item in fields(TextObjectSettings)}
    return {key: value for key, value in payload.items() if key in allowed}
