"""Process-wide JSON settings blob shared by the tagging components."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_FILE = "breakdown_settings.json"
SETTINGS_DIR_ENV_VAR = "SCRIPT_BREAKDOWN_SETTINGS_DIR"

LOGGER = logging.getLogger("ScriptBreakdown.Settings")


def resolve_settings_path(root: Optional[Path] = None) -> Path:
    """Return the settings file path, honouring the directory override env var."""

    override = os.environ.get(SETTINGS_DIR_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser() / SETTINGS_FILE
    base = root if root is not None else Path.home() / ".script_breakdown"
    return base / SETTINGS_FILE


class SettingsBlob:
    """Key/value document persisted as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> Dict[str, Any]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError, RecursionError) as exc:
            LOGGER.debug("Settings file %s is unreadable; treating as empty (%s)", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            return {}
        return raw

    def read(self, key: str, default: Any = None) -> Any:
        return self._read_document().get(key, default)

    def write(self, key: str, value: Any) -> bool:
        """Store ``value`` under ``key``; returns False when the write failed."""

        document = self._read_document()
        document[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(document, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self._path)
            return True
        except Exception as exc:
            LOGGER.debug("Failed to write settings key %s: %s", key, exc, exc_info=True)
            return False

