"""Tagging preferences stored alongside the highlights in the settings blob."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from breakdown_plugin.highlight_store import HIGHLIGHTS_STORAGE_KEY
from breakdown_plugin.settings_blob import SettingsBlob
from breakdown_plugin.tag_layout import DEFAULT_BADGE_SPACING

PREFERENCES_KEY = "preferences"
DEFAULT_HIGHLIGHT_ALPHA = 0.3
DEFAULT_BADGE_FONT_POINT = 10.0
FONT_POINT_MIN = 6.0
FONT_POINT_MAX = 32.0

LOGGER = logging.getLogger("ScriptBreakdown.Preferences")


def _coerce_float(value: Any, default: float, *, minimum: Optional[float] = None, maximum: Optional[float] = None) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(numeric):
        return default
    if minimum is not None and numeric < minimum:
        numeric = minimum
    if maximum is not None and numeric > maximum:
        numeric = maximum
    return numeric


def _coerce_str(value: Any, default: str, *, transform: Optional[Callable[[str], str]] = None) -> str:
    if not isinstance(value, str):
        return default
    token = value.strip()
    if transform is not None:
        token = transform(token)
    return token or default


@dataclass
class TaggingPreferences:
    """JSON-backed preferences for badge layout and highlight painting."""

    settings_path: Path
    badge_spacing: float = DEFAULT_BADGE_SPACING
    highlight_alpha: float = DEFAULT_HIGHLIGHT_ALPHA
    badge_font_point: float = DEFAULT_BADGE_FONT_POINT
    storage_key: str = HIGHLIGHTS_STORAGE_KEY

    def __post_init__(self) -> None:
        self.settings_path = Path(self.settings_path)
        self._blob = SettingsBlob(self.settings_path)
        raw = self._blob.read(PREFERENCES_KEY)
        if isinstance(raw, Mapping):
            self._apply_raw_data(raw)
        elif raw is not None:
            LOGGER.debug("Ignoring non-object preferences section: %r", raw)

    @property
    def blob(self) -> SettingsBlob:
        return self._blob

    def _apply_raw_data(self, data: Mapping[str, Any]) -> None:
        self.badge_spacing = _coerce_float(data.get("badge_spacing"), self.badge_spacing, minimum=0.0)
        self.highlight_alpha = _coerce_float(
            data.get("highlight_alpha"),
            self.highlight_alpha,
            minimum=0.0,
            maximum=1.0,
        )
        self.badge_font_point = _coerce_float(
            data.get("badge_font_point"),
            self.badge_font_point,
            minimum=FONT_POINT_MIN,
            maximum=FONT_POINT_MAX,
        )
        self.storage_key = _coerce_str(data.get("storage_key"), self.storage_key)

    def _payload(self) -> Dict[str, Any]:
        return {
            "badge_spacing": float(self.badge_spacing),
            "highlight_alpha": float(self.highlight_alpha),
            "badge_font_point": float(self.badge_font_point),
            "storage_key": str(self.storage_key or HIGHLIGHTS_STORAGE_KEY),
        }

    def save(self) -> bool:
        return self._blob.write(PREFERENCES_KEY, self._payload())
