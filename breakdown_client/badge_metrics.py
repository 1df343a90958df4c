"""Badge measurement for the tagged-elements summary."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from PyQt6.QtGui import QFont, QFontMetrics

BADGE_PADDING_X = 6
BADGE_PADDING_Y = 3
BADGE_ICON_GAP = 4
_CACHE_MAX = 512


@dataclass(frozen=True)
class MeasuredText:
    width: int
    ascent: int
    descent: int


TextMeasurer = Callable[[str, float, str], MeasuredText]


def qt_text_measurer(text: str, point_size: float, font_family: str) -> MeasuredText:
    """Measure with QFontMetrics; requires a live QGuiApplication."""

    font = QFont(font_family)
    font.setPointSizeF(point_size)
    font.setWeight(QFont.Weight.Normal)
    metrics = QFontMetrics(font)
    return MeasuredText(
        width=int(metrics.horizontalAdvance(text)),
        ascent=int(metrics.ascent()),
        descent=int(metrics.descent()),
    )


class BadgeMetrics:
    """Computes ``(width, height)`` for a badge: label, gap, remove icon, padding."""

    def __init__(
        self,
        *,
        point_size: float = 10.0,
        font_family: str = "",
        measurer: Optional[TextMeasurer] = None,
    ) -> None:
        self._point_size = float(point_size)
        self._font_family = font_family
        self._measurer = measurer or qt_text_measurer
        self._cache: Dict[str, Tuple[int, int]] = {}

    def badge_size(self, text: str) -> Tuple[int, int]:
        label = " ".join(str(text).split())
        cached = self._cache.get(label)
        if cached is not None:
            return cached
        measured = self._measurer(label, self._point_size, self._font_family)
        icon = int(round(self._point_size))
        text_height = max(0, int(measured.ascent) + int(measured.descent))
        width = max(0, int(measured.width)) + BADGE_ICON_GAP + icon + 2 * BADGE_PADDING_X
        height = max(text_height, icon) + 2 * BADGE_PADDING_Y
        size = (width, height)
        self._cache[label] = size
        if len(self._cache) > _CACHE_MAX:
            self._cache.pop(next(iter(self._cache)))
        return size

    def badge_sizes(self, texts: Sequence[str]) -> List[Tuple[int, int]]:
        return [self.badge_size(text) for text in texts]
