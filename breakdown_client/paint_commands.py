"""Paint range conversion and Qt text-cursor adapter for highlight backgrounds."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QTextCharFormat, QTextCursor

from breakdown_plugin.highlight_matcher import PaintRange
from breakdown_plugin.preferences import DEFAULT_HIGHLIGHT_ALPHA


def highlight_qcolor(color: str, alpha: float = DEFAULT_HIGHLIGHT_ALPHA) -> QColor:
    qcolor = QColor(color)
    if not qcolor.isValid():
        qcolor = QColor("gray")
    alpha = max(0.0, min(float(alpha), 1.0))
    qcolor.setAlpha(int(round(255 * alpha)))
    return qcolor


def utf16_offset(text: str, index: int) -> int:
    """Translate a Python string index into the UTF-16 position Qt documents use."""

    prefix = text[: max(0, index)]
    return len(prefix) + sum(1 for char in prefix if ord(char) > 0xFFFF)


@dataclass
class HighlightPaintCommand:
    start: int
    end: int
    color: QColor = field(default_factory=lambda: QColor("transparent"))

    def apply(self, cursor: Any) -> None:
        cursor.setPosition(self.start)
        cursor.setPosition(self.end, QTextCursor.MoveMode.KeepAnchor)
        fmt = QTextCharFormat()
        fmt.setBackground(QBrush(self.color))
        cursor.mergeCharFormat(fmt)


def build_paint_commands(
    text: str,
    ranges: Sequence[PaintRange],
    alpha: float = DEFAULT_HIGHLIGHT_ALPHA,
) -> List[HighlightPaintCommand]:
    return [
        HighlightPaintCommand(
            start=utf16_offset(text, paint.start),
            end=utf16_offset(text, paint.end),
            color=highlight_qcolor(paint.color, alpha),
        )
        for paint in ranges
    ]


def clear_highlights(cursor: Any, text: str) -> None:
    cursor.setPosition(0)
    cursor.setPosition(utf16_offset(text, len(text)), QTextCursor.MoveMode.KeepAnchor)
    fmt = QTextCharFormat()
    fmt.setBackground(QBrush(Qt.BrushStyle.NoBrush))
    cursor.mergeCharFormat(fmt)


def apply_highlights(
    cursor: Any,
    text: str,
    ranges: Sequence[PaintRange],
    alpha: float = DEFAULT_HIGHLIGHT_ALPHA,
) -> int:
    """Repaint backgrounds from scratch; returns the number of ranges painted."""

    clear_highlights(cursor, text)
    commands = build_paint_commands(text, ranges, alpha)
    for command in commands:
        command.apply(cursor)
    return len(commands)
