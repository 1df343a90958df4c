"""QLayout that wraps tag badges into rows using the shared flow layout."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from PyQt6.QtCore import QPoint, QRect, QSize, Qt
from PyQt6.QtWidgets import QLayout, QLayoutItem, QWidget

from breakdown_plugin.tag_layout import DEFAULT_BADGE_SPACING, compute_flow_layout


def place_items(items: Sequence[Any], rect: QRect, spacing: float, *, apply: bool = True) -> int:
    """Position ``items`` inside ``rect`` and return the height they occupy."""

    sizes = []
    for item in items:
        hint = item.sizeHint()
        sizes.append((hint.width(), hint.height()))
    result = compute_flow_layout(sizes, rect.width(), spacing)
    if apply:
        for item, (x, y), (width, height) in zip(items, result.positions, sizes):
            origin = QPoint(rect.x() + int(round(x)), rect.y() + int(round(y)))
            item.setGeometry(QRect(origin, QSize(width, height)))
    return int(round(result.height))


class BadgeFlowLayout(QLayout):
    def __init__(self, parent: Optional[QWidget] = None, spacing: float = DEFAULT_BADGE_SPACING) -> None:
        super().__init__(parent)
        self._items: List[QLayoutItem] = []
        self._badge_spacing = float(spacing)

    def addItem(self, item: QLayoutItem) -> None:  # noqa: N802
        self._items.append(item)

    def count(self) -> int:
        return len(self._items)

    def itemAt(self, index: int) -> Optional[QLayoutItem]:  # noqa: N802
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def takeAt(self, index: int) -> Optional[QLayoutItem]:  # noqa: N802
        if 0 <= index < len(self._items):
            return self._items.pop(index)
        return None

    def expandingDirections(self) -> Qt.Orientation:  # noqa: N802
        return Qt.Orientation(0)

    def hasHeightForWidth(self) -> bool:  # noqa: N802
        return True

    def heightForWidth(self, width: int) -> int:  # noqa: N802
        margins = self.contentsMargins()
        inner = QRect(0, 0, max(0, width - margins.left() - margins.right()), 0)
        return place_items(self._items, inner, self._badge_spacing, apply=False) + margins.top() + margins.bottom()

    def setGeometry(self, rect: QRect) -> None:  # noqa: N802
        super().setGeometry(rect)
        inner = self.contentsRect()
        place_items(self._items, inner, self._badge_spacing)

    def sizeHint(self) -> QSize:  # noqa: N802
        return self.minimumSize()

    def minimumSize(self) -> QSize:  # noqa: N802
        size = QSize()
        for item in self._items:
            size = size.expandedTo(item.minimumSize())
        margins = self.contentsMargins()
        return size + QSize(margins.left() + margins.right(), margins.top() + margins.bottom())
