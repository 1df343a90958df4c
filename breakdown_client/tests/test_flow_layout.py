from __future__ import annotations

from PyQt6.QtCore import QRect, QSize

from breakdown_client.flow_layout import place_items


class _StubItem:
    def __init__(self, width: int, height: int) -> None:
        self._hint = QSize(width, height)
        self.geometry = None

    def sizeHint(self) -> QSize:  # noqa: N802
        return self._hint

    def setGeometry(self, rect: QRect) -> None:  # noqa: N802
        self.geometry = rect


def test_place_items_offsets_by_rect_origin() -> None:
    items = [_StubItem(50, 20), _StubItem(60, 24), _StubItem(30, 10)]

    height = place_items(items, QRect(5, 7, 130, 200), spacing=10)

    assert [(item.geometry.x(), item.geometry.y()) for item in items] == [(5, 7), (65, 7), (5, 41)]
    assert [(item.geometry.width(), item.geometry.height()) for item in items] == [(50, 20), (60, 24), (30, 10)]
    assert height == 44


def test_measure_only_leaves_geometry_untouched() -> None:
    items = [_StubItem(80, 16), _StubItem(80, 16)]

    height = place_items(items, QRect(0, 0, 100, 0), spacing=4, apply=False)

    assert height == 36
    assert all(item.geometry is None for item in items)
