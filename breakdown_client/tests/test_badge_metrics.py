from __future__ import annotations

from breakdown_client.badge_metrics import (
    BADGE_ICON_GAP,
    BADGE_PADDING_X,
    BADGE_PADDING_Y,
    BadgeMetrics,
    MeasuredText,
)


def _fake_measurer(calls):
    def _measure(text: str, point_size: float, font_family: str) -> MeasuredText:
        calls.append((text, point_size, font_family))
        return MeasuredText(width=len(text) * 6, ascent=9, descent=3)

    return _measure


def test_badge_size_adds_icon_gap_and_padding() -> None:
    calls = []
    metrics = BadgeMetrics(point_size=10.0, font_family="TestFont", measurer=_fake_measurer(calls))

    width, height = metrics.badge_size("lamp")

    assert calls == [("lamp", 10.0, "TestFont")]
    assert width == 24 + BADGE_ICON_GAP + 10 + 2 * BADGE_PADDING_X
    assert height == 12 + 2 * BADGE_PADDING_Y


def test_icon_height_floors_short_text() -> None:
    metrics = BadgeMetrics(
        point_size=20.0,
        measurer=lambda text, point, family: MeasuredText(width=10, ascent=4, descent=1),
    )
    assert metrics.badge_size("x")[1] == 20 + 2 * BADGE_PADDING_Y


def test_labels_are_single_line_and_cached() -> None:
    calls = []
    metrics = BadgeMetrics(measurer=_fake_measurer(calls))

    first = metrics.badge_size("red\n  car")
    second = metrics.badge_size("red car")
    sizes = metrics.badge_sizes(["red car", "lamp"])

    assert first == second == sizes[0]
    assert [text for text, _, _ in calls] == ["red car", "lamp"]
