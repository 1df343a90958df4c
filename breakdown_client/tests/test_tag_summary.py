from __future__ import annotations

from datetime import datetime, timezone

from breakdown_client.badge_metrics import BadgeMetrics, MeasuredText
from breakdown_client.tag_summary import build_summary
from breakdown_plugin.elements import ElementCategory
from breakdown_plugin.highlight_store import HighlightRecord


def _record(record_id: str, text: str, category: ElementCategory) -> HighlightRecord:
    return HighlightRecord(
        id=record_id,
        scene_id="s1",
        category=category,
        text=text,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def _metrics() -> BadgeMetrics:
    # Badge width = text width + 26 with these padding constants and a 10pt icon.
    return BadgeMetrics(
        point_size=10.0,
        measurer=lambda text, point, family: MeasuredText(width=len(text) * 10, ascent=8, descent=2),
    )


def test_summary_is_empty_without_records() -> None:
    assert build_summary([], _metrics(), 200) == []


def test_sections_follow_category_order_and_wrap_badges() -> None:
    records = [
        _record("p1", "lamp", ElementCategory.PROPS),
        _record("c1", "ANNA", ElementCategory.CAST),
        _record("p2", "revolver", ElementCategory.PROPS),
        _record("p3", "key", ElementCategory.PROPS),
    ]

    sections = build_summary(records, _metrics(), 120, spacing=4)

    assert [section.category for section in sections] == [ElementCategory.CAST, ElementCategory.PROPS]
    cast, props = sections
    assert cast.title == "Cast"
    assert cast.icon == ElementCategory.CAST.icon
    assert cast.color == ElementCategory.CAST.color
    assert [(badge.record.id, badge.x, badge.y) for badge in props.badges] == [
        ("p1", 0.0, 0.0),
        ("p2", 0.0, 20.0),
        ("p3", 0.0, 40.0),
    ]
    assert props.badges[0].width == 66
    assert props.height == 56
