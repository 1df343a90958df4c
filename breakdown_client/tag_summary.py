"""Model for the "Tagged Elements" badge summary of one scene."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from breakdown_plugin.elements import ElementCategory, group_by_category
from breakdown_plugin.highlight_store import HighlightRecord
from breakdown_plugin.tag_layout import DEFAULT_BADGE_SPACING, compute_flow_layout

from breakdown_client.badge_metrics import BadgeMetrics

SUMMARY_TITLE = "Tagged Elements"


@dataclass(frozen=True)
class BadgePlacement:
    record: HighlightRecord
    x: float
    y: float
    width: int
    height: int


@dataclass(frozen=True)
class SummarySection:
    category: ElementCategory
    badges: List[BadgePlacement] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0

    @property
    def title(self) -> str:
        return self.category.display_name

    @property
    def icon(self) -> str:
        return self.category.icon

    @property
    def color(self) -> str:
        return self.category.color


def build_summary(
    records: Iterable[HighlightRecord],
    metrics: BadgeMetrics,
    max_width: Optional[float],
    spacing: float = DEFAULT_BADGE_SPACING,
) -> List[SummarySection]:
    """Group a scene's records by category and lay out each group's badges.

    Returns an empty list when there is nothing tagged, which hides the summary.
    """

    sections: List[SummarySection] = []
    for category, grouped in group_by_category(records):
        sizes = metrics.badge_sizes([record.text for record in grouped])
        layout = compute_flow_layout(sizes, max_width, spacing)
        badges = [
            BadgePlacement(record=record, x=x, y=y, width=width, height=height)
            for record, (x, y), (width, height) in zip(grouped, layout.positions, sizes)
        ]
        sections.append(SummarySection(category=category, badges=badges, width=layout.width, height=layout.height))
    return sections
