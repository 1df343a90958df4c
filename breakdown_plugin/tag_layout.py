"""Greedy row-packing for tag badges of varying width."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

DEFAULT_BADGE_SPACING = 4.0


@dataclass(frozen=True)
class FlowLayoutResult:
    positions: List[Tuple[float, float]] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0


def compute_flow_layout(
    sizes: Sequence[Tuple[float, float]],
    max_width: Optional[float],
    spacing: float = DEFAULT_BADGE_SPACING,
) -> FlowLayoutResult:
    """Place badges left to right, wrapping when the next one would overflow ``max_width``.

    A row is never wrapped while empty, so a badge wider than ``max_width`` lands
    alone at x == 0. ``max_width`` of None means unbounded. The reported width is
    the furthest cursor x seen, which includes the trailing spacing of that row.
    """

    limit = math.inf if max_width is None else float(max_width)
    positions: List[Tuple[float, float]] = []
    x = 0.0
    y = 0.0
    row_height = 0.0
    max_x = 0.0
    for width, height in sizes:
        if x > 0 and x + width > limit:
            x = 0.0
            y += row_height + spacing
            row_height = 0.0
        positions.append((x, y))
        row_height = max(row_height, float(height))
        x += float(width) + spacing
        max_x = max(max_x, x)
    return FlowLayoutResult(positions=positions, width=max_x, height=y + row_height)


def size_that_fits(
    sizes: Sequence[Tuple[float, float]],
    proposal_width: Optional[float],
    spacing: float = DEFAULT_BADGE_SPACING,
) -> Tuple[float, float]:
    result = compute_flow_layout(sizes, proposal_width, spacing)
    width = proposal_width if proposal_width is not None else result.width
    return float(width), result.height
