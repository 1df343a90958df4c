from __future__ import annotations

import pytest

from breakdown_plugin.tag_layout import DEFAULT_BADGE_SPACING, compute_flow_layout, size_that_fits


def test_zero_badges_yield_zero_size() -> None:
    result = compute_flow_layout([], 100.0)
    assert result.positions == []
    assert (result.width, result.height) == (0.0, 0.0)


def test_wrapping_with_concrete_heights() -> None:
    sizes = [(50, 20), (60, 24), (40, 18)]

    result = compute_flow_layout(sizes, 100, spacing=10)

    # 60 + 60 > 100 wraps badge two; 70 + 40 > 100 wraps badge three as well.
    assert result.positions == [(0.0, 0.0), (0.0, 30.0), (0.0, 64.0)]
    assert result.height == 20 + 10 + 24 + 10 + 18
    assert result.width == 70.0


def test_badges_share_a_row_when_they_fit() -> None:
    result = compute_flow_layout([(30, 10), (30, 14), (30, 12)], 100, spacing=5)

    assert result.positions == [(0.0, 0.0), (35.0, 0.0), (70.0, 0.0)]
    assert result.height == 14
    assert result.width == 105.0


def test_oversized_badge_sits_alone_at_row_start() -> None:
    result = compute_flow_layout([(20, 10), (150, 12), (20, 10)], 100, spacing=4)

    assert result.positions == [(0.0, 0.0), (0.0, 14.0), (0.0, 30.0)]
    assert result.height == 40


def test_single_wide_badge_never_wraps() -> None:
    result = compute_flow_layout([(500, 16)], 100)
    assert result.positions == [(0.0, 0.0)]
    assert result.height == 16


def test_unbounded_width_keeps_one_row() -> None:
    result = compute_flow_layout([(100, 10)] * 5, None, spacing=DEFAULT_BADGE_SPACING)
    assert {y for _, y in result.positions} == {0.0}


def test_size_that_fits_prefers_proposal_width() -> None:
    sizes = [(50, 20), (60, 24)]
    assert size_that_fits(sizes, 100, spacing=10) == (100.0, 54.0)
    assert size_that_fits(sizes, None, spacing=10) == pytest.approx((130.0, 24.0))
