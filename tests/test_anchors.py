# tests/test_anchors.py
"""
Anchor placement along lines: spacing, tile bounds, label fit, max-angle windows,
continued-line offsets and the midpoint fallback.
"""

from __future__ import annotations

import math

import pytest
from shapely.geometry import LineString, Point

from tilelabel.core.anchors import (
    get_anchors,
    get_angle_window_size,
    get_center_anchor,
    get_shaped_label_length,
    get_start_offset,
    resample,
)
from tilelabel.core.types import Anchor, ShapedLabel

GLYPH_SIZE = 24.0
CORNER = [(10.0, 10.0), (110.0, 10.0), (110.0, 110.0)]


def _icon(width: float) -> ShapedLabel:
    return ShapedLabel(left=-width / 2, right=width / 2)


def _xy(anchors: list[Anchor]) -> list[tuple[float, float]]:
    return [(a.x, a.y) for a in anchors]


def test_angle_window_size_only_for_text() -> None:
    assert get_angle_window_size(_icon(10), GLYPH_SIZE, 2.0) == pytest.approx(3 / 5 * 24 * 2)
    assert get_angle_window_size(None, GLYPH_SIZE, 2.0) == 0.0


def test_shaped_label_length_takes_wider() -> None:
    assert get_shaped_label_length(_icon(10), _icon(30)) == 30
    assert get_shaped_label_length(_icon(10), None) == 10
    assert get_shaped_label_length(None, None) == 0


def test_continued_line_from_tile_edge() -> None:
    # First point on x == 0: continued, offset = spacing / 2
    anchors = get_anchors([(0, 0), (100, 0)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256)
    assert _xy(anchors) == [(25.0, 0.0), (75.0, 0.0)]
    assert all(a.angle == 0.0 and a.segment == 0 for a in anchors)


def test_free_line_offset_leaves_room_at_start() -> None:
    # offset = (0 / 2 + 2 * 24) % 50 = 48
    anchors = get_anchors([(10, 10), (110, 10)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256)
    assert _xy(anchors) == [(58.0, 10.0), (108.0, 10.0)]


def test_accepts_shapely_linestring_and_points() -> None:
    expected = [(58.0, 10.0), (108.0, 10.0)]
    from_line = get_anchors(LineString([(10, 10), (110, 10)]), 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256)
    from_points = get_anchors([Point(10, 10), Point(110, 10)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256)
    assert _xy(from_line) == expected
    assert _xy(from_points) == expected


@pytest.mark.parametrize("overscaling", [1.0, 1.5, 3.0, 4.0])
def test_continued_offset_matches_direct_computation(overscaling: float) -> None:
    spacing = 50.0
    expected = (spacing / 2 * overscaling) % spacing
    assert get_start_offset(spacing, 0.0, GLYPH_SIZE, 1.0, overscaling, True) == pytest.approx(expected)


def test_continued_offset_positions_first_anchor() -> None:
    # overscaling 1.5: offset 37.5, first anchor at x = 37.5 rounded up
    anchors = get_anchors([(0, 100), (200, 100)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.5, 256)
    assert anchors[0].x == 38.0
    assert anchors[0].y == 100.0


def test_free_offset_scales_with_overscaling() -> None:
    offset = get_start_offset(50.0, 10.0, GLYPH_SIZE, 1.0, 2.0, False)
    assert offset == pytest.approx(((5 + 48) * 2) % 50)


def test_anchors_stay_inside_tile() -> None:
    anchors = get_anchors([(10, 100), (400, 100)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256)
    assert [a.x for a in anchors] == [58.0, 108.0, 158.0, 208.0]
    for a in anchors:
        assert 0 <= a.x < 256 and 0 <= a.y < 256


def test_consecutive_anchors_respect_spacing() -> None:
    anchors = get_anchors([(10, 10), (1010, 10)], 100, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 4096)
    xs = [a.x for a in anchors]
    assert len(xs) >= 5
    for prev, nxt in zip(xs, xs[1:]):
        # Rounding moves each anchor by at most half a unit
        assert nxt - prev >= 100 - 1
        assert nxt - prev <= 200 + 1


def test_long_label_widens_spacing() -> None:
    # spacing 50 - label 45 < 12.5, so spacing becomes 45 + 12.5 = 57.5
    anchors = get_anchors([(10, 10), (510, 10)], 50, math.pi, None, _icon(45), GLYPH_SIZE, 1.0, 1.0, 4096)
    xs = [a.x for a in anchors]
    assert len(xs) >= 2
    for prev, nxt in zip(xs, xs[1:]):
        assert nxt - prev >= 57.5 - 1
    # Every label fits on the line
    for x in xs:
        assert x - 22.5 >= 10 - 0.5 and x + 22.5 <= 510 + 0.5


def test_short_line_falls_back_to_midpoint() -> None:
    anchors = get_anchors([(10, 10), (30, 10)], 50, math.pi, None, _icon(10), GLYPH_SIZE, 1.0, 1.0, 256)
    assert _xy(anchors) == [(20.0, 10.0)]


def test_line_shorter_than_label_yields_at_most_one() -> None:
    anchors = get_anchors([(10, 10), (30, 10)], 50, math.pi, None, _icon(30), GLYPH_SIZE, 1.0, 1.0, 256)
    assert len(anchors) <= 1


def test_continued_short_line_has_no_fallback() -> None:
    anchors = resample([(0, 10), (20, 10)], 100.0, 50.0, 0.0, math.pi, 10.0, True, False, 256)
    assert anchors == []


def test_fallback_not_repeated_when_placing_at_middle() -> None:
    anchors = resample([(10, 10), (30, 10)], 3.0, 50.0, 0.0, math.pi, 10.0, False, True, 256)
    assert anchors == []


def test_corner_rejects_anchors_spanning_turn() -> None:
    text = ShapedLabel(left=-10, right=10)
    anchors = get_anchors(CORNER, 50, 0.5, text, None, GLYPH_SIZE, 1.0, 1.0, 256)
    # Candidate at arc length 20.5 interpolates to 30.4999..., which rounds down
    assert _xy(anchors) == [(30.0, 10.0), (81.0, 10.0), (110.0, 30.0), (110.0, 81.0)]
    assert [a.segment for a in anchors] == [0, 0, 1, 1]
    assert anchors[0].angle == pytest.approx(0.0)
    assert anchors[2].angle == pytest.approx(math.pi / 2)
    # No label is centered within half a label length of the corner
    for a in anchors:
        assert math.hypot(a.x - 110, a.y - 10) >= 10


def test_small_max_angle_drops_only_candidate_at_turn() -> None:
    # Short L: the only fitting candidates have the corner inside the label
    line = [(10.0, 10.0), (30.0, 10.0), (30.0, 30.0)]
    text = ShapedLabel(left=-10, right=10)

    assert get_anchors(line, 50, 0.5, text, None, GLYPH_SIZE, 1.0, 1.0, 256) == []

    anchors = get_anchors(line, 50, math.pi, text, None, GLYPH_SIZE, 1.0, 1.0, 256)
    assert len(anchors) == 1
    assert anchors[0].x == pytest.approx(30.0, abs=1.0)
    assert anchors[0].y == pytest.approx(11.0, abs=1.0)
    assert anchors[0].segment == 1
    assert anchors[0].angle == pytest.approx(math.pi / 2)


def test_best_candidate_committed_by_max_spacing() -> None:
    # Angle check on, every candidate passes equally: the pending best is committed
    # only when the gap reaches 2 * spacing, then the next candidate is taken
    text = ShapedLabel(left=-10, right=10)
    anchors = get_anchors([(10, 10), (1010, 10)], 100, math.pi, text, None, GLYPH_SIZE, 1.0, 1.0, 4096)
    xs = [a.x for a in anchors]
    assert len(xs) == 10
    assert xs[0] == pytest.approx(68.0, abs=1.0)
    for prev, nxt in zip(xs, xs[1:]):
        assert nxt - prev >= 100 - 1
        assert nxt - prev <= 2 * 100 + 1


def test_degenerate_line_returns_empty() -> None:
    assert get_anchors([(5, 5)], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256) == []
    assert get_anchors([], 50, math.pi, None, None, GLYPH_SIZE, 1.0, 1.0, 256) == []


def test_center_anchor_on_straight_line() -> None:
    anchor = get_center_anchor([(10, 10), (50, 10), (110, 10)], 0.5, None, _icon(10), GLYPH_SIZE, 1.0)
    assert anchor is not None
    assert (anchor.x, anchor.y) == (60.0, 10.0)
    assert anchor.segment == 1


def test_center_anchor_at_corner_depends_on_max_angle() -> None:
    text = ShapedLabel(left=-10, right=10)
    assert get_center_anchor(CORNER, 0.5, text, None, GLYPH_SIZE, 1.0) is None
    anchor = get_center_anchor(CORNER, math.pi, text, None, GLYPH_SIZE, 1.0)
    assert anchor is not None
    assert (anchor.x, anchor.y, anchor.segment) == (110.0, 10.0, 1)
    assert anchor.angle == pytest.approx(math.pi / 2)


def test_center_anchor_without_text_skips_angle_check() -> None:
    anchor = get_center_anchor(CORNER, 0.0, None, _icon(20), GLYPH_SIZE, 1.0)
    assert anchor is not None


def test_center_anchor_degenerate_line() -> None:
    assert get_center_anchor([(1, 1)], 0.5, None, None, GLYPH_SIZE, 1.0) is None
    assert get_center_anchor([(1, 1), (1, 1)], 0.5, None, None, GLYPH_SIZE, 1.0) is None


def test_anchor_round_half_up() -> None:
    a = Anchor(2.5, -0.5, 0.0, 0).round()
    assert (a.x, a.y) == (3.0, 0.0)
