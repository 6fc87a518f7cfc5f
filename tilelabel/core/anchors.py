# tilelabel/core/anchors.py
"""
Anchor placement along a line feature: resample the line at a fixed step, keep
labels at least `spacing` apart, inside the tile, fully on the line, and within
the max-angle constraint. Best candidate per spacing window wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from tilelabel.core.angle_check import check_max_angle
from tilelabel.core.config import (
    ANGLE_WINDOW_GLYPH_RATIO,
    FIXED_EXTRA_OFFSET_GLYPHS,
    MAX_SPACING_FACTOR,
    MIN_LABEL_GAP_RATIO,
    SPACING_EPSILON,
    SUBSPACING_RATIO,
)
from tilelabel.core.geometry import (
    angle_to,
    interpolate_number,
    is_on_tile_edge,
    line_coords,
    line_length,
    point_dist,
)
from tilelabel.core.types import Anchor, ShapedLabel

logger = logging.getLogger(__name__)


@dataclass
class _PendingAnchor:
    """Best not-yet-placed candidate since the last placed anchor."""
    anchor: Anchor | None = None
    angle_delta: float = float("inf")
    distance: float = 0.0

    def offer(self, anchor: Anchor, angle_delta: float, distance: float) -> None:
        # Strict improvement only: earlier candidates win ties
        if angle_delta < self.angle_delta:
            self.anchor = anchor
            self.angle_delta = angle_delta
            self.distance = distance

    def clear(self) -> None:
        self.anchor = None
        self.angle_delta = float("inf")
        self.distance = 0.0


def get_angle_window_size(shaped_text: ShapedLabel | None, glyph_size: float, box_scale: float) -> float:
    """Window for the max-angle check; 0 (no check) for icon-only labels."""
    return ANGLE_WINDOW_GLYPH_RATIO * glyph_size * box_scale if shaped_text else 0.0


def get_shaped_label_length(
    shaped_text: ShapedLabel | None = None,
    shaped_icon: ShapedLabel | None = None,
) -> float:
    """Width of the wider of text and icon, in glyph units; 0 when both are absent."""
    return max(
        shaped_text.right - shaped_text.left if shaped_text else 0.0,
        shaped_icon.right - shaped_icon.left if shaped_icon else 0.0,
    )


def get_center_anchor(
    line: Any,
    max_angle: float,
    shaped_text: ShapedLabel | None,
    shaped_icon: ShapedLabel | None,
    glyph_size: float,
    box_scale: float,
) -> Anchor | None:
    """
    Single anchor at the line's midpoint by arc length, or None if it fails the
    max-angle check. No retry.
    """
    coords = line_coords(line)
    if len(coords) < 2:
        logger.debug("get_center_anchor: line has fewer than 2 points")
        return None

    angle_window_size = get_angle_window_size(shaped_text, glyph_size, box_scale)
    label_length = get_shaped_label_length(shaped_text, shaped_icon) * box_scale

    prev_distance = 0.0
    center_distance = line_length(coords) / 2

    for i in range(len(coords) - 1):
        a = coords[i]
        b = coords[i + 1]
        segment_distance = point_dist(a, b)

        if prev_distance + segment_distance > center_distance:
            t = (center_distance - prev_distance) / segment_distance
            x = interpolate_number(a[0], b[0], t)
            y = interpolate_number(a[1], b[1], t)
            anchor = Anchor(x, y, angle_to(a, b), i)
            anchor.round()
            if not angle_window_size:
                return anchor
            passed, _ = check_max_angle(coords, anchor, label_length, angle_window_size, max_angle)
            return anchor if passed else None

        prev_distance += segment_distance

    return None


def get_anchors(
    line: Any,
    spacing: float,
    max_angle: float,
    shaped_text: ShapedLabel | None,
    shaped_icon: ShapedLabel | None,
    glyph_size: float,
    box_scale: float,
    overscaling: float,
    tile_extent: float,
) -> list[Anchor]:
    """
    Anchors for repeated labels along a line, in line order.
    Spacing is widened for long labels so label edges stay spacing/4 apart.
    """
    coords = line_coords(line)
    if len(coords) < 2:
        logger.debug("get_anchors: line has fewer than 2 points")
        return []

    angle_window_size = get_angle_window_size(shaped_text, glyph_size, box_scale)
    shaped_label_length = get_shaped_label_length(shaped_text, shaped_icon)
    label_length = shaped_label_length * box_scale

    # Line enters from a neighbouring tile
    is_line_continued = is_on_tile_edge(coords[0], tile_extent)

    if spacing - label_length < spacing * MIN_LABEL_GAP_RATIO:
        spacing = label_length + spacing * MIN_LABEL_GAP_RATIO

    offset = get_start_offset(
        spacing,
        shaped_label_length,
        glyph_size,
        box_scale,
        overscaling,
        is_line_continued,
    )

    return resample(
        coords,
        offset,
        spacing,
        angle_window_size,
        max_angle,
        label_length,
        is_line_continued,
        False,
        tile_extent,
    )


def get_start_offset(
    spacing: float,
    shaped_label_length: float,
    glyph_size: float,
    box_scale: float,
    overscaling: float,
    is_line_continued: bool,
) -> float:
    """
    Distance of the first sample from the line start.
    Free-standing lines leave room for half the label plus a fixed margin;
    continued lines align with anchors of the less overscaled parent tile.
    """
    if not is_line_continued:
        fixed_extra_offset = glyph_size * FIXED_EXTRA_OFFSET_GLYPHS
        return ((shaped_label_length / 2 + fixed_extra_offset) * box_scale * overscaling) % spacing
    return (spacing / 2 * overscaling) % spacing


def resample(
    line: Sequence[Sequence[float]],
    offset: float,
    spacing: float,
    angle_window_size: float,
    max_angle: float,
    label_length: float,
    is_line_continued: bool,
    place_at_middle: bool,
    tile_extent: float,
) -> list[Anchor]:
    """
    Single forward pass sampling every spacing/4 along the line.
    If nothing was placed on a free-standing line, retries once at its midpoint.
    """
    anchors, distance = _resample_pass(
        line, offset, spacing, angle_window_size, max_angle, label_length, tile_extent
    )

    if not place_at_middle and not anchors and not is_line_continued:
        # Mostly short lines in overscaled tiles, where the aligned offset skips the only fit
        logger.debug("resample: no anchors at offset %.3f, retrying at midpoint %.3f", offset, distance / 2)
        anchors, _ = _resample_pass(
            line, distance / 2, spacing, angle_window_size, max_angle, label_length, tile_extent
        )

    if not anchors:
        logger.debug("resample: no anchors for line of length %.3f", distance)
    return anchors


def _resample_pass(
    line: Sequence[Sequence[float]],
    offset: float,
    spacing: float,
    angle_window_size: float,
    max_angle: float,
    label_length: float,
    tile_extent: float,
) -> tuple[list[Anchor], float]:
    """One sampling pass. Returns (anchors, total distance walked)."""
    half_label_length = label_length / 2
    total_length = line_length(line)

    distance = 0.0
    subspacing = spacing * SUBSPACING_RATIO
    min_spacing = spacing - SPACING_EPSILON
    max_spacing = MAX_SPACING_FACTOR * spacing
    marked_distance = offset - subspacing

    anchors: list[Anchor] = []
    pending = _PendingAnchor()
    last_anchor_distance = offset - spacing

    for i in range(len(line) - 1):
        a = line[i]
        b = line[i + 1]
        segment_distance = point_dist(a, b)
        angle = angle_to(a, b)

        while marked_distance + subspacing < distance + segment_distance:
            marked_distance += subspacing

            # Do not defer the best candidate past max spacing
            if marked_distance - last_anchor_distance >= max_spacing and pending.anchor is not None:
                anchors.append(pending.anchor)
                last_anchor_distance = pending.distance
                pending.clear()

            if marked_distance - last_anchor_distance < min_spacing:
                continue

            t = (marked_distance - distance) / segment_distance
            x = interpolate_number(a[0], b[0], t)
            y = interpolate_number(a[1], b[1], t)

            # Inside the tile, and the label fits before both line ends
            if (
                0 <= x < tile_extent
                and 0 <= y < tile_extent
                and marked_distance - half_label_length >= 0
                and marked_distance + half_label_length <= total_length
            ):
                anchor = Anchor(x, y, angle, i)
                anchor.round()

                if not angle_window_size:
                    anchors.append(anchor)
                    last_anchor_distance = marked_distance
                else:
                    passed, max_angle_delta = check_max_angle(
                        line, anchor, label_length, angle_window_size, max_angle
                    )
                    if passed:
                        pending.offer(anchor, max_angle_delta, marked_distance)

        distance += segment_distance

    if pending.anchor is not None:
        anchors.append(pending.anchor)

    return anchors, distance
