# tilelabel/core/curved_path.py
"""
Curved baselines for glyph placement: fit x(s) and y(s) natural cubic splines
over arc length s, then sample positions and tangent headings along them.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from tilelabel.core.config import CURVE_MIN_SEGMENT_LENGTH, CURVE_SAMPLE_STEP
from tilelabel.core.geometry import line_coords, point_dist
from tilelabel.core.spline import fit_natural_cubic_spline, interpolate_spline
from tilelabel.core.types import SplineModel


def arc_length_parameters(line: Any) -> tuple[list[float], list[tuple[float, float]]]:
    """
    Cumulative arc length at each kept vertex, and the kept vertices.
    Vertices closer than CURVE_MIN_SEGMENT_LENGTH to the previous kept one are
    dropped so the parameters are strictly increasing.
    """
    coords = line_coords(line)
    if not coords:
        return [], []
    s = [0.0]
    kept = [coords[0]]
    for p in coords[1:]:
        d = point_dist(kept[-1], p)
        if d <= CURVE_MIN_SEGMENT_LENGTH:
            continue
        s.append(s[-1] + d)
        kept.append(p)
    return s, kept


def fit_line_splines(line: Any) -> tuple[SplineModel, SplineModel] | None:
    """Splines (x(s), y(s)) through the line's vertices; None if under two distinct vertices."""
    s, kept = arc_length_parameters(line)
    if len(kept) < 2:
        return None
    xs = [p[0] for p in kept]
    ys = [p[1] for p in kept]
    return fit_natural_cubic_spline(s, xs), fit_natural_cubic_spline(s, ys)


def smooth_line(line: Any, step: float = CURVE_SAMPLE_STEP) -> list[tuple[float, float]]:
    """Resample the spline-smoothed line every `step` along arc length, end included."""
    fitted = fit_line_splines(line)
    if fitted is None or step <= 0:
        return line_coords(line)
    spline_x, spline_y = fitted
    length = float(spline_x.x[-1])
    n = max(1, int(math.ceil(length / step)))
    params = np.linspace(0.0, length, n + 1, endpoint=True)
    x, _ = interpolate_spline(spline_x, params)
    y, _ = interpolate_spline(spline_y, params)
    return [(float(x[i]), float(y[i])) for i in range(len(params))]


def place_glyphs(
    line: Any,
    center_distance: float,
    glyph_offsets: Sequence[float],
) -> list[tuple[float, float, float]]:
    """
    (x, y, angle) for each glyph center at center_distance + offset along the
    smoothed line. Angle is the tangent heading in radians. Offsets past the
    line ends extrapolate the end segments.
    """
    fitted = fit_line_splines(line)
    if fitted is None or not glyph_offsets:
        return []
    spline_x, spline_y = fitted
    # Segment lookup is per query, so offsets need not be sorted
    params = np.asarray(glyph_offsets, dtype=float) + center_distance
    x, dx = interpolate_spline(spline_x, params)
    y, dy = interpolate_spline(spline_y, params)
    return [
        (float(x[k]), float(y[k]), math.atan2(float(dy[k]), float(dx[k])))
        for k in range(len(params))
    ]
