# tilelabel/core/geometry.py
"""
Point and polyline helpers: coordinate coercion, distance, heading,
linear interpolation, arc length.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from shapely.geometry import LineString


def as_xy(p: Any) -> tuple[float, float]:
    """Return (x, y) for a tuple/list, a shapely Point, or any object with .x and .y."""
    if hasattr(p, "x") and hasattr(p, "y"):
        return (float(p.x), float(p.y))
    return (float(p[0]), float(p[1]))


def line_coords(line: Any) -> list[tuple[float, float]]:
    """Polyline as a list of (x, y). Accepts a shapely LineString or a sequence of points."""
    if line is None:
        return []
    if isinstance(line, LineString):
        return [(float(x), float(y)) for x, y, *_ in line.coords]
    return [as_xy(p) for p in line]


def point_dist(p: Sequence[float], q: Sequence[float]) -> float:
    """Euclidean distance between two (x, y) points."""
    return math.hypot(q[0] - p[0], q[1] - p[1])


def angle_to(p: Sequence[float], q: Sequence[float]) -> float:
    """Heading (radians) of the vector from p to q."""
    return math.atan2(q[1] - p[1], q[0] - p[0])


def interpolate_number(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b at t in [0, 1]."""
    return a * (1 - t) + b * t


def line_length(coords: Sequence[Sequence[float]]) -> float:
    """Total arc length of a polyline; 0 for fewer than two points."""
    if coords is None or len(coords) < 2:
        return 0.0
    return float(LineString(coords).length)


def is_on_tile_edge(p: Sequence[float], tile_extent: float) -> bool:
    """True if p lies exactly on one of the four tile boundary coordinates."""
    x, y = p[0], p[1]
    return x == 0 or x == tile_extent or y == 0 or y == tile_extent
