# tilelabel/core/types.py
"""
Dataclasses for anchors, shaped label extents and fitted splines.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass
class Anchor:
    """A label placement point with heading (radians) and the index of its line segment."""
    x: float
    y: float
    angle: float
    segment: int

    def round(self) -> "Anchor":
        """Round coordinates to integer tile units in place (halves round up)."""
        self.x = float(math.floor(self.x + 0.5))
        self.y = float(math.floor(self.y + 0.5))
        return self

    @property
    def xy(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ShapedLabel:
    """Horizontal extents of a shaped text or icon, in glyph units."""
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class SplineModel:
    """
    Natural cubic spline: per segment i, a[i] + b[i]*t + c[i]*t**2 + d[i]*t**3
    with t = query - x[i]. a, b, c, d have one entry per segment; x holds all knots.
    """
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    d: np.ndarray
    x: np.ndarray

    @property
    def segment_count(self) -> int:
        return int(len(self.x) - 1)
