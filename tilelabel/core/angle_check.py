# tilelabel/core/angle_check.py
"""
Max-angle check for a label centered on an anchor: the summed turning angle of
line corners inside a sliding window along the label must stay within max_angle.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Sequence

from tilelabel.core.geometry import angle_to, point_dist
from tilelabel.core.types import Anchor


def _corner_angle_delta(prev: Sequence[float], current: Sequence[float], nxt: Sequence[float]) -> float:
    """Absolute turn at current, restricted to [0, pi]."""
    delta = angle_to(prev, current) - angle_to(current, nxt)
    return abs(((delta + 3 * math.pi) % (2 * math.pi)) - math.pi)


def check_max_angle(
    line: Sequence[Sequence[float]],
    anchor: Anchor,
    label_length: float,
    window_size: float,
    max_angle: float,
) -> tuple[bool, float]:
    """
    Return (passed, max_angle_delta).
    Fails if the label runs past either end of the line or if the summed corner
    angles within window_size exceed max_angle anywhere along the label.
    max_angle_delta is the largest windowed sum seen. Zero-length labels always pass.
    """
    if label_length == 0:
        return True, 0.0

    p: Sequence[float] = anchor.xy
    index = anchor.segment + 1
    anchor_distance = 0.0

    # Walk back to the first segment the label appears on
    while anchor_distance > -label_length / 2:
        index -= 1
        if index < 0:
            return False, 0.0
        anchor_distance -= point_dist(line[index], p)
        p = line[index]

    anchor_distance += point_dist(line[index], line[index + 1])
    index += 1

    recent_corners: deque[tuple[float, float]] = deque()
    recent_angle_delta = 0.0
    max_angle_delta = 0.0

    # Walk forward over the label length, checking corners
    while anchor_distance < label_length / 2:
        if index + 1 >= len(line):
            return False, max_angle_delta
        prev = line[index - 1]
        current = line[index]
        nxt = line[index + 1]

        angle_delta = _corner_angle_delta(prev, current, nxt)
        recent_corners.append((anchor_distance, angle_delta))
        recent_angle_delta += angle_delta

        while anchor_distance - recent_corners[0][0] > window_size:
            recent_angle_delta -= recent_corners.popleft()[1]

        max_angle_delta = max(max_angle_delta, recent_angle_delta)
        if recent_angle_delta > max_angle:
            return False, max_angle_delta

        index += 1
        anchor_distance += point_dist(current, nxt)

    return True, max_angle_delta
