# tilelabel/core/spline.py
"""
Natural cubic spline: fit through ordered samples, evaluate value and first derivative.
Second derivative is zero at both end knots.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from tilelabel.core.error_codes import (
    KNOTS_NOT_INCREASING,
    LENGTH_MISMATCH,
    TOO_FEW_SAMPLES,
    user_message,
)
from tilelabel.core.types import SplineModel

logger = logging.getLogger(__name__)


def validate_samples(x: Sequence[float], y: Sequence[float]) -> tuple[bool, str]:
    """
    Check spline samples. Returns (ok, error_key); error_key is "" when ok.
    Requires len(x) == len(y) >= 2 and strictly increasing x.
    """
    if len(x) != len(y):
        return False, LENGTH_MISMATCH
    if len(x) < 2:
        return False, TOO_FEW_SAMPLES
    for i in range(len(x) - 1):
        if not x[i + 1] > x[i]:
            return False, KNOTS_NOT_INCREASING
    return True, ""


def fit_natural_cubic_spline(x: Sequence[float], y: Sequence[float]) -> SplineModel:
    """
    Fit a natural cubic spline through (x[i], y[i]).
    Tridiagonal system solved by forward elimination and back substitution, O(n).
    Raises ValueError for fewer than two samples, length mismatch or non-increasing x.
    """
    ok, error_key = validate_samples(x, y)
    if not ok:
        raise ValueError(user_message(error_key))

    xs = [float(v) for v in x]
    a = [float(v) for v in y]
    n = len(xs) - 1

    h = [xs[i + 1] - xs[i] for i in range(n)]
    alpha = [0.0]
    for i in range(1, n):
        alpha.append(3 / h[i] * (a[i + 1] - a[i]) - 3 / h[i - 1] * (a[i] - a[i - 1]))

    # Forward sweep
    mu = [0.0]
    z = [0.0]
    for i in range(1, n):
        l = 2 * (xs[i + 1] - xs[i - 1]) - h[i - 1] * mu[i - 1]
        mu.append(h[i] / l)
        z.append((alpha[i] - h[i - 1] * z[i - 1]) / l)

    # Back substitution; c[n] = 0 is the natural boundary
    b = [0.0] * n
    c = [0.0] * (n + 1)
    d = [0.0] * n
    for j in range(n - 1, -1, -1):
        c[j] = z[j] - mu[j] * c[j + 1]
        b[j] = (a[j + 1] - a[j]) / h[j] - h[j] * (c[j + 1] + 2 * c[j]) / 3
        d[j] = (c[j + 1] - c[j]) / (3 * h[j])

    logger.debug("Fitted natural cubic spline with %d segment(s)", n)
    return SplineModel(
        a=np.array(a[:n], dtype=float),
        b=np.array(b, dtype=float),
        c=np.array(c[:n], dtype=float),
        d=np.array(d, dtype=float),
        x=np.array(xs, dtype=float),
    )


def interpolate_spline(model: SplineModel, xs: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate the spline at ascending query points. Returns (y, dy).
    Each query uses the last segment whose start knot precedes it; queries outside
    the knot range extrapolate with the first or last segment polynomial.
    """
    q = np.asarray(xs, dtype=float)
    n = model.segment_count
    # Number of interior/end knots strictly below each query, as a monotonic cursor would find
    idx = np.searchsorted(model.x[1:], q, side="left")
    idx = np.clip(idx, 0, n - 1)
    t = q - model.x[idx]
    t2 = t * t
    a = model.a[idx]
    b = model.b[idx]
    c = model.c[idx]
    d = model.d[idx]
    y = a + b * t + c * t2 + d * t * t2
    dy = b + c * 2 * t + d * 3 * t2
    return y, dy
