"""Least-squares slope of an ordered sequence.

The x coordinates are the implicit positions 0..n-1, so the slope is in
price units per step.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np


def compute_slope(values: Union[Sequence[float], np.ndarray]) -> float:
    """Calculate the linear regression slope of ``values``.

    slope = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean) ** 2)
    with x = 0, 1, ..., n-1 and x_mean = (n - 1) / 2.

    Args:
        values: Ordered y values (prices).

    Returns:
        The slope, or 0.0 for fewer than two values.
    """
    y = np.asarray(values, dtype=np.float64)
    n = len(y)
    if n <= 1:
        return 0.0

    x_diff = np.arange(n, dtype=np.float64) - (n - 1) / 2.0
    y_diff = y - y.mean()

    denominator = float(np.sum(x_diff * x_diff))
    if denominator == 0:
        return 0.0

    return float(np.sum(x_diff * y_diff)) / denominator


__all__ = ["compute_slope"]
