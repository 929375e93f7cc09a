"""
Scale-free window features.

Computes four descriptors from a fixed-size price window. All of them are
ratios, so the same thresholds work for items priced at 10 or at 10 million:

  chop       = |p[n-1] - p[0]| / (sum |p[i] - p[i-1]| + eps)
  range_norm = (max - min) / (median + eps)
  slope_norm = |slope| / (median + eps)
  cross_rate = sign changes of (p - mean) / n

Low chop, range_norm and slope_norm together with a high cross_rate describe
a price bouncing inside a tight band.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from modules.config import REGIME_EPSILON
from modules.range_regime.core.linear_regression import compute_slope
from modules.range_regime.models import WindowFeatures

PriceArray = Union[Sequence[float], np.ndarray]


def compute_median(values: PriceArray) -> float:
    """
    Compute the median of a sequence of numbers.

    Even-length input averages the two middle values.

    Args:
        values: Numbers in any order.

    Returns:
        The median, or 0.0 for empty input.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return 0.0
    return float(np.median(arr))


def compute_chop(prices: np.ndarray) -> float:
    """Net displacement over total path length (0 = oscillating, 1 = monotonic)."""
    net_movement = abs(prices[-1] - prices[0])
    total_movement = float(np.sum(np.abs(np.diff(prices))))
    return float(net_movement / (total_movement + REGIME_EPSILON))


def compute_cross_rate(prices: np.ndarray) -> float:
    """Fraction of consecutive pairs on opposite sides of the window mean."""
    deviations = prices - prices.mean()
    crossings = int(np.count_nonzero(deviations[:-1] * deviations[1:] < 0))
    return crossings / len(prices)


def compute_window_features(prices: PriceArray) -> WindowFeatures:
    """
    Compute scale-free features from a price window.

    Args:
        prices: Chronologically ordered prices of one window.

    Returns:
        WindowFeatures; all zeros for fewer than two prices.
    """
    arr = np.asarray(prices, dtype=np.float64)
    if arr.size < 2:
        return WindowFeatures()

    median = compute_median(arr)
    slope = compute_slope(arr)

    return WindowFeatures(
        chop=compute_chop(arr),
        range_norm=float((arr.max() - arr.min()) / (median + REGIME_EPSILON)),
        slope_norm=abs(slope) / (median + REGIME_EPSILON),
        cross_rate=compute_cross_rate(arr),
        raw_slope=slope,
    )


__all__ = [
    "compute_median",
    "compute_chop",
    "compute_cross_rate",
    "compute_window_features",
]
