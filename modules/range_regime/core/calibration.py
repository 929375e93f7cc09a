"""
Threshold auto-calibration.

Slides a window across every supplied price array, pools the four feature
values from all windows of all arrays, and turns the quartiles of those pools
into suggested thresholds:

  chop_max       = p25(chop)
  range_norm_max = p25(range_norm)
  slope_norm_max = p25(slope_norm)
  cross_rate_min = p75(cross_rate)

i.e. only the quietest quarter of observed market behaviour is called
range-bound. Percentiles use linear interpolation between closest ranks
(index = p/100 * (n-1)).
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np

from modules.config import CALIBRATION_PERCENTILES
from modules.range_regime.core.window_features import compute_window_features
from modules.range_regime.models import DistributionStats, SuggestedThresholds


def percentile(values: Sequence[float], p: float) -> float:
    """
    Linear-interpolation percentile of ``values``.

    Args:
        values: Numbers in any order.
        p: Percentile in [0, 100].

    Returns:
        The percentile, or 0.0 for empty input.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return 0.0
    return float(np.percentile(arr, p))


def calculate_stats(values: Sequence[float]) -> DistributionStats:
    """Min, max and quartiles of ``values``; all zeros for empty input."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return DistributionStats()

    p25, p50, p75 = (percentile(arr, p) for p in CALIBRATION_PERCENTILES)
    return DistributionStats(
        min=float(arr.min()),
        max=float(arr.max()),
        p25=p25,
        p50=p50,
        p75=p75,
    )


def collect_feature_pools(
    all_prices: Sequence[Sequence[float]],
    window_size: int,
) -> Dict[str, List[float]]:
    """
    Compute features for every window position of every price array.

    Arrays shorter than ``window_size`` are skipped, as is everything when
    ``window_size`` is below 2.

    Returns:
        Dict with "chop", "range_norm", "slope_norm" and "cross_rate" pools.
    """
    pools: Dict[str, List[float]] = {
        "chop": [],
        "range_norm": [],
        "slope_norm": [],
        "cross_rate": [],
    }

    for prices in all_prices:
        arr = np.asarray(prices, dtype=np.float64)
        if window_size < 2 or len(arr) < window_size:
            continue

        for start in range(len(arr) - window_size + 1):
            features = compute_window_features(arr[start:start + window_size])
            pools["chop"].append(features.chop)
            pools["range_norm"].append(features.range_norm)
            pools["slope_norm"].append(features.slope_norm)
            pools["cross_rate"].append(features.cross_rate)

    return pools


def auto_calibrate_thresholds(
    all_prices: Sequence[Sequence[float]],
    window_size: int,
) -> SuggestedThresholds:
    """
    Auto-calibrate thresholds based on price distributions.

    Args:
        all_prices: One price array per item (the caller chooses the sample).
        window_size: Size of the rolling window.

    Returns:
        Suggested thresholds with per-feature distribution statistics and the
        number of windows analyzed.
    """
    pools = collect_feature_pools(all_prices, window_size)

    chop_stats = calculate_stats(pools["chop"])
    range_norm_stats = calculate_stats(pools["range_norm"])
    slope_norm_stats = calculate_stats(pools["slope_norm"])
    cross_rate_stats = calculate_stats(pools["cross_rate"])

    return SuggestedThresholds(
        chop_max=chop_stats.p25,
        range_norm_max=range_norm_stats.p25,
        slope_norm_max=slope_norm_stats.p25,
        cross_rate_min=cross_rate_stats.p75,
        chop_stats=chop_stats,
        range_norm_stats=range_norm_stats,
        slope_norm_stats=slope_norm_stats,
        cross_rate_stats=cross_rate_stats,
        window_count=len(pools["chop"]),
    )


__all__ = [
    "percentile",
    "calculate_stats",
    "collect_feature_pools",
    "auto_calibrate_thresholds",
]
