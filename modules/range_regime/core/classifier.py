"""
Window classification.

``classify_window`` maps one window's features to a label; ``classify_regime``
slides a window across a whole price series and labels every position.
"""

from __future__ import annotations

from typing import List, Sequence

from modules.config import DEFAULT_STEP_SIZE
from modules.range_regime.core.window_features import compute_window_features
from modules.range_regime.models import (
    PricePoint,
    RegimeLabel,
    Thresholds,
    WindowFeatures,
    WindowLabel,
)


def classify_window(features: WindowFeatures, thresholds: Thresholds) -> RegimeLabel:
    """Classify a single window based on its features.

    Returns RANGE_BOUND only if ALL conditions are met:
    - chop < chop_max (low directional efficiency)
    - range_norm < range_norm_max (tight price band)
    - slope_norm < slope_norm_max (minimal trend)
    - cross_rate > cross_rate_min (frequent mean reversion)

    Comparisons are strict, so a feature sitting exactly on its threshold
    yields TRENDING.
    """
    is_range_bound = (
        features.chop < thresholds.chop_max
        and features.range_norm < thresholds.range_norm_max
        and features.slope_norm < thresholds.slope_norm_max
        and features.cross_rate > thresholds.cross_rate_min
    )
    return RegimeLabel.RANGE_BOUND if is_range_bound else RegimeLabel.TRENDING


def classify_regime(
    series: Sequence[PricePoint],
    window_size: int,
    thresholds: Thresholds,
    step_size: int = DEFAULT_STEP_SIZE,
) -> List[WindowLabel]:
    """Classify every window position of a price series.

    Window boundaries are taken from the points' own ``index`` and
    ``timestamp`` so gaps in the underlying history are preserved.

    Args:
        series: Chronologically ordered price points.
        window_size: Number of points per window.
        thresholds: Classification thresholds.
        step_size: Stride between window start positions (default: 1).

    Returns:
        One WindowLabel per window position; empty if the series is shorter
        than ``window_size``.

    Raises:
        ValueError: If ``window_size`` is smaller than 2 or ``step_size``
            is smaller than 1.
    """
    if window_size < 2:
        raise ValueError(f"window_size must be >= 2, got {window_size}")
    if step_size < 1:
        raise ValueError(f"step_size must be >= 1, got {step_size}")

    if len(series) < window_size:
        return []

    prices = [point.price for point in series]
    labels: List[WindowLabel] = []

    for start in range(0, len(series) - window_size + 1, step_size):
        end = start + window_size - 1
        features = compute_window_features(prices[start:end + 1])
        labels.append(
            WindowLabel(
                start_idx=series[start].index,
                end_idx=series[end].index,
                start_ts=series[start].timestamp,
                end_ts=series[end].timestamp,
                label=classify_window(features, thresholds),
                features=features,
            )
        )

    return labels


__all__ = ["classify_window", "classify_regime"]
