"""
Segment building.

Merges consecutive window labels that share a label into segments and
summarizes each one:

  avg_features      mean of every feature over the run's windows
  confidence_score  RANGE_BOUND: mean of four margins below the thresholds
                    TRENDING:    max of four excesses past the thresholds
  band_midpoint     median price over the segment (RANGE_BOUND only)
  band_width_pct    (max - min) / midpoint * 100 (RANGE_BOUND only)
  slope_direction   sign of avg raw slope / median price, with a dead zone

A single strongly violated criterion gives a confident trend; a confident
range needs all four criteria met with margin.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from modules.config import SLOPE_DIRECTION_DEAD_ZONE
from modules.range_regime.config.thresholds_config import REFERENCE_THRESHOLDS
from modules.range_regime.core.window_features import compute_median
from modules.range_regime.models import (
    RegimeLabel,
    RegimeSegment,
    Thresholds,
    WindowFeatures,
    WindowLabel,
)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def average_features(features: Sequence[WindowFeatures]) -> WindowFeatures:
    """Arithmetic mean of each feature; all zeros for an empty sequence."""
    if len(features) == 0:
        return WindowFeatures()

    matrix = np.array(
        [[f.chop, f.range_norm, f.slope_norm, f.cross_rate, f.raw_slope] for f in features],
        dtype=np.float64,
    )
    chop, range_norm, slope_norm, cross_rate, raw_slope = matrix.mean(axis=0)
    return WindowFeatures(
        chop=float(chop),
        range_norm=float(range_norm),
        slope_norm=float(slope_norm),
        cross_rate=float(cross_rate),
        raw_slope=float(raw_slope),
    )


def calculate_confidence_score(
    label: RegimeLabel,
    features: WindowFeatures,
    thresholds: Thresholds = REFERENCE_THRESHOLDS,
) -> float:
    """
    Calculate how decisively averaged features sit on their side of the thresholds.

    Args:
        label: Segment label.
        features: Averaged segment features.
        thresholds: Normalization thresholds (default: REFERENCE_THRESHOLDS).

    Returns:
        Score in [0, 1]; higher means more confidently classified.
    """
    if label == RegimeLabel.RANGE_BOUND:
        # 0 = at threshold, 1 = far on the range-bound side
        chop_margin = max(0.0, 1 - features.chop / thresholds.chop_max)
        range_margin = max(0.0, 1 - features.range_norm / thresholds.range_norm_max)
        slope_margin = max(0.0, 1 - features.slope_norm / thresholds.slope_norm_max)
        cross_margin = _clamp(
            _safe_ratio(features.cross_rate - thresholds.cross_rate_min, 1 - thresholds.cross_rate_min)
        )
        return (chop_margin + range_margin + slope_margin + cross_margin) / 4

    chop_excess = _clamp(_safe_ratio(features.chop - thresholds.chop_max, 1 - thresholds.chop_max))
    range_excess = _clamp(features.range_norm / thresholds.range_norm_max - 1)
    slope_excess = _clamp(features.slope_norm / thresholds.slope_norm_max - 1)
    cross_deficit = max(0.0, 1 - features.cross_rate / thresholds.cross_rate_min)
    return max(chop_excess, range_excess, slope_excess, cross_deficit)


def compute_band_metrics(prices: Sequence[float]) -> Tuple[Optional[float], Optional[float]]:
    """
    Band midpoint (median) and width as a percentage of the midpoint.

    Returns:
        (band_midpoint, band_width_pct); the midpoint is None for no prices,
        the width is None when the midpoint is not positive.
    """
    arr = np.asarray(prices, dtype=np.float64)
    if arr.size == 0:
        return None, None

    midpoint = compute_median(arr)
    if midpoint > 0:
        return midpoint, float((arr.max() - arr.min()) / midpoint * 100)
    return midpoint, None


def get_slope_direction(avg_raw_slope: float, median_price: float) -> int:
    """Sign of the price-normalized slope: -1 down, 0 flat, 1 up."""
    normalized_slope = avg_raw_slope / median_price if median_price > 0 else 0.0
    if normalized_slope > SLOPE_DIRECTION_DEAD_ZONE:
        return 1
    if normalized_slope < -SLOPE_DIRECTION_DEAD_ZONE:
        return -1
    return 0


def finalize_segment(
    window_labels: Sequence[WindowLabel],
    prices: Sequence[float],
    reference_thresholds: Thresholds = REFERENCE_THRESHOLDS,
    index_offset: int = 0,
) -> RegimeSegment:
    """Summarize one run of same-label windows into a segment.

    ``prices[0]`` is the price of the point whose index is ``index_offset``.
    """
    first = window_labels[0]
    last = window_labels[-1]
    label = first.label

    avg_features = average_features([wl.features for wl in window_labels])
    segment_prices = list(prices[first.start_idx - index_offset:last.end_idx - index_offset + 1])

    band_midpoint: Optional[float] = None
    band_width_pct: Optional[float] = None
    if label == RegimeLabel.RANGE_BOUND:
        band_midpoint, band_width_pct = compute_band_metrics(segment_prices)

    median_price = compute_median(segment_prices)

    return RegimeSegment(
        start_idx=first.start_idx,
        end_idx=last.end_idx,
        start_ts=first.start_ts,
        end_ts=last.end_ts,
        label=label,
        band_midpoint=band_midpoint,
        band_width_pct=band_width_pct,
        confidence_score=calculate_confidence_score(label, avg_features, reference_thresholds),
        avg_features=avg_features,
        slope_direction=get_slope_direction(avg_features.raw_slope, median_price),
    )


def build_segments(
    labels: Sequence[WindowLabel],
    prices: Sequence[float],
    reference_thresholds: Thresholds = REFERENCE_THRESHOLDS,
    index_offset: int = 0,
) -> List[RegimeSegment]:
    """
    Build merged segments from consecutive window labels with the same classification.

    Args:
        labels: Window labels in window order (from classify_regime).
        prices: Raw prices of the underlying series, positioned so that
            ``prices[i]`` is the price of the point whose index is
            ``i + index_offset``.
        reference_thresholds: Thresholds used to normalize confidence scores.
        index_offset: Index of the first price, for a series that starts
            partway into the full history.

    Returns:
        One segment per maximal run of equal labels.
    """
    if len(labels) == 0:
        return []

    segments: List[RegimeSegment] = []
    run: List[WindowLabel] = [labels[0]]

    for window_label in labels[1:]:
        if window_label.label == run[0].label:
            run.append(window_label)
        else:
            segments.append(finalize_segment(run, prices, reference_thresholds, index_offset))
            run = [window_label]

    segments.append(finalize_segment(run, prices, reference_thresholds, index_offset))
    return segments


__all__ = [
    "average_features",
    "calculate_confidence_score",
    "compute_band_metrics",
    "get_slope_direction",
    "finalize_segment",
    "build_segments",
]
