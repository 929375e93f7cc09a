"""
Per-point feature export.

Builds one row per price point holding the features and label of the window
that ends at that point. Rows before the first full window carry NaN
features and no label.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd

from modules.range_regime.core.classifier import classify_window
from modules.range_regime.core.window_features import compute_window_features
from modules.range_regime.models import PricePoint, RegimeSegment, Thresholds

EXPORT_COLUMNS = [
    "timestamp",
    "price",
    "chop",
    "range_norm",
    "slope_norm",
    "cross_rate",
    "label",
]


def build_feature_frame(
    points: Sequence[PricePoint],
    thresholds: Thresholds,
    window_size: int,
) -> pd.DataFrame:
    """
    Build the per-point export table for one item.

    Args:
        points: Chronologically ordered price points.
        thresholds: Classification thresholds.
        window_size: Window length.

    Returns:
        DataFrame with EXPORT_COLUMNS, one row per point.
    """
    prices = np.array([point.price for point in points], dtype=np.float64)
    n = len(points)

    chop = np.full(n, np.nan)
    range_norm = np.full(n, np.nan)
    slope_norm = np.full(n, np.nan)
    cross_rate = np.full(n, np.nan)
    labels = [None] * n

    if window_size >= 1:
        for end in range(window_size - 1, n):
            features = compute_window_features(prices[end - window_size + 1:end + 1])
            chop[end] = features.chop
            range_norm[end] = features.range_norm
            slope_norm[end] = features.slope_norm
            cross_rate[end] = features.cross_rate
            labels[end] = classify_window(features, thresholds).value

    return pd.DataFrame(
        {
            "timestamp": [point.timestamp for point in points],
            "price": prices,
            "chop": chop,
            "range_norm": range_norm,
            "slope_norm": slope_norm,
            "cross_rate": cross_rate,
            "label": labels,
        },
        columns=EXPORT_COLUMNS,
    )


def segments_to_frame(segments: Sequence[RegimeSegment]) -> pd.DataFrame:
    """Flatten segments into a DataFrame with the stored column names."""
    rows = [segment.to_dict() for segment in segments]
    if not rows:
        return pd.DataFrame(
            columns=[
                "start_idx", "end_idx", "start_ts", "end_ts", "label",
                "chop", "range_norm", "slope_norm", "cross_rate",
                "band_midpoint", "band_width_pct", "confidence_score", "slope_direction",
            ]
        )
    return pd.DataFrame(rows)


def export_to_csv(frame: pd.DataFrame, path: Union[str, Path]) -> Path:
    """Write an export frame to CSV and return the resolved path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(target, index=False)
    return target


__all__ = [
    "EXPORT_COLUMNS",
    "build_feature_frame",
    "segments_to_frame",
    "export_to_csv",
]
