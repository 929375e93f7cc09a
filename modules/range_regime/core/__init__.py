"""
Core Range Regime calculations.

This module provides the pure computations: features, classification,
segment building, streaming updates and calibration.
"""

from modules.range_regime.core.linear_regression import compute_slope
from modules.range_regime.core.window_features import compute_median, compute_window_features
from modules.range_regime.core.classifier import classify_window, classify_regime
from modules.range_regime.core.segment_builder import build_segments
from modules.range_regime.core.streaming import (
    init_stream_state,
    update_stream,
    close_stream,
    replay_stream,
)
from modules.range_regime.core.calibration import auto_calibrate_thresholds

__all__ = [
    "compute_slope",
    "compute_median",
    "compute_window_features",
    "classify_window",
    "classify_regime",
    "build_segments",
    "init_stream_state",
    "update_stream",
    "close_stream",
    "replay_stream",
    "auto_calibrate_thresholds",
]
