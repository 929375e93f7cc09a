"""
Tests for core/classifier module.
"""
import pandas as pd
import pytest

from modules.range_regime.core.classifier import classify_regime, classify_window
from modules.range_regime.models import PricePoint, RegimeLabel, Thresholds, WindowFeatures


def _points(prices, start_index=0):
    """Create price points one hour apart."""
    base = pd.Timestamp("2024-01-01")
    return [
        PricePoint(price=p, timestamp=base + pd.Timedelta(hours=i), index=start_index + i)
        for i, p in enumerate(prices)
    ]


def _oscillating(n):
    return [100.0 if i % 2 == 0 else 100.5 for i in range(n)]


def test_classify_window_at_thresholds_is_trending():
    """Test that features exactly at every threshold classify as TRENDING."""
    features = WindowFeatures(chop=0.25, range_norm=0.02, slope_norm=0.0005, cross_rate=0.08)
    assert classify_window(features, Thresholds()) == RegimeLabel.TRENDING


def test_classify_window_range_bound():
    """Test that features inside all four bounds classify as RANGE_BOUND."""
    features = WindowFeatures(chop=0.1, range_norm=0.01, slope_norm=0.0001, cross_rate=0.5)
    assert classify_window(features, Thresholds()) == RegimeLabel.RANGE_BOUND


@pytest.mark.parametrize(
    "override",
    [
        {"chop": 0.3},
        {"range_norm": 0.05},
        {"slope_norm": 0.001},
        {"cross_rate": 0.05},
    ],
)
def test_classify_window_single_violation_is_trending(override):
    """Test that violating any one criterion is enough for TRENDING."""
    values = dict(chop=0.1, range_norm=0.01, slope_norm=0.0001, cross_rate=0.5)
    values.update(override)
    assert classify_window(WindowFeatures(**values), Thresholds()) == RegimeLabel.TRENDING


def test_classify_regime_window_count():
    """Test that L=7, W=5 produces exactly 3 windows."""
    labels = classify_regime(_points(_oscillating(7)), 5, Thresholds(window_size=5))
    assert len(labels) == 3
    assert [wl.start_idx for wl in labels] == [0, 1, 2]
    assert [wl.end_idx for wl in labels] == [4, 5, 6]


def test_classify_regime_short_series():
    """Test that a series shorter than the window returns no labels."""
    assert classify_regime(_points(_oscillating(4)), 5, Thresholds()) == []
    assert classify_regime([], 5, Thresholds()) == []


def test_classify_regime_step_size():
    """Test that step_size strides the window start positions."""
    labels = classify_regime(_points(_oscillating(7)), 3, Thresholds(), step_size=2)
    assert [wl.start_idx for wl in labels] == [0, 2, 4]


def test_classify_regime_uses_point_index_and_timestamp():
    """Test that window boundaries come from the points themselves."""
    points = _points(_oscillating(6), start_index=10)
    labels = classify_regime(points, 5, Thresholds())
    assert labels[0].start_idx == 10
    assert labels[0].end_idx == 14
    assert labels[0].start_ts == points[0].timestamp
    assert labels[-1].end_ts == points[-1].timestamp


def test_classify_regime_labels():
    """Test that an oscillating series is range-bound and a ramp is trending."""
    thresholds = Thresholds(window_size=5)
    flat = classify_regime(_points(_oscillating(10)), 5, thresholds)
    ramp = classify_regime(_points([100.0 + i for i in range(10)]), 5, thresholds)
    assert all(wl.label == RegimeLabel.RANGE_BOUND for wl in flat)
    assert all(wl.label == RegimeLabel.TRENDING for wl in ramp)


def test_classify_regime_invalid_sizes():
    """Test that non-positive window or step sizes are rejected."""
    with pytest.raises(ValueError, match="window_size"):
        classify_regime(_points([1, 2, 3]), 0, Thresholds())
    with pytest.raises(ValueError, match="window_size"):
        classify_regime(_points([1, 2, 3]), 1, Thresholds())
    with pytest.raises(ValueError, match="step_size"):
        classify_regime(_points([1, 2, 3]), 2, Thresholds(), step_size=0)
