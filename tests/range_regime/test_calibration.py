"""
Tests for core/calibration module.
"""
import numpy as np
import pytest

from modules.range_regime.core.calibration import (
    auto_calibrate_thresholds,
    calculate_stats,
    collect_feature_pools,
    percentile,
)
from modules.range_regime.models import DistributionStats


def _oscillating_corpus(num_items=20, length=60):
    """Create noisy oscillating price arrays around different price levels."""
    np.random.seed(42)
    corpus = []
    for item in range(num_items):
        level = 10.0 * (item + 1)
        wave = np.sin(np.arange(length) * 1.3) * level * 0.005
        noise = np.random.normal(0, level * 0.001, length)
        corpus.append((level + wave + noise).tolist())
    return corpus


def test_percentile_linear_interpolation():
    """Test percentile interpolation between closest ranks."""
    assert percentile([1, 2, 3, 4], 50) == pytest.approx(2.5)
    assert percentile([5, 1, 3, 2, 4], 25) == pytest.approx(2.0)
    assert percentile([1, 2, 3, 4], 0) == pytest.approx(1.0)
    assert percentile([1, 2, 3, 4], 100) == pytest.approx(4.0)


def test_percentile_empty():
    """Test that the percentile of empty input is 0."""
    assert percentile([], 75) == 0.0


def test_calculate_stats():
    """Test min, max and quartiles."""
    stats = calculate_stats([3, 1, 5, 2, 4])
    assert stats == DistributionStats(min=1.0, max=5.0, p25=2.0, p50=3.0, p75=4.0)


def test_calculate_stats_empty():
    """Test that stats of empty input are all zero."""
    assert calculate_stats([]) == DistributionStats()


def test_collect_feature_pools_skips_short_arrays():
    """Test that arrays shorter than the window contribute nothing."""
    pools = collect_feature_pools([[1, 2, 3], list(range(1, 11))], window_size=5)
    assert set(pools) == {"chop", "range_norm", "slope_norm", "cross_rate"}
    assert len(pools["chop"]) == 6


def test_auto_calibrate_window_count():
    """Test that every window position of every array is analyzed."""
    result = auto_calibrate_thresholds([list(range(1, 11)), list(range(20, 30))], window_size=5)
    assert result.window_count == 12


def test_auto_calibrate_no_windows():
    """Test that calibration without complete windows suggests zeros."""
    result = auto_calibrate_thresholds([[1.0, 2.0]], window_size=5)
    assert result.window_count == 0
    assert result.chop_max == 0.0
    assert result.cross_rate_min == 0.0


def test_auto_calibrate_uses_quartiles():
    """Test that suggestions are p25 of chop/range/slope and p75 of cross rate."""
    result = auto_calibrate_thresholds(_oscillating_corpus(), window_size=24)
    assert result.chop_max == pytest.approx(result.chop_stats.p25)
    assert result.range_norm_max == pytest.approx(result.range_norm_stats.p25)
    assert result.slope_norm_max == pytest.approx(result.slope_norm_stats.p25)
    assert result.cross_rate_min == pytest.approx(result.cross_rate_stats.p75)


def test_auto_calibrate_percentile_sanity():
    """Test suggestions lie inside the observed distributions."""
    corpus = _oscillating_corpus()
    result = auto_calibrate_thresholds(corpus, window_size=24)
    pools = collect_feature_pools(corpus, window_size=24)

    assert result.cross_rate_min <= np.percentile(pools["cross_rate"], 75) + 1e-12
    assert 0.0 <= result.chop_max <= np.percentile(pools["chop"], 25) + 1e-12
    assert result.chop_stats.min <= result.chop_max <= result.chop_stats.max
