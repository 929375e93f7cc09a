"""
Tests for core/linear_regression module.
"""
import numpy as np
import pytest

from modules.range_regime.core.linear_regression import compute_slope


def test_compute_slope_increasing_series():
    """Test that a unit-step increasing series has slope 1."""
    assert compute_slope([1, 2, 3, 4, 5]) == pytest.approx(1.0)


def test_compute_slope_decreasing_series():
    """Test that a decreasing series has negative slope."""
    assert compute_slope([10, 8, 6, 4]) == pytest.approx(-2.0)


def test_compute_slope_constant_series():
    """Test that a flat series has zero slope."""
    assert compute_slope([7.5] * 10) == pytest.approx(0.0)


def test_compute_slope_short_input():
    """Test that empty and single-value input return 0."""
    assert compute_slope([]) == 0.0
    assert compute_slope([42.0]) == 0.0


def test_compute_slope_accepts_numpy_array():
    """Test that numpy arrays are accepted and return a plain float."""
    result = compute_slope(np.array([2.0, 4.0, 6.0]))
    assert isinstance(result, float)
    assert result == pytest.approx(2.0)


def test_compute_slope_noisy_line():
    """Test that the slope matches numpy's least-squares fit."""
    np.random.seed(42)
    values = 3.0 * np.arange(50) + np.random.normal(0, 1, 50)
    expected = np.polyfit(np.arange(50), values, 1)[0]
    assert compute_slope(values) == pytest.approx(expected)
