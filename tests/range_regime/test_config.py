"""
Tests for config module.
"""
from dataclasses import FrozenInstanceError

import pytest

from modules.range_regime.config import (
    DEFAULT_THRESHOLDS,
    REFERENCE_THRESHOLDS,
    RecalculationConfig,
    create_thresholds_from_dict,
)
from modules.range_regime.models import RegimeLabel, Thresholds


def test_thresholds_defaults():
    """Test that Thresholds has the seeded default values."""
    thresholds = Thresholds()
    assert thresholds.chop_max == 0.25
    assert thresholds.range_norm_max == 0.02
    assert thresholds.slope_norm_max == 0.0005
    assert thresholds.cross_rate_min == 0.08
    assert thresholds.window_size == 24
    assert DEFAULT_THRESHOLDS == thresholds


def test_reference_thresholds_values():
    """Test the fixed confidence reference thresholds."""
    assert REFERENCE_THRESHOLDS.chop_max == 0.25
    assert REFERENCE_THRESHOLDS.range_norm_max == 0.02
    assert REFERENCE_THRESHOLDS.slope_norm_max == 0.0005
    assert REFERENCE_THRESHOLDS.cross_rate_min == 0.08


def test_thresholds_are_immutable():
    """Test that thresholds cannot be changed in place."""
    with pytest.raises(FrozenInstanceError):
        DEFAULT_THRESHOLDS.chop_max = 0.5


def test_thresholds_merge():
    """Test that merge replaces only provided, non-None fields."""
    merged = DEFAULT_THRESHOLDS.merge({"chop_max": 0.3, "window_size": None})
    assert merged.chop_max == 0.3
    assert merged.window_size == 24
    assert DEFAULT_THRESHOLDS.chop_max == 0.25


def test_thresholds_to_dict():
    """Test snake_case serialization."""
    assert Thresholds().to_dict() == {
        "chop_max": 0.25,
        "range_norm_max": 0.02,
        "slope_norm_max": 0.0005,
        "cross_rate_min": 0.08,
        "window_size": 24,
    }


def test_create_thresholds_from_dict():
    """Test building thresholds from a partial dictionary."""
    thresholds = create_thresholds_from_dict({"range_norm_max": "0.05", "window_size": 12, "chop_max": None})
    assert thresholds.range_norm_max == 0.05
    assert thresholds.window_size == 12
    assert thresholds.chop_max == 0.25


def test_recalculation_config_defaults():
    """Test batch recalculation defaults."""
    config = RecalculationConfig()
    assert config.lookback_multiplier == 2
    assert config.use_threads is False
    assert config.max_workers == 8
    assert config.progress_every == 10


def test_regime_label_values():
    """Test that labels serialize to the stored strings."""
    assert RegimeLabel.RANGE_BOUND.value == "RANGE_BOUND"
    assert str(RegimeLabel.TRENDING) == "TRENDING"
    assert RegimeLabel("RANGE_BOUND") is RegimeLabel.RANGE_BOUND
