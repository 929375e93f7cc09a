"""Threshold presets and construction helpers."""

from typing import Any, Dict

from modules.config import (
    CONFIDENCE_REFERENCE_THRESHOLDS,
    DEFAULT_CHOP_MAX,
    DEFAULT_CROSS_RATE_MIN,
    DEFAULT_RANGE_NORM_MAX,
    DEFAULT_SLOPE_NORM_MAX,
    DEFAULT_WINDOW_SIZE,
)
from modules.range_regime.models import Thresholds

# Seeded global configuration
DEFAULT_THRESHOLDS = Thresholds()

# Fixed normalization baseline for batch segment confidence scores
REFERENCE_THRESHOLDS = Thresholds(
    chop_max=CONFIDENCE_REFERENCE_THRESHOLDS["chop_max"],
    range_norm_max=CONFIDENCE_REFERENCE_THRESHOLDS["range_norm_max"],
    slope_norm_max=CONFIDENCE_REFERENCE_THRESHOLDS["slope_norm_max"],
    cross_rate_min=CONFIDENCE_REFERENCE_THRESHOLDS["cross_rate_min"],
)


def create_thresholds_from_dict(params: Dict[str, Any]) -> Thresholds:
    """
    Create Thresholds from a dictionary of parameters.

    Missing or None entries fall back to the defaults. Values are not
    validated here; use ``validate_threshold_updates`` at input boundaries.

    Args:
        params: Dictionary with any of chop_max, range_norm_max,
            slope_norm_max, cross_rate_min, window_size

    Returns:
        Thresholds instance
    """
    def _get(key: str, default):
        value = params.get(key)
        return default if value is None else value

    return Thresholds(
        chop_max=float(_get("chop_max", DEFAULT_CHOP_MAX)),
        range_norm_max=float(_get("range_norm_max", DEFAULT_RANGE_NORM_MAX)),
        slope_norm_max=float(_get("slope_norm_max", DEFAULT_SLOPE_NORM_MAX)),
        cross_rate_min=float(_get("cross_rate_min", DEFAULT_CROSS_RATE_MIN)),
        window_size=int(_get("window_size", DEFAULT_WINDOW_SIZE)),
    )
