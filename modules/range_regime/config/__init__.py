"""
Configuration classes for Range Regime classification.

This module provides threshold presets (the seeded defaults and the fixed
confidence reference set) and the batch recalculation configuration.
"""

from .thresholds_config import (
    DEFAULT_THRESHOLDS,
    REFERENCE_THRESHOLDS,
    create_thresholds_from_dict,
)
from .recalculation_config import RecalculationConfig

__all__ = [
    "DEFAULT_THRESHOLDS",
    "REFERENCE_THRESHOLDS",
    "create_thresholds_from_dict",
    "RecalculationConfig",
]
