"""
Utility functions for Range Regime classification.
"""

from modules.range_regime.utils.validation import validate_threshold_updates
from modules.range_regime.utils.price_points import (
    select_price,
    build_price_points,
    price_points_from_frame,
    load_price_history_frame,
)

__all__ = [
    "validate_threshold_updates",
    "select_price",
    "build_price_points",
    "price_points_from_frame",
    "load_price_history_frame",
]
