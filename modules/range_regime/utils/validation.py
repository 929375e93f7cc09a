"""
Threshold update validation.

The pure classification code assumes valid thresholds. Anything coming from
users, files or stores is checked here first.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from modules.range_regime.exceptions import ThresholdValidationError


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _unit_interval(value: float) -> bool:
    return 0 < value <= 1


def _positive(value: float) -> bool:
    return value > 0


def _window_length(value: int) -> bool:
    return value >= 2


# field -> (converter, range check, error message)
_RULES: Dict[str, Tuple[Callable[[Any], Any], Callable[[Any], bool], str]] = {
    "chop_max": (_to_float, _unit_interval, "chop_max must be a number between 0 and 1"),
    "range_norm_max": (_to_float, _positive, "range_norm_max must be a positive number"),
    "slope_norm_max": (_to_float, _positive, "slope_norm_max must be a positive number"),
    "cross_rate_min": (_to_float, _unit_interval, "cross_rate_min must be a number between 0 and 1"),
    "window_size": (_to_int, _window_length, "window_size must be a positive integer"),
}


def validate_threshold_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and coerce a partial threshold update.

    Only the five known fields are considered; fields that are absent or None
    are left out of the result.

    Args:
        updates: Raw update values (numbers or numeric strings).

    Returns:
        Dict of coerced values ready for ``Thresholds.merge``.

    Raises:
        ThresholdValidationError: Listing every invalid field.
    """
    errors: List[str] = []
    clean: Dict[str, Any] = {}

    for key, (convert, in_range, message) in _RULES.items():
        raw = updates.get(key)
        if raw is None:
            continue
        value = convert(raw)
        if value is None or not in_range(value):
            errors.append(message)
            continue
        clean[key] = value

    if errors:
        raise ThresholdValidationError(errors)

    return clean


__all__ = ["validate_threshold_updates"]
