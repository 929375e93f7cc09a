"""
Tests for utils/validation module.
"""
import pytest

from modules.range_regime.exceptions import ThresholdValidationError
from modules.range_regime.utils.validation import validate_threshold_updates


def test_validate_empty_update():
    """Test that an empty update is valid and changes nothing."""
    assert validate_threshold_updates({}) == {}


def test_validate_ignores_none_and_unknown_fields():
    """Test that None values and unknown keys are dropped."""
    assert validate_threshold_updates({"chop_max": None, "foo": 3}) == {}


def test_validate_coerces_numeric_strings():
    """Test that numeric strings are coerced."""
    result = validate_threshold_updates({"chop_max": "0.3", "window_size": "12"})
    assert result == {"chop_max": 0.3, "window_size": 12}
    assert isinstance(result["window_size"], int)


def test_validate_accepts_upper_bound():
    """Test that 1 is a valid chop_max and cross_rate_min."""
    result = validate_threshold_updates({"chop_max": 1, "cross_rate_min": 1.0})
    assert result == {"chop_max": 1.0, "cross_rate_min": 1.0}


@pytest.mark.parametrize(
    "updates,message",
    [
        ({"chop_max": 1.5}, "chop_max must be a number between 0 and 1"),
        ({"chop_max": 0}, "chop_max must be a number between 0 and 1"),
        ({"range_norm_max": -0.1}, "range_norm_max must be a positive number"),
        ({"slope_norm_max": "abc"}, "slope_norm_max must be a positive number"),
        ({"slope_norm_max": float("nan")}, "slope_norm_max must be a positive number"),
        ({"cross_rate_min": 2}, "cross_rate_min must be a number between 0 and 1"),
        ({"window_size": 0}, "window_size must be a positive integer"),
        ({"window_size": 1}, "window_size must be a positive integer"),
        ({"range_norm_max": float("inf")}, "range_norm_max must be a positive number"),
        ({"slope_norm_max": "inf"}, "slope_norm_max must be a positive number"),
        ({"window_size": 24.5}, "window_size must be a positive integer"),
        ({"window_size": True}, "window_size must be a positive integer"),
    ],
)
def test_validate_rejects_invalid_values(updates, message):
    """Test each validation message."""
    with pytest.raises(ThresholdValidationError, match=message) as exc_info:
        validate_threshold_updates(updates)
    assert exc_info.value.errors == [message]


def test_validate_collects_all_errors():
    """Test that every invalid field is reported at once."""
    with pytest.raises(ThresholdValidationError) as exc_info:
        validate_threshold_updates({"range_norm_max": -1, "window_size": 0, "chop_max": 0.2})
    assert exc_info.value.errors == [
        "range_norm_max must be a positive number",
        "window_size must be a positive integer",
    ]


def test_validation_error_is_value_error():
    """Test that validation errors can be caught as ValueError."""
    with pytest.raises(ValueError):
        validate_threshold_updates({"chop_max": -1})
