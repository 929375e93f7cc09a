"""
Command-line interface components for range regime classification.

This package provides argument parsing and formatted display functions.
"""

# Argument parsing
from modules.range_regime.cli.argument_parser import (
    THRESHOLD_ARGUMENTS,
    build_parser,
    parse_args,
)

# Display utilities
from modules.range_regime.cli.display import (
    display_thresholds,
    display_segments,
    display_stream_transitions,
    display_recalculation_summary,
    display_calibration_report,
)

__all__ = [
    # Argument parsing
    'THRESHOLD_ARGUMENTS',
    'build_parser',
    'parse_args',
    # Display utilities
    'display_thresholds',
    'display_segments',
    'display_stream_transitions',
    'display_recalculation_summary',
    'display_calibration_report',
]
