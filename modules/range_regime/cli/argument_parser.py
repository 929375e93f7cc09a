"""
Command-line argument parser for range regime classification.

This module provides the main argument parser for the range regime CLI,
defining the subcommands, threshold overrides and their default values.
"""

import argparse

from modules.config import (
    DEFAULT_CHOP_MAX,
    DEFAULT_CROSS_RATE_MIN,
    DEFAULT_RANGE_NORM_MAX,
    DEFAULT_SLOPE_NORM_MAX,
    DEFAULT_WINDOW_SIZE,
    RECALC_MAX_WORKERS,
)

THRESHOLD_ARGUMENTS = ["chop_max", "range_norm_max", "slope_norm_max", "cross_rate_min", "window_size"]


def _add_threshold_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("thresholds")
    group.add_argument(
        "--chop-max",
        type=str,
        default=None,
        help=f"Maximum chop ratio for RANGE_BOUND (default: {DEFAULT_CHOP_MAX})",
    )
    group.add_argument(
        "--range-norm-max",
        type=str,
        default=None,
        help=f"Maximum normalized range for RANGE_BOUND (default: {DEFAULT_RANGE_NORM_MAX})",
    )
    group.add_argument(
        "--slope-norm-max",
        type=str,
        default=None,
        help=f"Maximum normalized slope for RANGE_BOUND (default: {DEFAULT_SLOPE_NORM_MAX})",
    )
    group.add_argument(
        "--cross-rate-min",
        type=str,
        default=None,
        help=f"Minimum mean-crossing rate for RANGE_BOUND (default: {DEFAULT_CROSS_RATE_MIN})",
    )
    group.add_argument(
        "--window-size",
        type=str,
        default=None,
        help=f"Number of price points per window (default: {DEFAULT_WINDOW_SIZE})",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the classify, stream and calibrate subcommands."""
    parser = argparse.ArgumentParser(
        description="Range Regime Classification for item price histories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify = subparsers.add_parser("classify", help="Classify price history CSV files into regime segments")
    classify.add_argument("paths", nargs="+", help="Price history CSV file(s)")
    classify.add_argument(
        "--item",
        type=str,
        default=None,
        help="Only recalculate this item id",
    )
    classify.add_argument(
        "--threads",
        action="store_true",
        help="Recalculate items in a thread pool",
    )
    classify.add_argument(
        "--max-workers",
        type=int,
        default=RECALC_MAX_WORKERS,
        help=f"Thread pool size with --threads (default: {RECALC_MAX_WORKERS})",
    )
    classify.add_argument(
        "--export",
        type=str,
        default=None,
        metavar="PATH",
        help="Write per-point features and labels to this CSV",
    )
    _add_threshold_arguments(classify)

    stream = subparsers.add_parser("stream", help="Replay price history through the streaming classifier")
    stream.add_argument("paths", nargs="+", help="Price history CSV file(s)")
    _add_threshold_arguments(stream)

    calibrate = subparsers.add_parser("calibrate", help="Suggest thresholds from price history CSV files")
    calibrate.add_argument("paths", nargs="+", help="Price history CSV file(s)")
    calibrate.add_argument(
        "--max-items",
        type=int,
        default=None,
        help="Maximum number of items to sample",
    )
    _add_threshold_arguments(calibrate)

    return parser


def parse_args(argv=None):
    """Parse command-line arguments for range regime classification."""
    return build_parser().parse_args(argv)
