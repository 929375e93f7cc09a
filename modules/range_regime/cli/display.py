"""
Display utilities for the range regime CLI.

This module provides formatted display functions for segments, stream
transitions, recalculation summaries and calibration reports.
"""

from typing import Any, Dict, Hashable, Optional, Sequence

from colorama import Fore, Style

from modules.common.utils import (
    color_text,
    format_pct,
    format_price,
    format_slope_direction,
    log_warn,
    regime_color,
)
from modules.range_regime.models import RegimeLabel, RegimeSegment, Thresholds


def _format_ts(value: Any) -> str:
    return str(value)[:19]


def _format_optional(value: Optional[float], precision: int = 4) -> str:
    return "N/A" if value is None else f"{value:.{precision}f}"


def display_thresholds(thresholds: Thresholds) -> None:
    """Print the active thresholds."""
    print(color_text("Thresholds:", Fore.MAGENTA, Style.BRIGHT))
    print(color_text(f"  chop_max       : {thresholds.chop_max}", Fore.WHITE))
    print(color_text(f"  range_norm_max : {thresholds.range_norm_max}", Fore.WHITE))
    print(color_text(f"  slope_norm_max : {thresholds.slope_norm_max}", Fore.WHITE))
    print(color_text(f"  cross_rate_min : {thresholds.cross_rate_min}", Fore.WHITE))
    print(color_text(f"  window_size    : {thresholds.window_size}", Fore.WHITE))


def display_segments(
    item_id: Hashable,
    segments: Sequence[RegimeSegment],
    current_regime: Optional[RegimeLabel] = None,
) -> None:
    """
    Display an item's regime segments as a table.

    Args:
        item_id: Item identifier
        segments: Segments ordered by start time
        current_regime: Label of the item's most recent segment
    """
    print("\n" + color_text("=" * 100, Fore.CYAN, Style.BRIGHT))
    print(color_text(f"RANGE REGIME SEGMENTS - {item_id}", Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 100, Fore.CYAN, Style.BRIGHT))

    if current_regime is not None:
        print(color_text(f"Current Regime: {current_regime.value}", regime_color(current_regime.value), Style.BRIGHT))

    if not segments:
        print(color_text("  No segments (not enough price history)", Fore.YELLOW))
        return

    print(
        color_text(
            f"{'Start':<20} {'End':<20} {'Idx':>11} {'Label':<12} "
            f"{'Midpoint':>12} {'Width':>9} {'Conf':>6} {'Slope':>5}",
            Fore.MAGENTA,
        )
    )
    print(color_text("-" * 100, Fore.CYAN))

    for segment in segments:
        label = segment.label.value
        idx_range = f"{segment.start_idx}-{segment.end_idx}"
        print(
            color_text(
                f"{_format_ts(segment.start_ts):<20} {_format_ts(segment.end_ts):<20} {idx_range:>11} "
                f"{label:<12} {format_price(segment.band_midpoint):>12} "
                f"{format_pct(segment.band_width_pct):>9} {_format_optional(segment.confidence_score, 2):>6} "
                f"{format_slope_direction(segment.slope_direction):>5}",
                regime_color(label),
            )
        )

    range_count = sum(1 for segment in segments if segment.label == RegimeLabel.RANGE_BOUND)
    print(color_text("-" * 100, Fore.CYAN))
    print(
        color_text(
            f"Total: {len(segments)} segments ({range_count} RANGE_BOUND, {len(segments) - range_count} TRENDING)",
            Fore.WHITE,
        )
    )


def display_stream_transitions(
    item_id: Hashable,
    segments: Sequence[RegimeSegment],
    open_segment: Optional[RegimeSegment],
) -> None:
    """Display the segments emitted by a stream replay and the still-open segment."""
    print("\n" + color_text("=" * 80, Fore.CYAN, Style.BRIGHT))
    print(color_text(f"STREAM REPLAY - {item_id}", Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 80, Fore.CYAN, Style.BRIGHT))

    if not segments and open_segment is None:
        print(color_text("  Stream never warmed up (fewer prices than window size)", Fore.YELLOW))
        return

    for segment in segments:
        label = segment.label.value
        print(
            color_text(
                f"  {_format_ts(segment.start_ts)} -> {_format_ts(segment.end_ts)}  {label:<12} "
                f"conf={_format_optional(segment.confidence_score, 2)}",
                regime_color(label),
            )
        )

    if open_segment is not None:
        label = open_segment.label.value
        print(
            color_text(
                f"  {_format_ts(open_segment.start_ts)} -> (open)  {label:<12} "
                f"conf={_format_optional(open_segment.confidence_score, 2)}",
                regime_color(label),
                Style.BRIGHT,
            )
        )
    print(color_text(f"Transitions: {len(segments)}", Fore.WHITE))


def display_recalculation_summary(summary: Dict[str, Any]) -> None:
    """Display a batch recalculation summary dict."""
    print("\n" + color_text("RECALCULATION SUMMARY", Fore.CYAN, Style.BRIGHT))
    print(color_text("-" * 80, Fore.CYAN))
    print(color_text(f"  Items processed : {summary['items_processed']}", Fore.WHITE))
    print(color_text(f"  Segments created: {summary['segments_created']}", Fore.WHITE))
    if summary["skipped_items"]:
        print(color_text(f"  Skipped         : {', '.join(str(i) for i in summary['skipped_items'])}", Fore.YELLOW))
    if summary["failed_items"]:
        print(color_text(f"  Failed          : {', '.join(str(i) for i in summary['failed_items'])}", Fore.RED))
    if summary["interrupted"]:
        log_warn("Recalculation was interrupted; results are partial")


def display_calibration_report(report: Dict[str, Any]) -> None:
    """Display a calibration report dict (suggested thresholds, stats and meta)."""
    meta = report["meta"]
    print("\n" + color_text("=" * 80, Fore.CYAN, Style.BRIGHT))
    print(color_text("THRESHOLD AUTO-CALIBRATION", Fore.CYAN, Style.BRIGHT))
    print(color_text("=" * 80, Fore.CYAN, Style.BRIGHT))
    print(
        color_text(
            f"Items sampled: {meta['items_sampled']} | Windows analyzed: {meta['windows_analyzed']} | "
            f"Window size: {meta['window_size']}",
            Fore.WHITE,
        )
    )

    if meta["windows_analyzed"] == 0:
        log_warn("No complete windows found; suggestions are not meaningful")

    print(color_text("-" * 80, Fore.CYAN))
    print(color_text(f"{'Feature':<12} {'Min':>12} {'P25':>12} {'P50':>12} {'P75':>12} {'Max':>12}", Fore.MAGENTA))
    for name, stats in report["stats"].items():
        print(
            color_text(
                f"{name:<12} {stats['min']:>12.6f} {stats['p25']:>12.6f} {stats['p50']:>12.6f} "
                f"{stats['p75']:>12.6f} {stats['max']:>12.6f}",
                Fore.WHITE,
            )
        )

    print(color_text("-" * 80, Fore.CYAN))
    print(color_text("Suggested thresholds:", Fore.GREEN, Style.BRIGHT))
    for key, value in report["suggested"].items():
        print(color_text(f"  {key:<15}: {value:.6f}", Fore.GREEN))
