"""
Streaming regime classification.

The online counterpart of classify_regime + build_segments. Prices arrive one
at a time; the state keeps the last ``window_size`` points, reclassifies the
full buffer on every update and emits the finished segment exactly when the
label flips.

Updates are functional: ``update_stream`` never touches the state it is given
and returns a fresh one, so replaying a recorded feed is deterministic.

Boundaries differ slightly from the batch builder at transitions: the
finished segment ends at the last point before the flip, and the next segment
starts at the point that caused it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from modules.range_regime.core.classifier import classify_window
from modules.range_regime.core.segment_builder import (
    average_features,
    calculate_confidence_score,
    compute_band_metrics,
    get_slope_direction,
)
from modules.range_regime.core.window_features import compute_median, compute_window_features
from modules.range_regime.models import (
    PricePoint,
    RegimeLabel,
    RegimeSegment,
    StreamState,
    StreamUpdateResult,
    Thresholds,
    Timestamp,
)


def init_stream_state(window_size: int, thresholds: Thresholds) -> StreamState:
    """
    Initialize a new streaming classification state.

    Args:
        window_size: Size of the rolling window.
        thresholds: Classification thresholds.

    Returns:
        Empty state with no current label.

    Raises:
        ValueError: If ``window_size`` is smaller than 2.
    """
    if window_size < 2:
        raise ValueError(f"window_size must be >= 2, got {window_size}")
    return StreamState(window_size=window_size, thresholds=thresholds)


def _finalize_segment(state: StreamState, end_ts: Timestamp, end_idx: int) -> RegimeSegment:
    """Close the state's running segment at the given boundary."""
    label = state.current_label
    avg_features = average_features(state.segment_features)
    prices = [point.price for point in state.price_buffer]

    band_midpoint: Optional[float] = None
    band_width_pct: Optional[float] = None
    if label == RegimeLabel.RANGE_BOUND:
        band_midpoint, band_width_pct = compute_band_metrics(prices)

    return RegimeSegment(
        start_idx=state.segment_start_idx,
        end_idx=end_idx,
        start_ts=state.segment_start_ts,
        end_ts=end_ts,
        label=label,
        band_midpoint=band_midpoint,
        band_width_pct=band_width_pct,
        confidence_score=calculate_confidence_score(label, avg_features, state.thresholds),
        avg_features=avg_features,
        slope_direction=get_slope_direction(avg_features.raw_slope, compute_median(prices)),
    )


def update_stream(state: StreamState, new_price: PricePoint) -> StreamUpdateResult:
    """
    Update the streaming classifier with a new price point.

    Args:
        state: Current stream state (left untouched).
        new_price: Next price point in chronological order.

    Returns:
        StreamUpdateResult with the new state; ``segment`` holds the
        previous segment when the label changed.
    """
    buffer = (state.price_buffer + (new_price,))[-state.window_size:]

    buffered = replace(state, price_buffer=buffer)
    if not buffered.is_warm:
        return StreamUpdateResult(state=buffered)

    features = compute_window_features([point.price for point in buffer])
    new_label = classify_window(features, state.thresholds)

    # First full window opens the first segment; not a transition
    if state.current_label is None:
        new_state = replace(
            state,
            price_buffer=buffer,
            current_features=features,
            current_label=new_label,
            segment_start_ts=buffer[0].timestamp,
            segment_start_idx=buffer[0].index,
            segment_features=(features,),
        )
        return StreamUpdateResult(state=new_state)

    if new_label == state.current_label:
        new_state = replace(
            state,
            price_buffer=buffer,
            current_features=features,
            segment_features=state.segment_features + (features,),
        )
        return StreamUpdateResult(state=new_state)

    # Previous segment ends at the last point before the new one
    previous_end = state.price_buffer[-1]
    segment = _finalize_segment(state, previous_end.timestamp, previous_end.index)

    new_state = replace(
        state,
        price_buffer=buffer,
        current_features=features,
        current_label=new_label,
        segment_start_ts=new_price.timestamp,
        segment_start_idx=new_price.index,
        segment_features=(features,),
    )
    return StreamUpdateResult(state=new_state, label_changed=True, segment=segment)


def close_stream(state: StreamState) -> Optional[RegimeSegment]:
    """
    Finalize the still-open segment at the newest buffered point.

    Useful at the end of a replay, where the last segment never sees a
    transition. Returns None before the first full window.
    """
    if state.current_label is None or not state.price_buffer:
        return None
    last = state.price_buffer[-1]
    return _finalize_segment(state, last.timestamp, last.index)


def replay_stream(
    points: Iterable[PricePoint],
    window_size: int,
    thresholds: Thresholds,
) -> Tuple[List[RegimeSegment], StreamState]:
    """
    Feed a whole series through the streaming classifier.

    Args:
        points: Chronologically ordered price points.
        window_size: Size of the rolling window.
        thresholds: Classification thresholds.

    Returns:
        (segments emitted at transitions, final state). The open segment is
        not included; use ``close_stream`` on the final state for it.
    """
    state = init_stream_state(window_size, thresholds)
    segments: List[RegimeSegment] = []

    for point in points:
        result = update_stream(state, point)
        state = result.state
        if result.segment is not None:
            segments.append(result.segment)

    return segments, state


__all__ = [
    "init_stream_state",
    "update_stream",
    "close_stream",
    "replay_stream",
]
