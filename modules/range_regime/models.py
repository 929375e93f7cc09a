"""
Value types for range regime classification.

All types are immutable. Segments and stream states are rebuilt rather than
mutated, so a caller can keep an old value around (for replay or comparison)
without it changing underneath them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from modules.config import (
    DEFAULT_CHOP_MAX,
    DEFAULT_CROSS_RATE_MIN,
    DEFAULT_RANGE_NORM_MAX,
    DEFAULT_SLOPE_NORM_MAX,
    DEFAULT_WINDOW_SIZE,
    REGIME_RANGE_BOUND,
    REGIME_TRENDING,
)

Timestamp = Union[pd.Timestamp, datetime]


class RegimeLabel(str, Enum):
    """Classification label of a window or segment."""

    RANGE_BOUND = REGIME_RANGE_BOUND
    TRENDING = REGIME_TRENDING

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PricePoint:
    """A single observation of an item's price.

    Attributes:
        price: Observed price.
        timestamp: Observation time.
        index: Position of the point in the item's full history. Segment
            boundaries are expressed with this value, not with array offsets.
    """
    price: float
    timestamp: Timestamp
    index: int


@dataclass(frozen=True)
class Thresholds:
    """Classification thresholds and window size.

    Attributes:
        chop_max: Maximum chop ratio for RANGE_BOUND, in (0, 1].
        range_norm_max: Maximum normalized range for RANGE_BOUND, > 0.
        slope_norm_max: Maximum normalized slope for RANGE_BOUND, > 0.
        cross_rate_min: Minimum mean-crossing rate for RANGE_BOUND, in (0, 1].
        window_size: Number of price points per window, >= 2.
    """
    chop_max: float = DEFAULT_CHOP_MAX
    range_norm_max: float = DEFAULT_RANGE_NORM_MAX
    slope_norm_max: float = DEFAULT_SLOPE_NORM_MAX
    cross_rate_min: float = DEFAULT_CROSS_RATE_MIN
    window_size: int = DEFAULT_WINDOW_SIZE

    def merge(self, updates: Dict[str, Any]) -> "Thresholds":
        """Return a copy with only the provided (non-None) fields replaced."""
        changes = {key: value for key, value in updates.items() if value is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WindowFeatures:
    """Scale-free descriptors of one price window.

    Attributes:
        chop: Net displacement over total path length, in [0, 1].
        range_norm: (max - min) / median.
        slope_norm: |regression slope| / median.
        cross_rate: Mean-crossings per point, in [0, 1].
        raw_slope: Signed regression slope in price units per step.
    """
    chop: float = 0.0
    range_norm: float = 0.0
    slope_norm: float = 0.0
    cross_rate: float = 0.0
    raw_slope: float = 0.0


@dataclass(frozen=True)
class WindowLabel:
    """Classification result for one window position."""
    start_idx: int
    end_idx: int
    start_ts: Timestamp
    end_ts: Timestamp
    label: RegimeLabel
    features: WindowFeatures


@dataclass(frozen=True)
class RegimeSegment:
    """A maximal run of windows sharing one label.

    Band fields are only populated for RANGE_BOUND segments.
    """
    start_idx: int
    end_idx: int
    start_ts: Timestamp
    end_ts: Timestamp
    label: RegimeLabel
    band_midpoint: Optional[float]
    band_width_pct: Optional[float]
    confidence_score: Optional[float]
    avg_features: WindowFeatures
    slope_direction: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into the stored row layout (snake_case columns)."""
        return {
            "start_idx": self.start_idx,
            "end_idx": self.end_idx,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "label": self.label.value,
            "chop": self.avg_features.chop,
            "range_norm": self.avg_features.range_norm,
            "slope_norm": self.avg_features.slope_norm,
            "cross_rate": self.avg_features.cross_rate,
            "band_midpoint": self.band_midpoint,
            "band_width_pct": self.band_width_pct,
            "confidence_score": self.confidence_score,
            "slope_direction": self.slope_direction,
        }


@dataclass(frozen=True)
class StreamState:
    """Rolling state of the streaming classifier.

    Owned by the caller and threaded through successive ``update_stream``
    calls; every update returns a new instance.
    """
    window_size: int
    thresholds: Thresholds
    price_buffer: Tuple[PricePoint, ...] = ()
    current_features: Optional[WindowFeatures] = None
    current_label: Optional[RegimeLabel] = None
    segment_start_ts: Optional[Timestamp] = None
    segment_start_idx: Optional[int] = None
    segment_features: Tuple[WindowFeatures, ...] = ()

    @property
    def is_warm(self) -> bool:
        """True once the buffer holds a full window."""
        return len(self.price_buffer) >= self.window_size


@dataclass(frozen=True)
class StreamUpdateResult:
    """Outcome of feeding one price point into the stream."""
    state: StreamState
    label_changed: bool = False
    segment: Optional[RegimeSegment] = None


@dataclass(frozen=True)
class DistributionStats:
    """Summary of one feature's empirical distribution."""
    min: float = 0.0
    max: float = 0.0
    p25: float = 0.0
    p50: float = 0.0
    p75: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class SuggestedThresholds:
    """Thresholds suggested by auto-calibration, with the distributions behind them."""
    chop_max: float
    range_norm_max: float
    slope_norm_max: float
    cross_rate_min: float
    chop_stats: DistributionStats = field(default_factory=DistributionStats)
    range_norm_stats: DistributionStats = field(default_factory=DistributionStats)
    slope_norm_stats: DistributionStats = field(default_factory=DistributionStats)
    cross_rate_stats: DistributionStats = field(default_factory=DistributionStats)
    window_count: int = 0


__all__ = [
    "RegimeLabel",
    "PricePoint",
    "Thresholds",
    "WindowFeatures",
    "WindowLabel",
    "RegimeSegment",
    "StreamState",
    "StreamUpdateResult",
    "DistributionStats",
    "SuggestedThresholds",
]
