"""
Range Regime classification.

Labels rolling price windows as RANGE_BOUND (sideways, mean-reverting) or
TRENDING (directional), merges consecutive windows into regime segments with
band and confidence metrics, classifies live price feeds incrementally and
suggests thresholds from observed feature distributions.
"""

from modules.range_regime.models import (
    RegimeLabel,
    PricePoint,
    Thresholds,
    WindowFeatures,
    WindowLabel,
    RegimeSegment,
    StreamState,
    StreamUpdateResult,
    DistributionStats,
    SuggestedThresholds,
)
from modules.range_regime.config import (
    DEFAULT_THRESHOLDS,
    REFERENCE_THRESHOLDS,
    RecalculationConfig,
)
from modules.range_regime.core import (
    compute_window_features,
    classify_window,
    classify_regime,
    build_segments,
    init_stream_state,
    update_stream,
    close_stream,
    replay_stream,
    auto_calibrate_thresholds,
)
from modules.range_regime.exceptions import (
    ThresholdValidationError,
    ThresholdsNotConfiguredError,
    ItemNotFoundError,
)

__all__ = [
    # Models
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
    # Config
    "DEFAULT_THRESHOLDS",
    "REFERENCE_THRESHOLDS",
    "RecalculationConfig",
    # Core
    "compute_window_features",
    "classify_window",
    "classify_regime",
    "build_segments",
    "init_stream_state",
    "update_stream",
    "close_stream",
    "replay_stream",
    "auto_calibrate_thresholds",
    # Errors
    "ThresholdValidationError",
    "ThresholdsNotConfiguredError",
    "ItemNotFoundError",
]
