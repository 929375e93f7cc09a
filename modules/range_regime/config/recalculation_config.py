"""Configuration for batch regime recalculation."""

from dataclasses import dataclass
from typing import Optional

from modules.config import (
    CALIBRATION_MAX_LOOKBACK,
    RECALC_LOOKBACK_MULTIPLIER,
    RECALC_MAX_WORKERS,
    RECALC_PROGRESS_EVERY,
    RECALC_USE_THREADS,
)


@dataclass
class RecalculationConfig:
    """Configuration for recalculating segments across many items.

    Attributes:
        lookback_multiplier: Most recent ``window_size * lookback_multiplier``
            prices are classified per item.
        use_threads: Fan items out over a thread pool instead of a plain loop.
        max_workers: Thread pool size when ``use_threads`` is set.
        progress_every: Log progress every N items.
        calibration_lookback: Most recent prices per item fed to calibration.
    """
    lookback_multiplier: int = RECALC_LOOKBACK_MULTIPLIER
    use_threads: bool = RECALC_USE_THREADS
    max_workers: Optional[int] = RECALC_MAX_WORKERS
    progress_every: int = RECALC_PROGRESS_EVERY
    calibration_lookback: int = CALIBRATION_MAX_LOOKBACK
