"""
Range regime classification service.

Orchestrates the pure core (classifier, segment builder, calibration) against
the threshold, segment and item stores. This is the only layer that touches
stores and the only layer that validates user supplied thresholds.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Sequence

import pandas as pd

from modules.config import CALIBRATION_MAX_ITEMS, DEFAULT_STEP_SIZE
from modules.common.utils import log_progress, log_success, log_warn
from modules.range_regime.config.recalculation_config import RecalculationConfig
from modules.range_regime.core.calibration import auto_calibrate_thresholds
from modules.range_regime.core.classifier import classify_regime
from modules.range_regime.core.export import build_feature_frame, segments_to_frame
from modules.range_regime.core.segment_builder import build_segments
from modules.range_regime.exceptions import ItemNotFoundError
from modules.range_regime.models import (
    PricePoint,
    RegimeLabel,
    RegimeSegment,
    SuggestedThresholds,
    Thresholds,
    Timestamp,
)
from modules.range_regime.storage.item_store import InMemoryItemStore
from modules.range_regime.storage.segment_store import InMemorySegmentStore
from modules.range_regime.storage.threshold_store import InMemoryThresholdStore
from modules.range_regime.utils.price_points import build_price_points


@dataclass
class RecalculationSummary:
    """Outcome of a batch recalculation.

    Attributes:
        items_processed: Items whose segments were saved.
        segments_created: Total segments saved across items.
        skipped_items: Items with too little history or no segments.
        failed_items: Items whose processing raised; the batch continued.
        interrupted: True if the run was stopped by the user.
    """
    items_processed: int = 0
    segments_created: int = 0
    skipped_items: List[Hashable] = field(default_factory=list)
    failed_items: List[Hashable] = field(default_factory=list)
    interrupted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items_processed": self.items_processed,
            "segments_created": self.segments_created,
            "skipped_items": list(self.skipped_items),
            "failed_items": list(self.failed_items),
            "interrupted": self.interrupted,
        }


@dataclass
class CalibrationReport:
    """Calibration result over stored items."""
    suggested: SuggestedThresholds
    items_sampled: int
    window_size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggested": {
                "chop_max": self.suggested.chop_max,
                "range_norm_max": self.suggested.range_norm_max,
                "slope_norm_max": self.suggested.slope_norm_max,
                "cross_rate_min": self.suggested.cross_rate_min,
            },
            "stats": {
                "chop": self.suggested.chop_stats.to_dict(),
                "range_norm": self.suggested.range_norm_stats.to_dict(),
                "slope_norm": self.suggested.slope_norm_stats.to_dict(),
                "cross_rate": self.suggested.cross_rate_stats.to_dict(),
            },
            "meta": {
                "items_sampled": self.items_sampled,
                "windows_analyzed": self.suggested.window_count,
                "window_size": self.window_size,
            },
        }


def segment_to_dict(segment: RegimeSegment) -> Dict[str, Any]:
    """Stored row layout of a segment."""
    return segment.to_dict()


def latest_segment(segments: Sequence[RegimeSegment]) -> Optional[RegimeSegment]:
    """Segment with the latest end time; the first one seen wins on an exact tie."""
    latest: Optional[RegimeSegment] = None
    for segment in segments:
        if latest is None or segment.end_ts > latest.end_ts:
            latest = segment
    return latest


class RegimeClassificationService:
    """
    Classifies items into range regimes and persists the resulting segments.

    Args:
        threshold_store: Source of the global thresholds.
        segment_store: Destination of computed segments.
        item_store: Items, current regime and raw price history.
        config: Batch recalculation settings.
    """

    def __init__(
        self,
        threshold_store: Optional[InMemoryThresholdStore] = None,
        segment_store: Optional[InMemorySegmentStore] = None,
        item_store: Optional[InMemoryItemStore] = None,
        config: Optional[RecalculationConfig] = None,
    ):
        self.threshold_store = threshold_store or InMemoryThresholdStore()
        self.segment_store = segment_store or InMemorySegmentStore()
        self.item_store = item_store or InMemoryItemStore()
        self.config = config or RecalculationConfig()

    # ------------------------------------------------------------------
    # Thresholds
    # ------------------------------------------------------------------

    def get_thresholds(self) -> Thresholds:
        return self.threshold_store.get_global()

    def update_thresholds(self, updates: Dict[str, Any]) -> Thresholds:
        """Validate and merge a partial threshold update into the global configuration."""
        return self.threshold_store.update_global(updates)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify_item(self, item_id: Hashable, prices: Sequence[PricePoint]) -> List[RegimeSegment]:
        """
        Classify one item's price series into segments, without persisting.

        Args:
            item_id: Item identifier (kept for symmetry with ``save_segments``).
            prices: Chronologically ordered price points with consecutive
                indices; the first may sit anywhere in the full history.

        Returns:
            Segments, empty when the series is shorter than the window size.
        """
        thresholds = self.threshold_store.get_global()
        labels = classify_regime(prices, thresholds.window_size, thresholds, step_size=DEFAULT_STEP_SIZE)
        index_offset = prices[0].index if len(prices) > 0 else 0
        return build_segments(
            labels,
            [point.price for point in prices],
            index_offset=index_offset,
        )

    def save_segments(self, item_id: Hashable, segments: Sequence[RegimeSegment]) -> int:
        """
        Replace an item's stored segments and update its current regime.

        Returns:
            Number of segments stored.
        """
        stored = self.segment_store.replace_all(item_id, segments)

        latest = latest_segment(segments)
        if latest is not None and self.item_store.exists(item_id):
            self.item_store.set_current_regime(item_id, latest.label)
        return stored

    def get_segments(
        self,
        item_id: Hashable,
        start_ts: Optional[Timestamp] = None,
        end_ts: Optional[Timestamp] = None,
    ) -> List[RegimeSegment]:
        return self.segment_store.query_by_item(item_id, start_ts=start_ts, end_ts=end_ts)

    def get_segments_frame(self, item_id: Hashable) -> pd.DataFrame:
        return segments_to_frame(self.get_segments(item_id))

    def get_current_regime(self, item_id: Hashable) -> Optional[RegimeLabel]:
        return self.item_store.get_current_regime(item_id)

    # ------------------------------------------------------------------
    # Batch recalculation
    # ------------------------------------------------------------------

    def _load_points(self, item_id: Hashable, window_size: int) -> List[PricePoint]:
        limit = window_size * self.config.lookback_multiplier
        return build_price_points(self.item_store.get_recent_prices(item_id, limit))

    def _process_item(self, item_id: Hashable, window_size: int) -> Optional[int]:
        """Classify and save one item. Returns the segment count, or None if skipped."""
        points = self._load_points(item_id, window_size)
        if len(points) < window_size:
            return None

        segments = self.classify_item(item_id, points)
        if not segments:
            return None
        return self.save_segments(item_id, segments)

    def _record(self, summary: RecalculationSummary, item_id: Hashable, result: Optional[int]) -> None:
        if result is None:
            summary.skipped_items.append(item_id)
        else:
            summary.items_processed += 1
            summary.segments_created += result

    def _report_progress(self, summary: RecalculationSummary, done: int, total: int) -> None:
        every = max(1, self.config.progress_every)
        if done % every == 0 or done == total:
            log_progress(
                f"Processed {done}/{total} items... "
                f"Saved {summary.items_processed}, "
                f"Skipped {len(summary.skipped_items)}, Errors {len(summary.failed_items)}"
            )

    def _recalculate_sequential(self, item_ids: List[Hashable], window_size: int) -> RecalculationSummary:
        summary = RecalculationSummary()
        total = len(item_ids)

        for idx, item_id in enumerate(item_ids, 1):
            try:
                self._record(summary, item_id, self._process_item(item_id, window_size))
            except KeyboardInterrupt:
                log_warn("Recalculation interrupted by user")
                summary.interrupted = True
                break
            except Exception as e:
                summary.failed_items.append(item_id)
                log_warn(
                    f"Error processing item {item_id}: {type(e).__name__}: {e}. "
                    f"Skipping and continuing..."
                )
            self._report_progress(summary, idx, total)

        return summary

    def _recalculate_threadpool(self, item_ids: List[Hashable], window_size: int) -> RecalculationSummary:
        summary = RecalculationSummary()
        total = len(item_ids)
        max_workers = self.config.max_workers or min(32, total + 4)
        completed = 0

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_item = {
                executor.submit(self._process_item, item_id, window_size): item_id
                for item_id in item_ids
            }
            try:
                for future in as_completed(future_to_item):
                    item_id = future_to_item[future]
                    completed += 1
                    try:
                        self._record(summary, item_id, future.result())
                    except Exception as e:
                        summary.failed_items.append(item_id)
                        log_warn(
                            f"Error processing item {item_id}: {type(e).__name__}: {e}. "
                            f"Skipping and continuing..."
                        )
                    self._report_progress(summary, completed, total)
            except KeyboardInterrupt:
                log_warn("Recalculation interrupted by user")
                summary.interrupted = True
                for future in future_to_item:
                    future.cancel()

        return summary

    def recalculate(self, item_id: Optional[Hashable] = None) -> RecalculationSummary:
        """
        Recalculate and save segments for one item or every item with price history.

        Each item is classified from its ``window_size * lookback_multiplier``
        most recent prices. A failing item is logged and recorded, and the
        batch moves on.

        Raises:
            ItemNotFoundError: If ``item_id`` is given and unknown.
        """
        thresholds = self.threshold_store.get_global()

        if item_id is not None:
            if not self.item_store.exists(item_id):
                raise ItemNotFoundError(item_id)
            item_ids = [item_id]
        else:
            item_ids = self.item_store.item_ids_with_prices()

        if not item_ids:
            log_warn("No items with price history to recalculate")
            return RecalculationSummary()

        log_progress(f"Recalculating regimes for {len(item_ids)} items (window_size={thresholds.window_size})...")

        if self.config.use_threads and len(item_ids) > 1:
            summary = self._recalculate_threadpool(item_ids, thresholds.window_size)
        else:
            summary = self._recalculate_sequential(item_ids, thresholds.window_size)

        log_success(
            f"Recalculation complete: {summary.items_processed} items, "
            f"{summary.segments_created} segments created"
        )
        if summary.failed_items:
            log_warn(f"Failed items: {', '.join(str(i) for i in summary.failed_items[:10])}")
        return summary

    # ------------------------------------------------------------------
    # Calibration and export
    # ------------------------------------------------------------------

    def calibrate(
        self,
        item_ids: Optional[Sequence[Hashable]] = None,
        max_items: Optional[int] = CALIBRATION_MAX_ITEMS,
    ) -> CalibrationReport:
        """
        Suggest thresholds from the price distributions of stored items.

        Args:
            item_ids: Items to sample (default: every item with price history).
            max_items: Optional cap on the number of items sampled.
        """
        window_size = self.threshold_store.get_global().window_size
        candidates = list(item_ids) if item_ids is not None else self.item_store.item_ids_with_prices()
        if max_items is not None:
            candidates = candidates[:max_items]

        all_prices: List[List[float]] = []
        for candidate in candidates:
            points = build_price_points(
                self.item_store.get_recent_prices(candidate, self.config.calibration_lookback)
            )
            if len(points) >= window_size:
                all_prices.append([point.price for point in points])

        suggested = auto_calibrate_thresholds(all_prices, window_size)
        return CalibrationReport(suggested=suggested, items_sampled=len(all_prices), window_size=window_size)

    def export_item(self, item_id: Hashable) -> pd.DataFrame:
        """
        Per-point features and labels of an item's full stored history.

        Raises:
            ItemNotFoundError: If the item is unknown.
        """
        if not self.item_store.exists(item_id):
            raise ItemNotFoundError(item_id)

        thresholds = self.threshold_store.get_global()
        points = build_price_points(self.item_store.get_recent_prices(item_id))
        return build_feature_frame(points, thresholds, thresholds.window_size)


__all__ = [
    "RecalculationSummary",
    "CalibrationReport",
    "RegimeClassificationService",
    "segment_to_dict",
    "latest_segment",
]
