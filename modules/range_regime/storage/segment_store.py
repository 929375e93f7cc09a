"""Per-item regime segment store."""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Dict, Hashable, List, Optional, Sequence

from modules.range_regime.models import RegimeSegment, Timestamp


class InMemorySegmentStore:
    """
    Stores regime segments per item.

    Segments are kept as the immutable ``RegimeSegment`` values themselves.
    ``replace_all`` runs delete-then-insert under the store lock, so a
    reader never sees an item half replaced.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._segments: Dict[Hashable, List[RegimeSegment]] = defaultdict(list)

    def delete_by_item(self, item_id: Hashable) -> int:
        with self._lock:
            return len(self._segments.pop(item_id, []))

    def insert_many(self, item_id: Hashable, segments: Sequence[RegimeSegment]) -> int:
        with self._lock:
            self._segments[item_id].extend(segments)
            return len(segments)

    def replace_all(self, item_id: Hashable, segments: Sequence[RegimeSegment]) -> int:
        """Replace every stored segment of an item; returns the number inserted."""
        with self._lock:
            self._segments[item_id] = list(segments)
            return len(segments)

    def query_by_item(
        self,
        item_id: Hashable,
        start_ts: Optional[Timestamp] = None,
        end_ts: Optional[Timestamp] = None,
    ) -> List[RegimeSegment]:
        """
        Segments of an item ordered by start time.

        Args:
            item_id: Item identifier.
            start_ts: Keep segments with ``start_ts >= start_ts``.
            end_ts: Keep segments with ``end_ts <= end_ts``.
        """
        with self._lock:
            segments = list(self._segments.get(item_id, []))

        if start_ts is not None:
            segments = [segment for segment in segments if segment.start_ts >= start_ts]
        if end_ts is not None:
            segments = [segment for segment in segments if segment.end_ts <= end_ts]
        return sorted(segments, key=lambda segment: segment.start_ts)


__all__ = ["InMemorySegmentStore"]
