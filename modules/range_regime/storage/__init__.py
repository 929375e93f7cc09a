"""
In-memory stores for thresholds, segments and item price history.
"""

from modules.range_regime.storage.threshold_store import InMemoryThresholdStore
from modules.range_regime.storage.segment_store import InMemorySegmentStore
from modules.range_regime.storage.item_store import InMemoryItemStore

__all__ = [
    "InMemoryThresholdStore",
    "InMemorySegmentStore",
    "InMemoryItemStore",
]
