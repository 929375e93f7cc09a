"""Item metadata and raw price history store."""

from __future__ import annotations

import threading
from typing import Any, Dict, Hashable, List, Optional

import pandas as pd

from modules.config import (
    DEFAULT_ITEM_COLUMN,
    DEFAULT_PRICE_COLUMN,
    DEFAULT_TIMESTAMP_COLUMN,
    FALLBACK_PRICE_COLUMN,
)
from modules.range_regime.exceptions import ItemNotFoundError
from modules.range_regime.models import RegimeLabel


class InMemoryItemStore:
    """
    Holds items, their current regime and their raw price history rows.

    Price rows are dicts with ``high_price``, ``low_price`` and ``synced_at``
    keys, kept in chronological order.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[Hashable, Dict[str, Any]] = {}
        self._prices: Dict[Hashable, List[Dict[str, Any]]] = {}

    def add_item(self, item_id: Hashable, name: Optional[str] = None) -> None:
        with self._lock:
            self._items.setdefault(item_id, {"name": name or str(item_id), "current_regime": None})

    def exists(self, item_id: Hashable) -> bool:
        with self._lock:
            return item_id in self._items

    def item_ids(self) -> List[Hashable]:
        with self._lock:
            return list(self._items)

    def get_current_regime(self, item_id: Hashable) -> Optional[RegimeLabel]:
        with self._lock:
            if item_id not in self._items:
                raise ItemNotFoundError(item_id)
            return self._items[item_id]["current_regime"]

    def set_current_regime(self, item_id: Hashable, label: Optional[RegimeLabel]) -> None:
        with self._lock:
            if item_id not in self._items:
                raise ItemNotFoundError(item_id)
            self._items[item_id]["current_regime"] = label

    def add_prices(self, item_id: Hashable, rows: List[Dict[str, Any]]) -> None:
        """Append price rows for an item, creating the item if needed."""
        self.add_item(item_id)
        with self._lock:
            history = self._prices.setdefault(item_id, [])
            history.extend(rows)
            history.sort(key=lambda row: pd.Timestamp(row[DEFAULT_TIMESTAMP_COLUMN]))

    def item_ids_with_prices(self) -> List[Hashable]:
        with self._lock:
            return [item_id for item_id, rows in self._prices.items() if rows]

    def get_recent_prices(self, item_id: Hashable, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Most recent ``limit`` rows of an item, in chronological order."""
        with self._lock:
            rows = list(self._prices.get(item_id, []))
        if limit is not None:
            rows = rows[-limit:] if limit > 0 else []
        return rows

    def load_price_history_frame(self, df: pd.DataFrame) -> int:
        """
        Load price rows from a DataFrame with an ``item_id`` column.

        Returns:
            Number of items loaded.
        """
        if df is None or df.empty:
            return 0

        loaded = 0
        for item_id, group in df.groupby(DEFAULT_ITEM_COLUMN, sort=False):
            rows = [
                {
                    DEFAULT_PRICE_COLUMN: row.get(DEFAULT_PRICE_COLUMN),
                    FALLBACK_PRICE_COLUMN: row.get(FALLBACK_PRICE_COLUMN),
                    DEFAULT_TIMESTAMP_COLUMN: pd.Timestamp(row[DEFAULT_TIMESTAMP_COLUMN]),
                }
                for row in group.to_dict("records")
            ]
            self.add_prices(item_id, rows)
            loaded += 1
        return loaded


__all__ = ["InMemoryItemStore"]
