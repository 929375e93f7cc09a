"""
Price point construction.

Raw market rows carry a high (sell) and a low (buy) price. The classifier
works on a single price per row: the high price, falling back to the low
price, falling back to 0.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from modules.config import (
    DEFAULT_ITEM_COLUMN,
    DEFAULT_PRICE_COLUMN,
    DEFAULT_TIMESTAMP_COLUMN,
    FALLBACK_PRICE_COLUMN,
)
from modules.range_regime.models import PricePoint


def _is_missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


def select_price(high_price: Any, low_price: Any) -> float:
    """High price, else low price, else 0."""
    if not _is_missing(high_price):
        return float(high_price)
    if not _is_missing(low_price):
        return float(low_price)
    return 0.0


def build_price_points(rows: Sequence[Dict[str, Any]]) -> List[PricePoint]:
    """
    Convert chronologically ordered raw rows into price points.

    Args:
        rows: Dicts with ``high_price``, ``low_price`` and ``synced_at`` keys.

    Returns:
        Price points indexed by their position in ``rows``.
    """
    return [
        PricePoint(
            price=select_price(row.get(DEFAULT_PRICE_COLUMN), row.get(FALLBACK_PRICE_COLUMN)),
            timestamp=pd.Timestamp(row.get(DEFAULT_TIMESTAMP_COLUMN)),
            index=position,
        )
        for position, row in enumerate(rows)
    ]


def price_points_from_frame(
    df: Optional[pd.DataFrame],
    price_column: Optional[str] = None,
    timestamp_column: str = DEFAULT_TIMESTAMP_COLUMN,
) -> List[PricePoint]:
    """
    Convert a price history DataFrame into price points.

    The frame is sorted by timestamp first. With ``price_column`` the prices
    are read from that column directly; otherwise the high/low fallback rule
    is applied.

    Args:
        df: Price history with a timestamp column.
        price_column: Optional single price column (e.g. "close").
        timestamp_column: Timestamp column name (default: "synced_at").

    Returns:
        Price points, empty for a missing or empty frame.
    """
    if df is None or df.empty:
        return []
    if timestamp_column not in df.columns:
        raise ValueError(f"Price history is missing the '{timestamp_column}' column")

    ordered = df.sort_values(timestamp_column, kind="mergesort").reset_index(drop=True)
    timestamps = pd.to_datetime(ordered[timestamp_column])

    if price_column is not None:
        if price_column not in ordered.columns:
            raise ValueError(f"Price history is missing the '{price_column}' column")
        prices = ordered[price_column].fillna(0.0).astype(float).tolist()
    else:
        highs = ordered[DEFAULT_PRICE_COLUMN] if DEFAULT_PRICE_COLUMN in ordered.columns else [None] * len(ordered)
        lows = ordered[FALLBACK_PRICE_COLUMN] if FALLBACK_PRICE_COLUMN in ordered.columns else [None] * len(ordered)
        prices = [select_price(high, low) for high, low in zip(highs, lows)]

    return [
        PricePoint(price=price, timestamp=timestamp, index=position)
        for position, (price, timestamp) in enumerate(zip(prices, timestamps))
    ]


def load_price_history_frame(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load a price history CSV.

    Accepts either the raw market layout (``high_price``, ``low_price``,
    ``synced_at``, optionally ``item_id``) or a simple ``timestamp``/``price``
    layout, which is renamed to the raw layout.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no usable timestamp or price column is present.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Price history file not found: {csv_path}")

    df = pd.read_csv(csv_path)
    rename = {}
    if DEFAULT_TIMESTAMP_COLUMN not in df.columns and "timestamp" in df.columns:
        rename["timestamp"] = DEFAULT_TIMESTAMP_COLUMN
    if DEFAULT_PRICE_COLUMN not in df.columns and "price" in df.columns:
        rename["price"] = DEFAULT_PRICE_COLUMN
    df = df.rename(columns=rename)

    if DEFAULT_TIMESTAMP_COLUMN not in df.columns:
        raise ValueError(f"{csv_path.name}: expected a '{DEFAULT_TIMESTAMP_COLUMN}' or 'timestamp' column")
    if DEFAULT_PRICE_COLUMN not in df.columns and FALLBACK_PRICE_COLUMN not in df.columns:
        raise ValueError(f"{csv_path.name}: expected a price column ('{DEFAULT_PRICE_COLUMN}', '{FALLBACK_PRICE_COLUMN}' or 'price')")

    df[DEFAULT_TIMESTAMP_COLUMN] = pd.to_datetime(df[DEFAULT_TIMESTAMP_COLUMN])
    if DEFAULT_ITEM_COLUMN not in df.columns:
        df[DEFAULT_ITEM_COLUMN] = csv_path.stem
    return df


__all__ = [
    "select_price",
    "build_price_points",
    "price_points_from_frame",
    "load_price_history_frame",
]
