"""Global threshold configuration store."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from modules.range_regime.config.thresholds_config import DEFAULT_THRESHOLDS
from modules.range_regime.exceptions import ThresholdsNotConfiguredError
from modules.range_regime.models import Thresholds
from modules.range_regime.utils.validation import validate_threshold_updates


class InMemoryThresholdStore:
    """
    Holds the single global threshold configuration.

    The store is seeded with the default thresholds unless ``seed`` is
    explicitly passed as None, in which case ``get_global`` raises until
    a full configuration is written with ``set_global``.
    """

    _UNSEEDED = object()

    def __init__(self, seed: Any = _UNSEEDED):
        self._lock = threading.Lock()
        self._thresholds: Optional[Thresholds] = DEFAULT_THRESHOLDS if seed is self._UNSEEDED else seed

    def get_global(self) -> Thresholds:
        with self._lock:
            if self._thresholds is None:
                raise ThresholdsNotConfiguredError("Global threshold configuration has not been seeded")
            return self._thresholds

    def set_global(self, thresholds: Thresholds) -> None:
        with self._lock:
            self._thresholds = thresholds

    def update_global(self, updates: Dict[str, Any]) -> Thresholds:
        """Validate a partial update, merge it and return the new configuration."""
        clean = validate_threshold_updates(updates)
        with self._lock:
            if self._thresholds is None:
                raise ThresholdsNotConfiguredError("Global threshold configuration has not been seeded")
            self._thresholds = self._thresholds.merge(clean)
            return self._thresholds


__all__ = ["InMemoryThresholdStore"]
