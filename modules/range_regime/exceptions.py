"""Errors raised at the orchestration boundary of range regime classification."""

from typing import List


class ThresholdValidationError(ValueError):
    """One or more threshold update values are out of range or not numeric."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class ThresholdsNotConfiguredError(LookupError):
    """No global threshold configuration has been stored yet."""


class ItemNotFoundError(LookupError):
    """The requested item does not exist in the item store."""

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")
