"""Length bound validation units.

Absent values pass: checking presence is the not-null gate's job. Values
without a length are a unit execution error, not a validation failure.
"""

from __future__ import annotations

from typing import Any, List

from ..config import MAX_LENGTH_PRIORITY, MIN_LENGTH_PRIORITY


class MinLengthUnit:
    """Fail when the value is shorter than ``min_length``."""

    def __init__(
        self,
        min_length: int,
        name: str = "min_length",
        priority: int = MIN_LENGTH_PRIORITY,
        stop_on_error: bool = False,
    ) -> None:
        if min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {min_length}")
        self.min_length = min_length
        self.name = name
        self.priority = priority
        self.stop_on_error = stop_on_error

    def evaluate(self, value: Any) -> List[str]:
        if value is None:
            return []
        if len(value) < self.min_length:
            return [f"must be at least {self.min_length} characters"]
        return []


class MaxLengthUnit:
    """Fail when the value is longer than ``max_length``."""

    def __init__(
        self,
        max_length: int,
        name: str = "max_length",
        priority: int = MAX_LENGTH_PRIORITY,
        stop_on_error: bool = False,
    ) -> None:
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        self.max_length = max_length
        self.name = name
        self.priority = priority
        self.stop_on_error = stop_on_error

    def evaluate(self, value: Any) -> List[str]:
        if value is None:
            return []
        if len(value) > self.max_length:
            return [f"must be at most {self.max_length} characters"]
        return []
