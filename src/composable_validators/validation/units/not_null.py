"""Not-null validation unit.

A missing value makes every other check meaningless, so this unit runs first
and stops the run when it fails. It is the usual gate of a GatedUnit.
"""

from __future__ import annotations

from typing import Any, List

from ..config import NOT_NULL_PRIORITY


class NotNullUnit:
    """Fail when the value is absent."""

    def __init__(
        self,
        name: str = "not_null",
        priority: int = NOT_NULL_PRIORITY,
        stop_on_error: bool = True,
        message: str = "must not be null",
        reject_blank: bool = False,
    ) -> None:
        self.name = name
        self.priority = priority
        self.stop_on_error = stop_on_error
        self.message = message
        self.reject_blank = reject_blank

    def evaluate(self, value: Any) -> List[str]:
        if value is None:
            return [self.message]
        if self.reject_blank and isinstance(value, str) and not value.strip():
            return [self.message]
        return []

    def __repr__(self) -> str:
        return f"NotNullUnit(name={self.name!r}, priority={self.priority})"
