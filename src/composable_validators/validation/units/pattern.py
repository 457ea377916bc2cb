"""Regular-expression validation unit."""

from __future__ import annotations

import re
from typing import Any, List, Optional

from ..config import PATTERN_PRIORITY


class PatternUnit:
    """Fail when the value does not fully match ``pattern``.

    Absent values pass. Non-string values raise TypeError, which the
    orchestrator reports as a unit execution error.
    """

    def __init__(
        self,
        pattern: str,
        name: str = "pattern",
        priority: int = PATTERN_PRIORITY,
        stop_on_error: bool = False,
        message: Optional[str] = None,
    ) -> None:
        self.pattern = re.compile(pattern)
        self.name = name
        self.priority = priority
        self.stop_on_error = stop_on_error
        self.message = message or f"must match pattern {pattern!r}"

    def evaluate(self, value: Any) -> List[str]:
        if value is None:
            return []
        if self.pattern.fullmatch(value) is None:
            return [self.message]
        return []
