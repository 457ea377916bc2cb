"""Adapt plain functions into validation units.

Example:
    ```python
    @unit(priority=50)
    def no_spaces(value):
        if value is not None and " " in value:
            return "must not contain spaces"
        return None
    ```
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Union

from ..config import DEFAULT_PRIORITY

UnitResult = Union[None, str, Sequence[str]]


class FunctionUnit:
    """A ValidationUnit whose check is a plain callable.

    The callable may return None (no failure), one message, or a sequence of
    messages; the orchestrator normalizes all three.
    """

    def __init__(
        self,
        func: Callable[[Any], UnitResult],
        name: Optional[str] = None,
        priority: int = DEFAULT_PRIORITY,
        stop_on_error: bool = False,
    ) -> None:
        self.func = func
        self.name = name or func.__name__
        self.priority = priority
        self.stop_on_error = stop_on_error

    def evaluate(self, value: Any) -> UnitResult:
        return self.func(value)

    def __repr__(self) -> str:
        return (
            f"FunctionUnit(name={self.name!r}, priority={self.priority}, "
            f"stop_on_error={self.stop_on_error})"
        )


def unit(
    name: Optional[str] = None,
    priority: int = DEFAULT_PRIORITY,
    stop_on_error: bool = False,
) -> Callable[[Callable[[Any], UnitResult]], FunctionUnit]:
    """Decorator turning a function into a FunctionUnit."""

    def decorator(func: Callable[[Any], UnitResult]) -> FunctionUnit:
        return FunctionUnit(func, name=name, priority=priority, stop_on_error=stop_on_error)

    return decorator
