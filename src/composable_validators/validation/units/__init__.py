"""Validation units base interface.

This module defines the protocol (interface) that all validation units must implement.
Each unit is responsible for one atomic check against a single input value (e.g.,
not-null, maximum length, denied words).

To implement a new validation unit:

1. Create a new file in this directory (e.g., `my_unit.py`)
2. Define a class that implements the ValidationUnit protocol
3. Implement the required attributes and `evaluate()`
4. Register an instance with a UnitRegistry under the input-type tag it applies to

Example:
    ```python
    # units/my_unit.py
    from typing import Any, List

    class NoSpacesUnit:
        name = "no_spaces"
        priority = 50
        stop_on_error = False

        def evaluate(self, value: Any) -> List[str]:
            if value is None:
                return []  # absence is the not-null gate's concern
            return ["must not contain spaces"] if " " in value else []
    ```
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class ValidationUnit(Protocol):
    """Protocol defining the interface for validation units.

    All validation units must implement this interface. Use duck typing
    (Protocol) for flexibility - no need to inherit from a base class.

    Attributes:
        name: Identifier used in results and logs. Unique per input-type tag.
        priority: Rank within a tag. Lower values run first.
        stop_on_error: If True and this unit fails, no later unit in the same run executes.

    A unit may also define ``outcome(value) -> (messages, halts)`` to decide per
    call whether its failure halts the run. GatedUnit uses this so that only a
    failing gate halts.
    """

    name: str
    priority: int
    stop_on_error: bool

    def evaluate(self, value: Any) -> Sequence[str]:
        """Check a single value.

        Args:
            value: The value to check. May be None; units must handle absence
                explicitly instead of dereferencing it.

        Returns:
            Ordered failure messages. An empty sequence means the value passed.
            Returning None or a single non-empty string is also accepted.

        Raises:
            Any exception raised here is treated as a unit execution error,
            never as an ordinary validation failure.

        Examples:
            >>> unit.evaluate("alice")
            []
            >>> unit.evaluate("a")
            ['must be at least 3 characters']
        """
        ...


__all__ = ["ValidationUnit"]
