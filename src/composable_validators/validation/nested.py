"""Gated delegation to a nested set of units.

A GatedUnit factors a shared precondition (typically not-null) out of many
dependent checks. When the gate fails, its messages are returned and the
nested units never run. Otherwise the nested units run through a
sub-orchestrator with the same ordering and short-circuit rules, and their
messages are flattened into the outer run.

Example:
    ```python
    checks = UnitRegistry()
    checks.register(MaxLengthUnit(30), "username")
    checks.register(DenylistUnit(denylist), "username")

    registry = UnitRegistry()
    registry.register(GatedUnit(NotNullUnit(), checks, "username"), "username")
    ```
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from composable_validators.core.enums import ErrorPolicy
from .errors import UnitExecutionError
from .orchestrator import Orchestrator, normalize_messages
from .units import ValidationUnit

if TYPE_CHECKING:
    from .registry import UnitRegistry

logger = logging.getLogger(__name__)


class GatedUnit:
    """A unit that runs a gate, then delegates to a nested registry.

    Args:
        gate: Unit checked first. If it reports failures, they are returned as
            this unit's result and the nested units are skipped.
        registry: Registry holding the nested units.
        tag: Tag of the nested units within ``registry``.
        name: Defaults to ``"<gate name>[<tag>]"``.
        priority: Defaults to the gate's priority.
        stop_on_error: Defaults to the gate's ``stop_on_error``. Only a gate
            failure halts the outer run; failures from the nested units never do.

    Execution errors inside the nested run are raised as UnitExecutionError
    naming the nested unit, so the outer orchestrator applies its own policy.
    """

    def __init__(
        self,
        gate: ValidationUnit,
        registry: "UnitRegistry",
        tag: str,
        *,
        name: Optional[str] = None,
        priority: Optional[int] = None,
        stop_on_error: Optional[bool] = None,
    ) -> None:
        self.gate = gate
        self.registry = registry
        self.tag = tag
        self.name = name or f"{gate.name}[{tag}]"
        self.priority = gate.priority if priority is None else priority
        self.stop_on_error = gate.stop_on_error if stop_on_error is None else stop_on_error
        self._orchestrator = Orchestrator(registry, error_policy=ErrorPolicy.PROPAGATE)

    @property
    def sub_units(self) -> Tuple[ValidationUnit, ...]:
        """Nested units in execution order. Reading them seals the nested registry."""
        return self.registry.units_for(self.tag)

    def evaluate(self, value: Any) -> List[str]:
        return self.outcome(value)[0]

    def outcome(self, value: Any) -> Tuple[List[str], bool]:
        """Return the messages and whether they should halt the outer run."""
        try:
            gate_messages = normalize_messages(self.gate.name, self.gate.evaluate(value))
        except UnitExecutionError:
            raise
        except Exception as e:  # pylint: disable=broad-except
            raise UnitExecutionError(self.gate.name, f"{type(e).__name__}: {e}") from e

        if gate_messages:
            logger.debug("Gate %s failed; skipping nested units for tag %s", self.gate.name, self.tag)
            return gate_messages, self.stop_on_error

        return self._orchestrator.validate(value, self.tag).messages, False

    def __repr__(self) -> str:
        return f"GatedUnit(name={self.name!r}, gate={self.gate.name!r}, tag={self.tag!r})"
