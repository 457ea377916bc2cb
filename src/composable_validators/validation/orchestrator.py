"""Validation orchestrator.

Runs an ordered sequence of validation units against one value:
- units execute in the order given (the registry's sealed priority order)
- a failing unit with ``stop_on_error`` halts the run; later units never execute
- a unit with an ``outcome(value)`` method decides itself whether its failure
  halts the run (GatedUnit halts only when its gate fails)
- messages are collected in evaluation order
- units that raise are handled according to the configured ErrorPolicy
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Sequence

from composable_validators.core.enums import EntryKind, ErrorPolicy
from .config import DEFAULT_ERROR_POLICY
from .errors import UnitExecutionError
from .models import ValidationEntry, ValidationResult
from .units import ValidationUnit

if TYPE_CHECKING:
    from .registry import UnitRegistry

logger = logging.getLogger(__name__)


def normalize_messages(unit_name: str, raw: Any) -> List[str]:
    """Turn a unit's return value into a list of failure messages.

    Accepts None (no failure), one non-empty string, or a list/tuple of
    non-empty strings.

    Raises:
        UnitExecutionError: If the unit returned an empty message or an
            unsupported type. An empty string is ambiguous and never counts
            as "no failure".
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw:
            raise UnitExecutionError(unit_name, "returned an empty message")
        return [raw]
    if isinstance(raw, (list, tuple)):
        messages = list(raw)
        for message in messages:
            if not isinstance(message, str) or not message:
                raise UnitExecutionError(
                    unit_name, f"returned an invalid message {message!r}"
                )
        return messages
    raise UnitExecutionError(unit_name, f"returned unsupported type {type(raw).__name__}")


@dataclass
class ValidationRun:
    """State of one orchestration call. Never shared between calls."""

    value: Any
    entries: List[ValidationEntry] = field(default_factory=list)
    halted: bool = False
    cancelled: bool = False

    def to_result(self, tag: Optional[str] = None) -> ValidationResult:
        return ValidationResult(
            entries=tuple(self.entries),
            halted=self.halted,
            cancelled=self.cancelled,
            value=self.value,
            tag=tag,
        )


class Orchestrator:
    """Execute validation units in priority order and aggregate their messages.

    Error policies:
        RECORD (default): a unit that raises contributes one UNIT_ERROR entry
            and halts the run, so the pipeline never continues in an undefined
            state. The error is logged with its traceback.
        PROPAGATE: a unit that raises aborts the run and UnitExecutionError is
            raised to the caller, with the original exception as ``__cause__``.

    An orchestrator holds no per-run state and may be shared between threads.
    """

    def __init__(
        self,
        registry: Optional["UnitRegistry"] = None,
        error_policy: ErrorPolicy = DEFAULT_ERROR_POLICY,
    ) -> None:
        self.registry = registry
        self.error_policy = ErrorPolicy(error_policy)

    def validate(
        self,
        value: Any,
        tag: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> ValidationResult:
        """Validate a value against the units registered for ``tag``.

        The first call seals the registry.

        Raises:
            ValueError: If the orchestrator was built without a registry.
            UnitExecutionError: Under ErrorPolicy.PROPAGATE, if a unit raises.
        """
        if self.registry is None:
            raise ValueError("Orchestrator has no registry; call run() with explicit units")
        return self.run(value, self.registry.units_for(tag), cancel_event=cancel_event, tag=tag)

    def run(
        self,
        value: Any,
        units: Sequence[ValidationUnit],
        *,
        cancel_event: Optional[threading.Event] = None,
        tag: Optional[str] = None,
    ) -> ValidationResult:
        """Run ``units`` in the given order against ``value``.

        Args:
            value: The value to validate. May be None.
            units: Units in execution order.
            cancel_event: Checked before each unit. When set, the run stops and
                the entries collected so far are returned with ``cancelled=True``.
            tag: Recorded on the result for reporting.

        Returns:
            ValidationResult with entries in evaluation order.
        """
        run = ValidationRun(value=value)

        for unit in units:
            if run.halted:
                break
            if cancel_event is not None and cancel_event.is_set():
                run.cancelled = True
                logger.info("Validation run cancelled before unit %s", unit.name)
                break
            self._execute(unit, run)

        result = run.to_result(tag)
        logger.debug(
            "Validated %r (tag %s): %d entries, halted=%s",
            value,
            tag,
            len(result.entries),
            result.halted,
        )
        return result

    def _execute(self, unit: ValidationUnit, run: ValidationRun) -> None:
        logger.debug("Evaluating unit %s (priority %s)", unit.name, unit.priority)
        outcome = getattr(unit, "outcome", None)
        try:
            if outcome is not None:
                raw, halts = outcome(run.value)
            else:
                raw, halts = unit.evaluate(run.value), unit.stop_on_error
            messages = normalize_messages(unit.name, raw)
        except UnitExecutionError as e:
            # Raised by a nested orchestrator or by a broken return contract;
            # unit_name already names the unit at fault.
            self._handle_unit_error(run, e.unit_name, e.detail, e)
            return
        except Exception as e:  # pylint: disable=broad-except
            self._handle_unit_error(run, unit.name, f"{type(e).__name__}: {e}", e)
            return

        if not messages:
            return

        run.entries.extend(ValidationEntry(unit=unit.name, message=m) for m in messages)
        if halts:
            run.halted = True
            logger.debug("Unit %s failed with stop_on_error; halting run", unit.name)

    def _handle_unit_error(
        self, run: ValidationRun, unit_name: str, detail: str, exc: Exception
    ) -> None:
        if self.error_policy is ErrorPolicy.PROPAGATE:
            logger.debug("Unit %s failed to execute; propagating: %s", unit_name, detail)
            if isinstance(exc, UnitExecutionError):
                raise exc
            raise UnitExecutionError(unit_name, detail) from exc

        logger.error("Unit %s failed to execute: %s", unit_name, detail, exc_info=exc)
        run.entries.append(
            ValidationEntry(
                unit=unit_name,
                message=f"unit execution error: {detail}",
                kind=EntryKind.UNIT_ERROR,
            )
        )
        run.halted = True
