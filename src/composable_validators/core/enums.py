"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    """Kinds of entries collected during a validation run.

    Values are strings to ease serialization and CLI interchange.
    """

    FAILURE = "failure"  # expected, data-driven validation failure
    UNIT_ERROR = "unit_error"  # a unit could not complete its check


class ErrorPolicy(str, Enum):
    """How the orchestrator treats a unit that raises during evaluation."""

    RECORD = "record"  # record a UNIT_ERROR entry and halt the run
    PROPAGATE = "propagate"  # abort the run and raise UnitExecutionError


__all__ = ["EntryKind", "ErrorPolicy"]
