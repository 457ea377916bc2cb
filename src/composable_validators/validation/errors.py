"""Exceptions raised by the validation framework.

Validation failures are never raised; they are carried as entries in a
ValidationResult. The exceptions here cover setup misuse (registration after
sealing, duplicate units) and, under ErrorPolicy.PROPAGATE, units that could
not complete their check.
"""

from __future__ import annotations


class ComposableValidatorsError(Exception):
    """Base class for all errors raised by this package."""


class ValidationSetupError(ComposableValidatorsError, ValueError):
    """Raised when the registry is used incorrectly during setup."""


class RegistrySealedError(ValidationSetupError):
    """Raised when registering a unit after the registry has been read."""

    def __init__(self, unit_name: str, tag: str) -> None:
        super().__init__(
            f"Cannot register unit '{unit_name}' for tag '{tag}': registry is sealed. "
            f"Register all units before the first validation run."
        )
        self.unit_name = unit_name
        self.tag = tag


class DuplicateRegistrationError(ValidationSetupError):
    """Raised when the same unit (or a unit with the same name) is registered twice."""

    def __init__(self, unit_name: str, tag: str) -> None:
        super().__init__(f"Unit '{unit_name}' is already registered for tag '{tag}'")
        self.unit_name = unit_name
        self.tag = tag


class UnitExecutionError(ComposableValidatorsError, RuntimeError):
    """A unit raised (or broke its return contract) while evaluating a value.

    The original exception, if any, is chained as ``__cause__``.
    """

    def __init__(self, unit_name: str, detail: str) -> None:
        super().__init__(f"Unit '{unit_name}' failed to execute: {detail}")
        self.unit_name = unit_name
        self.detail = detail


__all__ = [
    "ComposableValidatorsError",
    "ValidationSetupError",
    "RegistrySealedError",
    "DuplicateRegistrationError",
    "UnitExecutionError",
]
