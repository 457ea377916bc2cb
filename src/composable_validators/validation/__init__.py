"""Validation system for composable field validators.

This module provides an in-process framework for running independent
validation units against a value:

- **Units**: ValidationUnit protocol and built-in units (see validation/units/)
- **Registry**: UnitRegistry - units per input-type tag, sealed priority order
- **Orchestrator**: Orchestrator - runs units, short-circuits, aggregates messages
- **Nested**: GatedUnit - a gate unit delegating to a nested registry
- **Models**: ValidationEntry, ValidationResult, BatchReport
- **Config**: priorities and built-in unit parameters (import from .config)

Public API:
    UnitRegistry: Register units at setup, read them in execution order
    Orchestrator: Validate a value against the units of a tag
    GatedUnit: Factor a shared precondition out of many dependent units
    build_default_registry: Built-in username rules
    validate_values / validate_csv: Validate many values at once

Usage:
    >>> from composable_validators.validation import Orchestrator, build_default_registry
    >>> orchestrator = Orchestrator(build_default_registry())
    >>> orchestrator.validate(None, "username").messages
    ['must not be null']

For implementation details:
    - See validation/units/__init__.py for unit interface conventions
    - See validation/orchestrator.py for ordering, halting and error policies
    - See validation/config.py for priorities and defaults
"""

from __future__ import annotations

from composable_validators.core.enums import EntryKind, ErrorPolicy

from .batch import validate_csv, validate_values
from .config import USERNAME_TAG, ValidatorConfig, load_config
from .errors import (
    ComposableValidatorsError,
    DuplicateRegistrationError,
    RegistrySealedError,
    UnitExecutionError,
    ValidationSetupError,
)
from .models import BatchReport, ValidationEntry, ValidationResult
from .nested import GatedUnit
from .orchestrator import Orchestrator
from .registry import UnitRegistry, build_default_registry
from .units import ValidationUnit
from .units.functional import FunctionUnit, unit

__all__ = [
    # Core
    "ValidationUnit",
    "UnitRegistry",
    "Orchestrator",
    "GatedUnit",
    "FunctionUnit",
    "unit",
    "build_default_registry",
    # Batch
    "validate_values",
    "validate_csv",
    # Data models
    "ValidationEntry",
    "ValidationResult",
    "BatchReport",
    "EntryKind",
    "ErrorPolicy",
    # Config
    "USERNAME_TAG",
    "ValidatorConfig",
    "load_config",
    # Errors
    "ComposableValidatorsError",
    "ValidationSetupError",
    "RegistrySealedError",
    "DuplicateRegistrationError",
    "UnitExecutionError",
]
