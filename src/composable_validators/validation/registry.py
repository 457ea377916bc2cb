"""Validation unit registry.

This module holds the units applicable to each input-type tag:
- UnitRegistry: register units at setup, read them back in priority order
- build_default_registry(): the built-in username rules, wired from ValidatorConfig

A registry is sealed by its first read. Units must be registered before the
first validation run; later registrations raise RegistrySealedError.
"""

from __future__ import annotations

import logging
import numbers
import threading
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .config import DEFAULT_TAG, USERNAME_PATTERN, USERNAME_TAG, ValidatorConfig
from .errors import DuplicateRegistrationError, RegistrySealedError, ValidationSetupError
from .nested import GatedUnit
from .units import ValidationUnit
from .units.denylist import Denylist, DenylistUnit
from .units.length import MaxLengthUnit, MinLengthUnit
from .units.not_null import NotNullUnit
from .units.pattern import PatternUnit

logger = logging.getLogger(__name__)

_REQUIRED_ATTRIBUTES = ("name", "priority", "stop_on_error", "evaluate")


class UnitRegistry:
    """Units grouped by input-type tag, ordered by ascending priority.

    Ties in priority are broken by registration order, so identical
    registration sequences always yield identical execution order.

    Examples:
        >>> registry = UnitRegistry()
        >>> _ = registry.register(MaxLengthUnit(30), "username")
        >>> _ = registry.register(NotNullUnit(), "username")
        >>> [u.name for u in registry.units_for("username")]
        ['not_null', 'max_length']
    """

    def __init__(self) -> None:
        self._units: Dict[str, List[ValidationUnit]] = {}
        self._ordered: Dict[str, Tuple[ValidationUnit, ...]] = {}
        self._sealed = False
        self._lock = threading.Lock()

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, unit: ValidationUnit, tag: str = DEFAULT_TAG) -> ValidationUnit:
        """Register a unit for an input-type tag.

        Args:
            unit: Object implementing the ValidationUnit protocol.
            tag: Input-type tag the unit applies to.

        Returns:
            The registered unit, so this can be used inline.

        Raises:
            ValidationSetupError: If ``unit`` does not implement the protocol.
            RegistrySealedError: If the registry has already been read.
            DuplicateRegistrationError: If the same unit, or another unit with
                the same name, is already registered for ``tag``.
        """
        missing = [attr for attr in _REQUIRED_ATTRIBUTES if not hasattr(unit, attr)]
        if missing:
            raise ValidationSetupError(
                f"{type(unit).__name__} is not a validation unit; missing: {', '.join(missing)}"
            )
        priority = unit.priority
        if isinstance(priority, bool) or not isinstance(priority, (numbers.Real, Decimal)):
            raise ValidationSetupError(
                f"Unit '{unit.name}' has non-numeric priority {unit.priority!r}"
            )

        with self._lock:
            if self._sealed:
                raise RegistrySealedError(unit.name, tag)
            bucket = self._units.setdefault(tag, [])
            for existing in bucket:
                if existing is unit or existing.name == unit.name:
                    raise DuplicateRegistrationError(unit.name, tag)
            bucket.append(unit)

        logger.debug(
            "Registered unit %s for tag %s (priority %s, stop_on_error=%s)",
            unit.name,
            tag,
            unit.priority,
            unit.stop_on_error,
        )
        return unit

    def register_all(self, units: Iterable[ValidationUnit], tag: str = DEFAULT_TAG) -> None:
        for unit in units:
            self.register(unit, tag)

    def seal(self) -> None:
        """Compute the execution order for every tag and refuse further registration."""
        with self._lock:
            if self._sealed:
                return
            # sorted() is stable: equal priorities keep registration order
            self._ordered = {
                tag: tuple(sorted(units, key=lambda u: u.priority))
                for tag, units in self._units.items()
            }
            self._sealed = True
        logger.debug("Registry sealed: %d units across %d tags", len(self), len(self._ordered))

    def units_for(self, tag: str) -> Tuple[ValidationUnit, ...]:
        """Return the units for ``tag`` in execution order, sealing the registry.

        Unknown tags yield an empty tuple.
        """
        if not self._sealed:
            self.seal()
        return self._ordered.get(tag, ())

    def tags(self) -> List[str]:
        with self._lock:
            return sorted(self._units)

    def __len__(self) -> int:
        return sum(len(units) for units in self._units.values())

    def __contains__(self, tag: object) -> bool:
        return tag in self._units


def build_default_registry(config: Optional[ValidatorConfig] = None) -> UnitRegistry:
    """Build the registry of built-in username rules.

    The username tag holds one GatedUnit: a not-null gate (priority 0, stop on
    error) delegating to min length, max length, pattern and denylist checks.

    Args:
        config: Parameters for the built-in units. Defaults to ValidatorConfig().

    Returns:
        An unsealed registry; callers may add their own units before first use.

    Raises:
        FileNotFoundError: If ``config.denylist_file`` does not exist.
        ValueError: If the denylist file cannot be parsed.
    """
    config = config or ValidatorConfig()

    denylist = Denylist(config.denied_words)
    if config.denylist_file is not None:
        denylist.extend(Denylist.read_words(config.denylist_file))

    pattern_message = None
    if config.pattern == USERNAME_PATTERN:
        pattern_message = "may only contain letters, digits, '_', '.' and '-'"

    username_checks = UnitRegistry()
    username_checks.register_all(
        [
            MinLengthUnit(config.min_length),
            MaxLengthUnit(config.max_length),
            PatternUnit(config.pattern, message=pattern_message),
            DenylistUnit(denylist),
        ],
        USERNAME_TAG,
    )

    registry = UnitRegistry()
    registry.register(
        GatedUnit(
            NotNullUnit(reject_blank=config.reject_blank),
            username_checks,
            USERNAME_TAG,
            name="username",
        ),
        USERNAME_TAG,
    )
    return registry
