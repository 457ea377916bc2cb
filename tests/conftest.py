"""Shared pytest configuration, fixtures, and utilities for validator testing."""

from typing import Any, List, Optional, Sequence

import pytest

from composable_validators.validation.config import USERNAME_TAG
from composable_validators.validation.orchestrator import Orchestrator
from composable_validators.validation.registry import UnitRegistry, build_default_registry


class RecordingUnit:
    """Test unit that fails with fixed messages and counts its evaluations.

    Args:
        name: Unit name.
        priority: Unit priority.
        messages: Messages returned on failure. Empty means the unit always passes.
        stop_on_error: Halt the run when this unit fails.
        fails_on: Optional predicate; when given, the unit fails only if it returns True.
        raises: Optional exception raised from evaluate().
    """

    def __init__(
        self,
        name: str,
        priority: int = 100,
        messages: Sequence[str] = (),
        stop_on_error: bool = False,
        fails_on=None,
        raises: Optional[Exception] = None,
    ) -> None:
        self.name = name
        self.priority = priority
        self.messages = list(messages)
        self.stop_on_error = stop_on_error
        self.fails_on = fails_on
        self.raises = raises
        self.calls: List[Any] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def evaluate(self, value: Any) -> List[str]:
        self.calls.append(value)
        if self.raises is not None:
            raise self.raises
        if self.fails_on is not None and not self.fails_on(value):
            return []
        return list(self.messages)


@pytest.fixture
def registry() -> UnitRegistry:
    """An empty, unsealed registry."""
    return UnitRegistry()


@pytest.fixture
def default_orchestrator() -> Orchestrator:
    """Orchestrator over the built-in username rules."""
    return Orchestrator(build_default_registry())


@pytest.fixture
def username_tag() -> str:
    return USERNAME_TAG
