"""Tests for the built-in validation units.

Every unit must treat an absent value as a defined input: the not-null gate
fails with its message, all other units pass and leave absence to the gate.
"""

import pytest

from composable_validators.validation.units.denylist import Denylist, DenylistUnit
from composable_validators.validation.units.functional import FunctionUnit, unit
from composable_validators.validation.units.length import MaxLengthUnit, MinLengthUnit
from composable_validators.validation.units.not_null import NotNullUnit
from composable_validators.validation.units.pattern import PatternUnit


ABSENCE_TOLERANT_UNITS = [
    MinLengthUnit(3),
    MaxLengthUnit(10),
    PatternUnit(r"[a-z]+"),
    DenylistUnit(Denylist(["admin"])),
]


@pytest.mark.parametrize("check", ABSENCE_TOLERANT_UNITS, ids=lambda u: u.name)
def test_units_pass_on_absent_value(check):
    assert check.evaluate(None) == []


def test_not_null_fails_on_none():
    assert NotNullUnit().evaluate(None) == ["must not be null"]


def test_not_null_defaults():
    gate = NotNullUnit()
    assert gate.name == "not_null"
    assert gate.priority == 0
    assert gate.stop_on_error is True


@pytest.mark.parametrize("value", ["", "   ", 0, False, []])
def test_not_null_accepts_falsy_values_by_default(value):
    assert NotNullUnit().evaluate(value) == []


@pytest.mark.parametrize("value", ["", "  \t"])
def test_not_null_reject_blank(value):
    gate = NotNullUnit(reject_blank=True, message="is required")
    assert gate.evaluate(value) == ["is required"]


def test_min_length():
    check = MinLengthUnit(3)
    assert check.evaluate("abc") == []
    assert check.evaluate("ab") == ["must be at least 3 characters"]


def test_max_length():
    check = MaxLengthUnit(5)
    assert check.evaluate("abcde") == []
    assert check.evaluate("abcdef") == ["must be at most 5 characters"]


def test_length_units_work_on_sequences():
    assert MaxLengthUnit(2).evaluate([1, 2, 3]) == ["must be at most 2 characters"]


def test_length_unit_raises_on_unsized_value():
    """Values without a length are an execution error, not a failure message."""
    with pytest.raises(TypeError):
        MinLengthUnit(3).evaluate(12345)


@pytest.mark.parametrize("cls", [MinLengthUnit, MaxLengthUnit])
def test_negative_bounds_rejected(cls):
    with pytest.raises(ValueError):
        cls(-1)


def test_pattern_requires_full_match():
    check = PatternUnit(r"[a-z]+")
    assert check.evaluate("abc") == []
    assert check.evaluate("abc1") == ["must match pattern '[a-z]+'"]


def test_pattern_custom_message():
    check = PatternUnit(r"\d+", message="digits only")
    assert check.evaluate("12a") == ["digits only"]


def test_denylist_unit_reports_each_word_in_sorted_order():
    check = DenylistUnit(Denylist(["root", "admin"]))
    assert check.evaluate("RootAdmin") == ["must not contain 'admin'", "must not contain 'root'"]
    assert check.evaluate("alice") == []


def test_denylist_unit_does_not_mutate_input():
    value = "Admin"
    DenylistUnit(Denylist(["admin"])).evaluate(value)
    assert value == "Admin"


def test_function_unit_wraps_callable():
    def no_spaces(value):
        return "must not contain spaces" if value and " " in value else None

    check = FunctionUnit(no_spaces, priority=5)
    assert check.name == "no_spaces"
    assert check.priority == 5
    assert check.stop_on_error is False
    assert check.evaluate("a b") == "must not contain spaces"
    assert check.evaluate("ab") is None


def test_unit_decorator():
    @unit(name="upper_first", priority=7, stop_on_error=True)
    def upper_first(value):
        return None if value[:1].isupper() else "must start with an uppercase letter"

    assert isinstance(upper_first, FunctionUnit)
    assert upper_first.name == "upper_first"
    assert upper_first.priority == 7
    assert upper_first.stop_on_error is True
    assert upper_first.evaluate("alice") == "must start with an uppercase letter"
