"""Tests for batch validation of value sequences and CSV columns."""

import threading
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pandas as pd
import pytest

from composable_validators.validation.batch import validate_csv, validate_values
from composable_validators.validation.models import ValidationResult


@pytest.fixture
def users_csv(tmp_path: Path) -> Path:
    """CSV with a login column containing valid, invalid and empty values."""
    csv_path = tmp_path / "users.csv"
    pd.DataFrame(
        {
            "id": ["1", "2", "3", "4", "5"],
            "login": ["alice", "ab", "", "superadmin", "007"],
        }
    ).to_csv(csv_path, index=False)
    return csv_path


def test_validate_values_default_rules(default_orchestrator, username_tag):
    report = validate_values(["alice", None, "ab", "Root!"], username_tag, default_orchestrator)

    assert report.tag == username_tag
    assert [r.messages for r in report.results] == [
        [],
        ["must not be null"],
        ["must be at least 3 characters"],
        [
            "may only contain letters, digits, '_', '.' and '-'",
            "must not contain 'root'",
        ],
    ]
    assert report.get_failed_rows() == [1, 2, 3]


def test_validate_values_maps_missing_markers_to_none(default_orchestrator, username_tag):
    report = validate_values([np.nan, pd.NA], username_tag, default_orchestrator)

    assert [r.value for r in report.results] == [None, None]
    assert all(r.messages == ["must not be null"] for r in report.results)


def test_validate_values_unit_error_does_not_stop_batch(default_orchestrator, username_tag):
    """A value that breaks a unit is reported and the next values are still validated."""
    report = validate_values([12345, "alice"], username_tag, default_orchestrator)

    assert report.results[0].has_unit_errors()
    assert report.results[0].entries[0].unit == "min_length"
    assert report.results[1].passed
    assert report.has_unit_errors() is True


def test_validate_values_stops_when_cancelled():
    cancel = threading.Event()
    orchestrator = MagicMock()

    def validate(value, tag, cancel_event=None):
        if value == "second":
            cancel.set()
            return ValidationResult(value=value, tag=tag, cancelled=True)
        return ValidationResult(value=value, tag=tag)

    orchestrator.validate.side_effect = validate

    report = validate_values(["first", "second", "third"], "t", orchestrator, cancel_event=cancel)

    assert [r.value for r in report.results] == ["first", "second"]
    assert orchestrator.validate.call_count == 2


def test_validate_csv(users_csv, default_orchestrator, username_tag):  # pylint: disable=redefined-outer-name
    report = validate_csv(users_csv, "login", username_tag, default_orchestrator)

    assert report.source == users_csv
    assert report.column == "login"
    assert len(report.results) == 5
    # empty cell is read as missing; "007" keeps its leading zeros
    assert report.results[2].value is None
    assert report.results[2].messages == ["must not be null"]
    assert report.results[4].value == "007"
    assert report.results[4].passed
    assert report.results[3].messages == ["must not contain 'admin'"]
    assert report.get_failed_rows() == [1, 2, 3]


def test_validate_csv_missing_file(tmp_path, default_orchestrator, username_tag):
    with pytest.raises(FileNotFoundError, match="CSV file not found"):
        validate_csv(tmp_path / "missing.csv", "login", username_tag, default_orchestrator)


def test_validate_csv_missing_column(users_csv, default_orchestrator, username_tag):  # pylint: disable=redefined-outer-name
    with pytest.raises(ValueError, match="Column 'email' not found in users.csv"):
        validate_csv(users_csv, "email", username_tag, default_orchestrator)


def test_validate_csv_empty_file(tmp_path, default_orchestrator, username_tag):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("", encoding="utf-8")

    with pytest.raises(ValueError, match="Failed to read CSV file"):
        validate_csv(csv_path, "login", username_tag, default_orchestrator)
