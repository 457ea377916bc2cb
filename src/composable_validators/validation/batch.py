"""Batch validation of many values.

This module runs one orchestrator over a sequence of values:
- validate_values(): validate an in-memory iterable
- validate_csv(): validate one column of a CSV file, loaded with pandas

Each value gets its own independent run; results are collected in input order
into a BatchReport.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional

import pandas as pd

from .models import BatchReport, ValidationResult
from .orchestrator import Orchestrator

logger = logging.getLogger(__name__)


def _to_python(value: Any) -> Any:
    """Map pandas missing markers (NaN, NA, NaT) to None."""
    if value is None:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


def validate_values(
    values: Iterable[Any],
    tag: str,
    orchestrator: Orchestrator,
    *,
    cancel_event: Optional[threading.Event] = None,
) -> BatchReport:
    """Validate each value against the units registered for ``tag``.

    Args:
        values: Values to validate, in order. Missing markers become None.
        tag: Input-type tag selecting the units.
        orchestrator: Orchestrator with a registry.
        cancel_event: When set, the value being validated is cut short and
            the remaining values are not validated.

    Returns:
        BatchReport with one result per validated value.
    """
    results: List[ValidationResult] = []
    for value in values:
        result = orchestrator.validate(_to_python(value), tag, cancel_event=cancel_event)
        results.append(result)
        if result.cancelled:
            logger.warning("Batch validation cancelled after %d values", len(results))
            break

    report = BatchReport(results=results, tag=tag)
    logger.info(
        "Validated %d values for tag %s: %d failed",
        len(results),
        tag,
        len(report.get_failed_rows()),
    )
    return report


def validate_csv(
    csv_path: Path,
    column: str,
    tag: str,
    orchestrator: Orchestrator,
    *,
    cancel_event: Optional[threading.Event] = None,
) -> BatchReport:
    """Validate one column of a CSV file.

    Cells are read as strings so identifiers like ``007`` keep their leading
    zeros; empty cells become None.

    Args:
        csv_path: Path to the CSV file.
        column: Column holding the values to validate.
        tag: Input-type tag selecting the units.
        orchestrator: Orchestrator with a registry.
        cancel_event: See validate_values().

    Returns:
        BatchReport whose rows match the CSV data rows (0-based, header excluded).

    Raises:
        FileNotFoundError: If the CSV file does not exist.
        ValueError: If the file cannot be parsed or the column is missing.
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    try:
        df = pd.read_csv(csv_path, encoding="utf-8-sig", dtype=str, keep_default_na=True)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ValueError(f"Failed to read CSV file {csv_path}: {e}") from e

    if column not in df.columns:
        raise ValueError(
            f"Column '{column}' not found in {csv_path.name}. "
            f"Available columns: {', '.join(map(str, df.columns))}"
        )

    logger.info("Loaded %d rows from %s", len(df), csv_path)
    report = validate_values(df[column].tolist(), tag, orchestrator, cancel_event=cancel_event)
    report.source = csv_path
    report.column = column
    return report
