"""Validation data models.

This module defines core data structures for validation results:
- ValidationEntry: One failure message (or unit execution error) from a unit
- ValidationResult: Ordered entries from one orchestration run
- BatchReport: Aggregated results from validating many values
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from composable_validators.core.enums import EntryKind


@dataclass(frozen=True)
class ValidationEntry:
    """A single message collected during a validation run.

    Attributes:
        unit: Name of the unit that produced the entry.
        message: Human-readable message.
        kind: FAILURE for an ordinary validation failure, UNIT_ERROR when the
            unit could not complete its check.

    Examples:
        >>> ValidationEntry(unit="max_length", message="must be at most 30 characters")
    """

    unit: str
    message: str
    kind: EntryKind = EntryKind.FAILURE

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not self.message:
            raise ValueError(f"Entry from unit '{self.unit}' must carry a non-empty message")
        if not isinstance(self.kind, EntryKind):
            raise ValueError(f"Invalid entry kind: {self.kind!r}")

    @property
    def is_unit_error(self) -> bool:
        return self.kind is EntryKind.UNIT_ERROR

    def to_dict(self) -> Dict[str, str]:
        return {"unit": self.unit, "kind": self.kind.value, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating one value against an ordered sequence of units.

    Attributes:
        entries: Collected entries in evaluation order.
        halted: True if a stop-on-error unit failed (or a unit errored) and
            the remaining units were skipped.
        cancelled: True if the run was cancelled between two units.
        value: The validated value.
        tag: Input-type tag the units were selected by, if any.

    Examples:
        >>> result = orchestrator.validate(None, "username")
        >>> result.messages
        ['must not be null']
        >>> result.halted
        True
    """

    entries: Tuple[ValidationEntry, ...] = ()
    halted: bool = False
    cancelled: bool = False
    value: Any = None
    tag: Optional[str] = None

    @property
    def messages(self) -> List[str]:
        """Messages of all entries, in the exact order they were produced."""
        return [e.message for e in self.entries]

    @property
    def passed(self) -> bool:
        return not self.entries

    def has_unit_errors(self) -> bool:
        return any(e.is_unit_error for e in self.entries)

    def get_failures(self) -> List[ValidationEntry]:
        """Return ordinary validation failures, excluding unit execution errors."""
        return [e for e in self.entries if e.kind is EntryKind.FAILURE]

    def get_unit_errors(self) -> List[ValidationEntry]:
        return [e for e in self.entries if e.kind is EntryKind.UNIT_ERROR]

    def summary(self) -> str:
        """Generate a concise text summary of the run.

        Examples:
            >>> print(result.summary())
            Validation Summary:
              Tag: username
              Value: 'ab'
              Entries: 1 failures, 0 unit errors
              Halted: no
        """
        status = "cancelled" if self.cancelled else ("yes" if self.halted else "no")
        return (
            f"Validation Summary:\n"
            f"  Tag: {self.tag or '-'}\n"
            f"  Value: {self.value!r}\n"
            f"  Entries: {len(self.get_failures())} failures, "
            f"{len(self.get_unit_errors())} unit errors\n"
            f"  Halted: {status}"
        )

    def to_console_summary(self) -> str:
        lines = [self.summary(), ""]
        if self.passed:
            lines.append("✅ All validation units passed!")
        else:
            for entry in self.entries:
                icon = "⚠️" if entry.is_unit_error else "❌"
                lines.append(f"{icon} {entry.unit}: {entry.message}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "value": self.value,
            "passed": self.passed,
            "halted": self.halted,
            "cancelled": self.cancelled,
            "entries": [e.to_dict() for e in self.entries],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False, default=str)


@dataclass
class BatchReport:
    """Aggregated validation results for a sequence of values.

    Attributes:
        results: One ValidationResult per input value, in input order.
        tag: Input-type tag used for every value.
        source: Path of the CSV file the values came from, if any.
        column: CSV column the values came from, if any.

    Examples:
        >>> report = validate_values(["alice", None, "x"], "username", orchestrator)
        >>> report.get_failed_rows()
        [1, 2]
    """

    results: List[ValidationResult]
    tag: str
    source: Optional[Path] = None
    column: Optional[str] = None
    generated_at: datetime = field(default_factory=datetime.now)

    def has_failures(self) -> bool:
        return any(not r.passed for r in self.results)

    def has_unit_errors(self) -> bool:
        return any(r.has_unit_errors() for r in self.results)

    def get_failure_count(self) -> int:
        """Count ordinary failure entries across all rows."""
        return sum(len(r.get_failures()) for r in self.results)

    def get_unit_error_count(self) -> int:
        return sum(len(r.get_unit_errors()) for r in self.results)

    def get_failed_rows(self) -> List[int]:
        """Return the positions of values that produced at least one entry."""
        return [i for i, r in enumerate(self.results) if not r.passed]

    def summary(self) -> str:
        total = len(self.results)
        failed = len(self.get_failed_rows())
        source = f"{self.source.name}:{self.column}" if self.source else "values"
        return (
            f"Validation Summary:\n"
            f"  Source: {source} (tag {self.tag})\n"
            f"  Values: {total} checked ({total - failed} passed, {failed} failed)\n"
            f"  Issues: {self.get_failure_count()} failures, "
            f"{self.get_unit_error_count()} unit errors"
        )

    def to_console_summary(self) -> str:
        """Summary plus the first message of every failed row."""
        lines = [self.summary(), ""]
        failed_rows = self.get_failed_rows()
        if not failed_rows:
            lines.append("✅ All values passed!")
            return "\n".join(lines)

        lines.append("Failed Values:")
        for row in failed_rows:
            result = self.results[row]
            icon = "⚠️" if result.has_unit_errors() else "❌"
            lines.append(f"{icon} row {row} {result.value!r}: {len(result.entries)} issues")
            lines.append(f"   - {result.entries[0].message}")
        return "\n".join(lines)

    def to_frame(self) -> pd.DataFrame:
        """Flatten the report into a DataFrame with one row per entry.

        Columns: row, value, unit, kind, message, halted. Passing values do not
        appear in the frame.
        """
        records = []
        for row, result in enumerate(self.results):
            for entry in result.entries:
                records.append(
                    {
                        "row": row,
                        "value": result.value,
                        "unit": entry.unit,
                        "kind": entry.kind.value,
                        "message": entry.message,
                        "halted": result.halted,
                    }
                )
        return pd.DataFrame.from_records(
            records, columns=["row", "value", "unit", "kind", "message", "halted"]
        )

    def to_markdown(self) -> str:
        """Generate a detailed Markdown validation report.

        Returns:
            Markdown with a header, summary counts and one section per failed
            value listing its messages in evaluation order.
        """
        total = len(self.results)
        failed_rows = self.get_failed_rows()
        title = f"{self.source.name}:{self.column}" if self.source else self.tag

        lines = [
            f"# Validation Report: {title}",
            "",
            f"**Tag:** {self.tag}",
            f"**Generated:** {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Values:** {total}",
            f"- **Passed:** {total - len(failed_rows)} ✅",
            f"- **Failed:** {len(failed_rows)} ❌",
            f"- **Failures:** {self.get_failure_count()}",
            f"- **Unit Errors:** {self.get_unit_error_count()}",
            "",
        ]

        if not failed_rows:
            lines.append("## ✅ All Values Passed")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
            return "\n".join(lines)

        lines.append("## ❌ Failed Values")
        lines.append("")
        for row in failed_rows:
            result = self.results[row]
            halted = " (halted)" if result.halted else ""
            lines.append(f"### Row {row}: `{result.value!r}`{halted}")
            lines.append("")
            for entry in result.entries:
                prefix = "**unit error** " if entry.is_unit_error else ""
                lines.append(f"- {prefix}{entry.unit}: {entry.message}")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        failed_rows = self.get_failed_rows()
        report_data = {
            "metadata": {
                "tag": self.tag,
                "source": self.source.name if self.source else None,
                "column": self.column,
                "generated_at": self.generated_at.isoformat(),
            },
            "summary": {
                "values": len(self.results),
                "passed": len(self.results) - len(failed_rows),
                "failed": len(failed_rows),
                "failures": self.get_failure_count(),
                "unit_errors": self.get_unit_error_count(),
            },
            "failed_values": [
                dict(row=row, **self.results[row].to_dict()) for row in failed_rows
            ],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False, default=str)
