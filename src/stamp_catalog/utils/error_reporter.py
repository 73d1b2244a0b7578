"""Line-level error collection and reporting.

This module collects rejected input lines, renders the one-line diagnostics
written to the diagnostic stream, and exports the collected errors to CSV for
data quality debugging.

Usage:
    >>> reporter = LineErrorReporter()
    >>> _ = reporter.collect_error(
    ...     line_number=2,
    ...     line_text="BadLine",
    ...     error_type="GrammarMismatch",
    ...     error_message="line matches neither the stamp nor the query grammar",
    ... )
    >>> reporter.diagnostics()
    ['Error in line 2: BadLine']
    >>> reporter.export_to_csv(Path('logs/rejected_lines.csv'), total_lines=10)
"""

import csv
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Set, TextIO

DIAGNOSTIC_TEMPLATE = "Error in line {line_number}: {line_text}"

_MAX_EXPORT_LENGTH = 100


@dataclass(frozen=True)
class LineError:
    """Single rejected line.

    Attributes:
        line_number: 1-based line number in the input
        line_text: Verbatim text of the rejected line
        error_type: Classification (GrammarMismatch, PriceOutOfRange, InvalidDateRange)
        error_message: Human-readable description
    """

    line_number: int
    line_text: str
    error_type: str
    error_message: str

    def diagnostic(self) -> str:
        """Render the diagnostic line for this error."""
        return DIAGNOSTIC_TEMPLATE.format(
            line_number=self.line_number, line_text=self.line_text
        )


@dataclass
class LineErrorSummary:
    """Aggregated statistics for one run.

    Attributes:
        total_lines: Number of input lines processed
        accepted_lines: Lines accepted as a stamp or a query
        failed_lines: Lines rejected (unique line numbers)
        error_rate: Ratio of failed lines to total lines (0.0 to 1.0)
        errors_by_type: Rejection count per error type
    """

    total_lines: int
    accepted_lines: int
    failed_lines: int
    error_rate: float
    errors_by_type: dict


class LineErrorReporter:
    """Collect rejected lines and report them without interrupting ingestion.

    Errors are kept in the order they were collected, which is input order
    because ingestion is strictly sequential.
    """

    def __init__(self) -> None:
        self.errors: List[LineError] = []
        self._failed_line_numbers: Set[int] = set()

    def __len__(self) -> int:
        return len(self.errors)

    def collect_error(
        self,
        line_number: int,
        line_text: str,
        error_type: str,
        error_message: str,
    ) -> LineError:
        """Add a rejected line to the collection.

        Args:
            line_number: 1-based line number
            line_text: Verbatim line text
            error_type: Error classification
            error_message: Human-readable description

        Returns:
            The stored LineError
        """
        error = LineError(
            line_number=line_number,
            line_text=line_text,
            error_type=error_type,
            error_message=error_message,
        )
        self.errors.append(error)
        self._failed_line_numbers.add(line_number)
        return error

    def diagnostics(self) -> List[str]:
        """Return the diagnostic line of every collected error, in input order."""
        return [error.diagnostic() for error in self.errors]

    def write_diagnostics(self, stream: TextIO) -> int:
        """Write diagnostics to ``stream``, one per line.

        Returns:
            Number of diagnostics written
        """
        for line in self.diagnostics():
            stream.write(line + "\n")
        stream.flush()
        return len(self.errors)

    def get_summary(self, total_lines: int) -> LineErrorSummary:
        """Return aggregated statistics.

        Args:
            total_lines: Total number of input lines processed

        Example:
            >>> reporter = LineErrorReporter()
            >>> _ = reporter.collect_error(1, 'x', 'GrammarMismatch', 'msg')
            >>> reporter.get_summary(total_lines=4).error_rate
            0.25
        """
        failed_lines = len(self._failed_line_numbers)
        error_rate = failed_lines / total_lines if total_lines > 0 else 0.0

        errors_by_type: dict = {}
        for error in self.errors:
            errors_by_type[error.error_type] = errors_by_type.get(error.error_type, 0) + 1

        return LineErrorSummary(
            total_lines=total_lines,
            accepted_lines=total_lines - failed_lines,
            failed_lines=failed_lines,
            error_rate=error_rate,
            errors_by_type=errors_by_type,
        )

    def export_to_csv(
        self,
        filepath: Path,
        total_lines: int,
        source: str = "stdin",
    ) -> None:
        """Export errors to CSV with metadata header.

        CSV Format:
            # Rejected Lines Export
            # Date: 2026-01-05T10:30:00
            # Source: catalog.txt
            # Total Lines: 120
            # Failed Lines: 3
            # Error Rate: 2.5%
            line_number,error_type,error_message,line_text
            4,GrammarMismatch,line matches neither ...,BadLine
            ...

        Args:
            filepath: Output CSV file path
            total_lines: Total number of input lines processed
            source: Name of the input (file path or "stdin")
        """
        summary = self.get_summary(total_lines)

        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            f.write("# Rejected Lines Export\n")
            f.write(f"# Date: {datetime.now().isoformat()}\n")
            f.write(f"# Source: {source}\n")
            f.write(f"# Total Lines: {total_lines}\n")
            f.write(f"# Failed Lines: {summary.failed_lines}\n")
            f.write(f"# Error Rate: {summary.error_rate:.1%}\n")

            writer = csv.DictWriter(
                f,
                fieldnames=["line_number", "error_type", "error_message", "line_text"],
            )
            writer.writeheader()

            for error in self.errors:
                writer.writerow(
                    {
                        "line_number": error.line_number,
                        "error_type": error.error_type,
                        "error_message": error.error_message,
                        "line_text": self._sanitize_value(error.line_text),
                    }
                )

    def _sanitize_value(self, value: str) -> str:
        """Sanitize line text for CSV export.

        Rules:
        - Replace newlines, carriage returns and tabs with a space
        - Truncate long strings (>100 chars) to 97 chars + "..."

        Example:
            >>> LineErrorReporter()._sanitize_value('a\\tb')
            'a b'
        """
        sanitized = value.replace("\n", " ").replace("\r", " ").replace("\t", " ")
        if len(sanitized) > _MAX_EXPORT_LENGTH:
            sanitized = sanitized[: _MAX_EXPORT_LENGTH - 3] + "..."
        return sanitized
