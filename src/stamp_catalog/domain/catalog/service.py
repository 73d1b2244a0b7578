"""
Stamp catalog domain - Service.

Wires ingestion, sorting and query answering into a single run:

    lines -> IngestionContext (stamps, queries, rejected lines)
          -> StampIndex (sorted once)
          -> output lines, one per matching stamp, queries in input order
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO, Tuple

from stamp_catalog.domain.catalog.ingestion import ingest_lines
from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.domain.catalog.query_engine import StampIndex, answer_queries
from stamp_catalog.io.readers.line_reader import read_lines
from stamp_catalog.utils.error_reporter import LineError, LineErrorReporter
from stamp_catalog.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CatalogRunResult:
    """
    Outcome of one catalog run.

    Attributes:
        stamps: Accepted stamps, sorted by year
        queries: Accepted queries, in input order
        output_lines: Formatted result lines, in emission order
        reporter: Collector holding the rejected lines
        lines_processed: Number of input lines read
        duration_ms: End-to-end processing time
    """

    stamps: Tuple[Stamp, ...]
    queries: Tuple[Query, ...]
    output_lines: List[str] = field(default_factory=list)
    reporter: LineErrorReporter = field(default_factory=LineErrorReporter)
    lines_processed: int = 0
    duration_ms: float = 0.0

    @property
    def errors(self) -> List[LineError]:
        return self.reporter.errors

    def diagnostics(self) -> List[str]:
        return self.reporter.diagnostics()

    def as_dict(self) -> Dict[str, Any]:
        """Return JSON-serialisable counters (useful for logging/tests)."""
        return {
            "lines_processed": self.lines_processed,
            "stamps": len(self.stamps),
            "queries": len(self.queries),
            "output_lines": len(self.output_lines),
            "rejected_lines": len(self.errors),
            "duration_ms": self.duration_ms,
        }

    def summary(self) -> str:
        return (
            f"lines={self.lines_processed} stamps={len(self.stamps)} "
            f"queries={len(self.queries)} output_lines={len(self.output_lines)} "
            f"rejected={len(self.errors)} duration_ms={self.duration_ms:.2f}"
        )


def run_catalog(lines: Iterable[str]) -> CatalogRunResult:
    """
    Process a complete, buffered input.

    Args:
        lines: Input lines without line terminators

    Returns:
        CatalogRunResult with output lines and rejected lines
    """
    started = time.perf_counter()

    context = ingest_lines(lines)
    index = StampIndex(context.stamps)

    output_lines: List[str] = []
    for _query, matches in answer_queries(index, context.queries):
        output_lines.extend(stamp.format_line() for stamp in matches)

    result = CatalogRunResult(
        stamps=index.stamps,
        queries=tuple(context.queries),
        output_lines=output_lines,
        reporter=context.reporter,
        lines_processed=context.lines_seen,
        duration_ms=(time.perf_counter() - started) * 1000,
    )
    logger.info("catalog.run_completed", **result.as_dict())
    return result


def process_stream(
    source: TextIO,
    output: TextIO,
    diagnostics: TextIO,
    errors_csv: Optional[Path] = None,
    source_name: str = "stdin",
) -> CatalogRunResult:
    """
    Read ``source`` to the end, then write results and diagnostics.

    Diagnostics for every rejected line are written first, in input order,
    followed by the result lines on ``output``.

    Args:
        source: Input text stream
        output: Primary output stream for result lines
        diagnostics: Stream receiving ``Error in line N: ...`` lines
        errors_csv: Optional CSV export target for rejected lines
        source_name: Input name recorded in the CSV export header
    """
    result = run_catalog(read_lines(source))
    emit_result(result, output, diagnostics, errors_csv=errors_csv, source_name=source_name)
    return result


def emit_result(
    result: CatalogRunResult,
    output: TextIO,
    diagnostics: TextIO,
    errors_csv: Optional[Path] = None,
    source_name: str = "stdin",
) -> None:
    """Write diagnostics, then result lines, then the optional CSV export."""
    result.reporter.write_diagnostics(diagnostics)
    for line in result.output_lines:
        output.write(line + "\n")
    output.flush()

    if errors_csv is not None:
        result.reporter.export_to_csv(
            errors_csv, total_lines=result.lines_processed, source=source_name
        )
        logger.info("catalog.errors_exported", path=str(errors_csv), rows=len(result.errors))


__all__ = ["CatalogRunResult", "run_catalog", "process_stream", "emit_result"]
