"""
Line-by-line ingestion policy.

Ingestion runs in two phases. While no query has been accepted every line is
tried as a stamp first and then as a query. The first accepted query switches
the context to ``ACCEPTING_QUERIES_ONLY`` for good: from then on lines are only
tried as queries, so a stamp-shaped line after a query is rejected.

Rejected lines are collected by a ``LineErrorReporter``; they never stop
ingestion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union

from stamp_catalog.domain.catalog.exceptions import GrammarMismatch, LineRejected
from stamp_catalog.domain.catalog.grammar import parse_query_line, parse_stamp_line
from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.utils.error_reporter import LineErrorReporter
from stamp_catalog.utils.logging import get_logger

logger = get_logger(__name__)

Record = Union[Stamp, Query]


class IngestionPhase(Enum):
    """Which record kinds the ingestion context still accepts."""

    ACCEPTING_STAMPS = "accepting_stamps"
    ACCEPTING_QUERIES_ONLY = "accepting_queries_only"


def _most_specific(errors: List[LineRejected]) -> LineRejected:
    """Prefer a validation failure over a plain shape mismatch."""
    for error in errors:
        if not isinstance(error, GrammarMismatch):
            return error
    return errors[-1]


@dataclass
class IngestionContext:
    """
    Mutable state of one ingestion run.

    Attributes:
        phase: Current ingestion phase
        stamps: Accepted stamps in input order
        queries: Accepted queries in input order
        reporter: Collector for rejected lines
        lines_seen: Number of lines processed so far
    """

    phase: IngestionPhase = IngestionPhase.ACCEPTING_STAMPS
    stamps: List[Stamp] = field(default_factory=list)
    queries: List[Query] = field(default_factory=list)
    reporter: LineErrorReporter = field(default_factory=LineErrorReporter)
    lines_seen: int = 0

    def ingest_line(self, line_number: int, line: str) -> Optional[Record]:
        """
        Classify one line and append the resulting record.

        Args:
            line_number: 1-based position of the line in the input
            line: Verbatim line text without its line terminator

        Returns:
            The accepted Stamp or Query, or None when the line was rejected
        """
        self.lines_seen += 1
        failures: List[LineRejected] = []

        if self.phase is IngestionPhase.ACCEPTING_STAMPS:
            try:
                stamp = parse_stamp_line(line)
            except LineRejected as exc:
                failures.append(exc)
            else:
                self.stamps.append(stamp)
                return stamp

        try:
            query = parse_query_line(line)
        except LineRejected as exc:
            failures.append(exc)
        else:
            self.queries.append(query)
            if self.phase is IngestionPhase.ACCEPTING_STAMPS:
                self.phase = IngestionPhase.ACCEPTING_QUERIES_ONLY
                logger.debug(
                    "catalog.phase_changed",
                    line_number=line_number,
                    phase=self.phase.value,
                )
            return query

        self._reject(line_number, line, _most_specific(failures))
        return None

    def _reject(self, line_number: int, line: str, error: LineRejected) -> None:
        self.reporter.collect_error(
            line_number=line_number,
            line_text=line,
            error_type=error.error_type,
            error_message=error.reason,
        )
        logger.debug(
            "catalog.line_rejected",
            line_number=line_number,
            error_type=error.error_type,
            reason=error.reason,
        )


def ingest_lines(
    lines: Iterable[str],
    context: Optional[IngestionContext] = None,
) -> IngestionContext:
    """
    Ingest every line, numbering them from 1.

    Args:
        lines: Input lines without line terminators
        context: Existing context to continue (a fresh one by default)

    Returns:
        The context holding accepted stamps, queries and rejected lines
    """
    if context is None:
        context = IngestionContext()

    for line_number, line in enumerate(lines, start=context.lines_seen + 1):
        context.ingest_line(line_number, line)

    logger.info(
        "catalog.ingestion_completed",
        lines=context.lines_seen,
        stamps=len(context.stamps),
        queries=len(context.queries),
        rejected=len(context.reporter),
    )
    return context


__all__ = ["IngestionPhase", "IngestionContext", "ingest_lines"]
