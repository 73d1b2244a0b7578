"""
Stamp catalog: parse stamp and query lines, answer year-range queries.

Usage:
    >>> from stamp_catalog import run_catalog
    >>> result = run_catalog(["Penny Black 3 1840 London", "1800 1900"])
    >>> result.output_lines
    ['1840 London 3 Penny Black']
"""

from stamp_catalog.domain.catalog import (
    CatalogRunResult,
    GrammarMismatch,
    IngestionPhase,
    InvalidDateRange,
    LineRejected,
    PriceOutOfRange,
    Query,
    Stamp,
    StampIndex,
    ingest_lines,
    parse_query_line,
    parse_stamp_line,
    process_stream,
    run_catalog,
)

__version__ = "1.0.0"

__all__ = [
    "CatalogRunResult",
    "GrammarMismatch",
    "IngestionPhase",
    "InvalidDateRange",
    "LineRejected",
    "PriceOutOfRange",
    "Query",
    "Stamp",
    "StampIndex",
    "ingest_lines",
    "parse_query_line",
    "parse_stamp_line",
    "process_stream",
    "run_catalog",
]
