"""Stamp catalog domain: line grammar, ingestion policy and range queries."""

from stamp_catalog.domain.catalog.exceptions import (
    CatalogError,
    GrammarMismatch,
    InvalidDateRange,
    LineRejected,
    PriceOutOfRange,
)
from stamp_catalog.domain.catalog.grammar import parse_query_line, parse_stamp_line
from stamp_catalog.domain.catalog.ingestion import (
    IngestionContext,
    IngestionPhase,
    ingest_lines,
)
from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.domain.catalog.query_engine import StampIndex, answer_queries
from stamp_catalog.domain.catalog.service import (
    CatalogRunResult,
    process_stream,
    run_catalog,
)

__all__ = [
    "CatalogError",
    "CatalogRunResult",
    "GrammarMismatch",
    "IngestionContext",
    "IngestionPhase",
    "InvalidDateRange",
    "LineRejected",
    "PriceOutOfRange",
    "Query",
    "Stamp",
    "StampIndex",
    "answer_queries",
    "ingest_lines",
    "parse_query_line",
    "parse_stamp_line",
    "process_stream",
    "run_catalog",
]
