"""
Exception hierarchy for catalog line ingestion.

Every rejection of an input line is a ``LineRejected`` subclass. Rejections are
line-local: ingestion records them, together with the line number and text it
already knows, and moves on to the next line.
"""


class CatalogError(Exception):
    """Base exception for all stamp catalog errors."""

    pass


class LineRejected(CatalogError):
    """Raised when an input line cannot be accepted as a stamp or a query."""

    @property
    def reason(self) -> str:
        return str(self)

    @property
    def error_type(self) -> str:
        return type(self).__name__


class GrammarMismatch(LineRejected):
    """The line does not have the shape of an acceptable stamp or query."""

    pass


class PriceOutOfRange(LineRejected):
    """The price field is numeric but cannot be represented as a float."""

    pass


class InvalidDateRange(LineRejected):
    """The query's begin year is greater than its end year."""

    pass


__all__ = [
    "CatalogError",
    "LineRejected",
    "GrammarMismatch",
    "PriceOutOfRange",
    "InvalidDateRange",
]
