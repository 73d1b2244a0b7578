"""
Range queries over the year-sorted stamp collection.

The collection is sorted once by year with a stable sort, so stamps sharing a
year keep their input order. Each query then maps to one contiguous slice
``[lower_bound(begin), upper_bound(end))`` found by binary search.
"""

from __future__ import annotations

import bisect
from typing import Iterable, Iterator, Sequence, Tuple

from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.utils.logging import get_logger

logger = get_logger(__name__)


def sort_stamps(stamps: Iterable[Stamp]) -> Tuple[Stamp, ...]:
    """Return stamps ordered by year, ties kept in input order."""
    return tuple(sorted(stamps, key=lambda stamp: stamp.year))


def lower_bound(years: Sequence[int], begin_year: int) -> int:
    """
    Index of the first year ``>= begin_year``.

    Args:
        years: Ascending sequence of years
        begin_year: Inclusive lower bound

    Returns:
        Insertion point in ``[0, len(years)]``; ``len(years)`` when every year
        is smaller than ``begin_year``
    """
    return bisect.bisect_left(years, begin_year)


def upper_bound(years: Sequence[int], end_year: int) -> int:
    """
    Index of the first year ``> end_year``.

    Args:
        years: Ascending sequence of years
        end_year: Inclusive upper bound

    Returns:
        Insertion point in ``[0, len(years)]``; ``0`` when every year is
        greater than ``end_year``
    """
    return bisect.bisect_right(years, end_year)


class StampIndex:
    """Year-sorted, read-only view of the accepted stamps."""

    def __init__(self, stamps: Iterable[Stamp]):
        self._stamps = sort_stamps(stamps)
        self._years = tuple(stamp.year for stamp in self._stamps)
        logger.debug("catalog.stamps_sorted", stamps=len(self._stamps))

    def __len__(self) -> int:
        return len(self._stamps)

    @property
    def stamps(self) -> Tuple[Stamp, ...]:
        return self._stamps

    def bounds(self, query: Query) -> Tuple[int, int]:
        """Half-open index range of the stamps matching ``query``."""
        start = lower_bound(self._years, query.begin_year)
        stop = upper_bound(self._years, query.end_year)
        return start, max(start, stop)

    def select(self, query: Query) -> Tuple[Stamp, ...]:
        """All stamps with ``begin_year <= year <= end_year``, in year order."""
        start, stop = self.bounds(query)
        matches = self._stamps[start:stop]
        logger.debug(
            "catalog.query_answered",
            begin_year=query.begin_year,
            end_year=query.end_year,
            matches=len(matches),
        )
        return matches


def answer_queries(
    index: StampIndex, queries: Iterable[Query]
) -> Iterator[Tuple[Query, Tuple[Stamp, ...]]]:
    """Yield ``(query, matches)`` pairs in query input order."""
    for query in queries:
        yield query, index.select(query)


__all__ = [
    "sort_stamps",
    "lower_bound",
    "upper_bound",
    "StampIndex",
    "answer_queries",
]
