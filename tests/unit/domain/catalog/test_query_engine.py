"""Unit tests for the sorted range query engine."""

import pytest

from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.domain.catalog.query_engine import (
    StampIndex,
    answer_queries,
    lower_bound,
    sort_stamps,
    upper_bound,
)


def _stamp(name: str, year: int) -> Stamp:
    return Stamp(year=year, post_office="PO", price=1.0, name=name, price_text="1")


@pytest.fixture
def stamps():
    return [
        _stamp("c", 1950),
        _stamp("a1", 1900),
        _stamp("e", 1840),
        _stamp("a2", 1900),
        _stamp("a3", 1900),
    ]


@pytest.mark.unit
class TestBounds:
    YEARS = (1840, 1900, 1900, 1950)

    @pytest.mark.parametrize(
        "year,expected", [(1000, 0), (1840, 0), (1841, 1), (1900, 1), (1950, 3), (1951, 4)]
    )
    def test_lower_bound(self, year, expected):
        assert lower_bound(self.YEARS, year) == expected

    @pytest.mark.parametrize(
        "year,expected", [(1000, 0), (1840, 1), (1899, 1), (1900, 3), (1950, 4), (2999, 4)]
    )
    def test_upper_bound(self, year, expected):
        assert upper_bound(self.YEARS, year) == expected

    def test_empty_sequence(self):
        assert lower_bound((), 1900) == 0
        assert upper_bound((), 1900) == 0


@pytest.mark.unit
class TestStampIndex:
    def test_sort_is_stable(self, stamps):
        ordered = sort_stamps(stamps)
        assert [s.name for s in ordered] == ["e", "a1", "a2", "a3", "c"]

    def test_select_inclusive_bounds(self, stamps):
        index = StampIndex(stamps)
        names = [s.name for s in index.select(Query(begin_year=1840, end_year=1900))]
        assert names == ["e", "a1", "a2", "a3"]

    def test_select_single_year_keeps_input_order(self, stamps):
        index = StampIndex(stamps)
        names = [s.name for s in index.select(Query(begin_year=1900, end_year=1900))]
        assert names == ["a1", "a2", "a3"]

    @pytest.mark.parametrize(
        "begin,end", [(1000, 1839), (1951, 2999), (1841, 1899), (1901, 1949)]
    )
    def test_select_empty(self, stamps, begin, end):
        index = StampIndex(stamps)
        assert index.select(Query(begin_year=begin, end_year=end)) == ()

    def test_select_matches_brute_force(self, stamps):
        index = StampIndex(stamps)
        for begin in range(1830, 1960, 7):
            for end in range(begin, 1960, 11):
                query = Query(begin_year=begin, end_year=end)
                expected = [s for s in index.stamps if query.contains(s.year)]
                assert list(index.select(query)) == expected

    def test_empty_index(self):
        index = StampIndex([])
        assert len(index) == 0
        assert index.select(Query(begin_year=0, end_year=9999)) == ()

    def test_answer_queries_preserves_query_order(self, stamps):
        index = StampIndex(stamps)
        queries = [
            Query(begin_year=1950, end_year=1950),
            Query(begin_year=1840, end_year=1840),
        ]
        answers = list(answer_queries(index, queries))
        assert [q for q, _ in answers] == queries
        assert [[s.name for s in m] for _, m in answers] == [["c"], ["e"]]
