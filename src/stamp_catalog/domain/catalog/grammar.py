"""
Line grammars for stamp and query records.

A line is split into tokens (maximal runs of non-whitespace characters) and the
two record shapes are recognised from the token sequence:

- stamp: ``<name...> <price> <year> <post office...>`` where name and post
  office normally span one or more tokens each, or else a run of at least two
  whitespace characters. The name is greedy: when several price/year pairs
  would fit, the last one is used.
- query: exactly two integer tokens.

Field values handed to the normalizer are the original substrings of the line,
so interior whitespace survives until ``normalize_text_field`` collapses it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import ValidationError

from stamp_catalog.domain.catalog.constants import (
    ASCII_DIGITS,
    DECIMAL_SEPARATOR_CHARS,
    RECORD_STAMP,
    YEAR_LEADING_DIGITS,
    YEAR_LENGTH,
)
from stamp_catalog.domain.catalog.exceptions import (
    GrammarMismatch,
    InvalidDateRange,
    PriceOutOfRange,
)
from stamp_catalog.domain.catalog.models import Query, Stamp
from stamp_catalog.infrastructure.cleansing import apply_field_rules

_TOKEN_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    """A maximal non-whitespace run and its position in the line."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class StampMatch:
    """Raw field texts of a line that has the stamp shape."""

    name_text: str
    price_text: str
    year_text: str
    post_office_text: str


@dataclass(frozen=True)
class QueryMatch:
    """Raw field texts of a line that has the query shape."""

    begin_text: str
    end_text: str


def tokenize(line: str) -> Tuple[Token, ...]:
    return tuple(
        Token(text=m.group(0), start=m.start(), end=m.end())
        for m in _TOKEN_RE.finditer(line)
    )


def is_integer_token(text: str) -> bool:
    """True for a non-empty run of ASCII digits."""
    return bool(text) and all(ch in ASCII_DIGITS for ch in text)


def is_price_token(text: str) -> bool:
    """
    True for a bare integer or a decimal number with one ``.`` or ``,``.

    Both sides of the separator need at least one digit: ``3``, ``1,50`` and
    ``2.00`` pass; ``3.``, ``,5``, ``1.2.3`` and ``3x`` do not.
    """
    separators = [idx for idx, ch in enumerate(text) if ch in DECIMAL_SEPARATOR_CHARS]
    if not separators:
        return is_integer_token(text)
    if len(separators) > 1:
        return False
    idx = separators[0]
    return is_integer_token(text[:idx]) and is_integer_token(text[idx + 1:])


def is_year_token(text: str) -> bool:
    """True for four ASCII digits starting with 1 or 2."""
    return (
        len(text) == YEAR_LENGTH
        and text[0] in YEAR_LEADING_DIGITS
        and is_integer_token(text)
    )


# A name or post office may consist of whitespace alone, but it still needs a
# character of its own besides the separator next to the price or the year.
_MIN_BLANK_FIELD_WIDTH = 2


def _find_price_year_pair(line: str, tokens: Tuple[Token, ...]) -> Optional[int]:
    # Scan from the right: the name is greedy, so the last usable pair wins.
    for idx in range(len(tokens) - 2, -1, -1):
        price, year = tokens[idx], tokens[idx + 1]
        if not (is_price_token(price.text) and is_year_token(year.text)):
            continue
        has_name = idx > 0 or price.start >= _MIN_BLANK_FIELD_WIDTH
        has_post_office = (
            idx + 2 < len(tokens) or len(line) - year.end >= _MIN_BLANK_FIELD_WIDTH
        )
        if has_name and has_post_office:
            return idx
    return None


def match_stamp(line: str) -> StampMatch:
    """Split a line into raw stamp fields.

    The name and post office texts may be whitespace only; normalization turns
    them into empty strings.

    Raises:
        GrammarMismatch: If the line does not have the stamp shape
    """
    tokens = tokenize(line)
    idx = _find_price_year_pair(line, tokens)
    if idx is None:
        raise GrammarMismatch("line does not match the stamp grammar")

    price, year = tokens[idx], tokens[idx + 1]
    name_start = tokens[0].start if idx > 0 else 0
    post_office_start = tokens[idx + 2].start if idx + 2 < len(tokens) else year.end
    return StampMatch(
        name_text=line[name_start:price.start],
        price_text=price.text,
        year_text=year.text,
        post_office_text=line[post_office_start:],
    )


def match_query(line: str) -> QueryMatch:
    """Split a line into raw query bounds.

    Raises:
        GrammarMismatch: If the line is not exactly two integers
    """
    tokens = tokenize(line)
    if len(tokens) != 2 or not all(is_integer_token(t.text) for t in tokens):
        raise GrammarMismatch("line does not match the query grammar")
    return QueryMatch(begin_text=tokens[0].text, end_text=tokens[1].text)


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        # int() refuses digit strings beyond sys.get_int_max_str_digits()
        raise GrammarMismatch(f"integer {text[:20]}... is too long") from exc


def parse_stamp_line(line: str) -> Stamp:
    """Match, normalize and validate a stamp line.

    Raises:
        GrammarMismatch: If the line does not have the stamp shape
        PriceOutOfRange: If the price cannot be represented as a float
    """
    match = match_stamp(line)

    try:
        price = apply_field_rules(match.price_text, RECORD_STAMP, "price")
    except ValueError as exc:
        raise PriceOutOfRange(f"price {match.price_text!r} is out of range") from exc

    try:
        return Stamp(
            year=int(match.year_text),
            post_office=apply_field_rules(
                match.post_office_text, RECORD_STAMP, "post_office"
            ),
            price=price,
            name=apply_field_rules(match.name_text, RECORD_STAMP, "name"),
            price_text=match.price_text,
        )
    except ValidationError as exc:
        # only the price validator can fail once the grammar has matched
        raise PriceOutOfRange(f"price {match.price_text!r} is out of range") from exc


def parse_query_line(line: str) -> Query:
    """Match and validate a query line.

    Raises:
        GrammarMismatch: If the line is not exactly two integers
        InvalidDateRange: If the begin year is greater than the end year
    """
    match = match_query(line)
    begin_year = _to_int(match.begin_text)
    end_year = _to_int(match.end_text)

    try:
        return Query(begin_year=begin_year, end_year=end_year)
    except ValidationError as exc:
        raise InvalidDateRange(
            f"begin year {begin_year} is greater than end year {end_year}"
        ) from exc


__all__ = [
    "Token",
    "StampMatch",
    "QueryMatch",
    "tokenize",
    "is_integer_token",
    "is_price_token",
    "is_year_token",
    "match_stamp",
    "match_query",
    "parse_stamp_line",
    "parse_query_line",
]
