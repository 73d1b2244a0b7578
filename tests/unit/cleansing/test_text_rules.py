"""Unit tests for the string and numeric cleansing rules."""

import math

import pytest

from stamp_catalog.infrastructure.cleansing.rules.numeric_rules import (
    normalize_decimal_separator,
    parse_price,
)
from stamp_catalog.infrastructure.cleansing.rules.string_rules import (
    collapse_whitespace,
    normalize_text_field,
    strip_trailing_blanks,
)


@pytest.mark.unit
class TestStringRules:
    def test_collapse_whitespace_handles_tabs_and_unicode_spaces(self):
        assert collapse_whitespace("Penny \t  Black") == "Penny Black"
        assert collapse_whitespace("Port  Louis") == "Port Louis"
        assert collapse_whitespace(None) is None

    def test_strip_trailing_blanks_only_touches_the_end(self):
        assert strip_trailing_blanks("London \t ") == "London"
        assert strip_trailing_blanks(" London") == " London"
        assert strip_trailing_blanks(12) == 12

    def test_normalize_text_field(self):
        assert normalize_text_field("Port   Louis \t\r") == "Port Louis"
        assert normalize_text_field("Inverted Jenny   ") == "Inverted Jenny"

    @pytest.mark.parametrize(
        "raw",
        ["Penny Black", "  a \t b  ", "x  y\t", "", "one  two   three "],
    )
    def test_normalize_text_field_is_idempotent(self, raw):
        once = normalize_text_field(raw)
        assert normalize_text_field(once) == once


@pytest.mark.unit
class TestNumericRules:
    def test_normalize_decimal_separator(self):
        assert normalize_decimal_separator("1,50") == "1.50"
        assert normalize_decimal_separator("2.00") == "2.00"
        assert normalize_decimal_separator(3) == 3

    @pytest.mark.parametrize(
        "text,expected",
        [("3", 3.0), ("1,50", 1.5), ("2.00", 2.0), ("0", 0.0), ("0,000", 0.0)],
    )
    def test_parse_price(self, text, expected):
        assert parse_price(text) == expected

    def test_parse_price_rejects_overflow(self):
        with pytest.raises(ValueError, match="exceeds"):
            parse_price("9" * 400)

    def test_parse_price_rejects_underflow_of_non_zero_literal(self):
        with pytest.raises(ValueError, match="underflows"):
            parse_price("0," + "0" * 400 + "1")

    def test_parse_price_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_price("3x")

    def test_parse_price_accepts_numbers(self):
        assert parse_price(4) == 4.0
        with pytest.raises(ValueError):
            parse_price(math.inf)
