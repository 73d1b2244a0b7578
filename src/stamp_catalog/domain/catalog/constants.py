"""Stamp catalog domain - Constants."""

from typing import Final

RECORD_STAMP: Final[str] = "stamp"

ASCII_DIGITS: Final[frozenset] = frozenset("0123456789")
DECIMAL_SEPARATOR_CHARS: Final[frozenset] = frozenset(".,")

# Issue years are four digits with a leading 1 or 2 (1000-2999)
YEAR_LENGTH: Final[int] = 4
YEAR_LEADING_DIGITS: Final[frozenset] = frozenset("12")

# Output field separator between year, post office, price text and name
OUTPUT_SEPARATOR: Final[str] = " "
