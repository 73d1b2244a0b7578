"""String cleansing rules for free-text record fields."""

from __future__ import annotations

import re
from typing import Any

from stamp_catalog.infrastructure.cleansing.registry import rule

_WHITESPACE_RUN = re.compile(r"\s+")
_TRAILING_BLANKS = " \t"


@rule(
    name="collapse_whitespace",
    description="Replace every run of whitespace characters with a single space",
)
def collapse_whitespace(value: Any) -> Any:
    """Collapse whitespace runs (spaces, tabs, any Unicode whitespace) to one space."""
    if not isinstance(value, str):
        return value
    return _WHITESPACE_RUN.sub(" ", value)


@rule(
    name="strip_trailing_blanks",
    description="Remove trailing spaces and tabs",
)
def strip_trailing_blanks(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return value.rstrip(_TRAILING_BLANKS)


@rule(
    name="normalize_text_field",
    description="Collapse whitespace runs, then strip trailing blanks",
)
def normalize_text_field(value: Any) -> Any:
    """
    Canonical form of a name or post office field.

    A field made only of whitespace becomes the empty string. Applying the
    rule twice is a no-op.
    """
    return strip_trailing_blanks(collapse_whitespace(value))


__all__ = ["collapse_whitespace", "strip_trailing_blanks", "normalize_text_field"]
