"""
Numeric cleansing rules.

Prices are written with either ``.`` or ``,`` as the decimal separator. The
grammar only lets digit strings with at most one separator through, so the
only failure left for these rules is a value the float type cannot represent.
"""

from __future__ import annotations

import math
from typing import Any

from stamp_catalog.infrastructure.cleansing.registry import rule

DECIMAL_SEPARATORS = {",": "."}


@rule(
    name="normalize_decimal_separator",
    description="Replace every comma with a period",
)
def normalize_decimal_separator(value: Any) -> Any:
    if not isinstance(value, str):
        return value

    normalized = value
    for separator, replacement in DECIMAL_SEPARATORS.items():
        normalized = normalized.replace(separator, replacement)
    return normalized


@rule(
    name="parse_price",
    description="Convert price text with '.' or ',' separator to float",
)
def parse_price(value: Any) -> float:
    """
    Convert a price literal to float.

    Args:
        value: Price text such as ``"3"``, ``"1,50"`` or ``"2.00"``

    Returns:
        The numeric value

    Raises:
        ValueError: If the text is not numeric, overflows to infinity, or a
            non-zero literal underflows to 0.0
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    elif isinstance(value, str):
        text = normalize_decimal_separator(value.strip())
        try:
            number = float(text)
        except ValueError:
            raise ValueError(f"Invalid price format: {value!r}")

        if number == 0.0 and any(ch in "123456789" for ch in text):
            raise ValueError(f"Price {value!r} underflows the float range")
    else:
        raise ValueError(f"Unsupported price type: {type(value).__name__}")

    if not math.isfinite(number):
        raise ValueError(f"Price {value!r} exceeds the float range")

    return number


__all__ = ["normalize_decimal_separator", "parse_price"]
