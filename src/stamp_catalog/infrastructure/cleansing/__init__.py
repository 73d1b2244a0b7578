"""
Cleansing framework entry point.

Provides a rule registry plus the string and numeric rules used to normalize
catalog record fields. Field rule lists are declared in the packaged
``settings/cleansing_rules.yml``.

Usage:
    from stamp_catalog.infrastructure.cleansing import apply_field_rules

    name = apply_field_rules("  Penny   Black ", "stamp", "name")
"""

from typing import Any

from stamp_catalog.infrastructure.cleansing.registry import (
    CleansingRegistry,
    CleansingRule,
    get_cleansing_registry,
    load_field_rules,
    registry,
    rule,
)
from stamp_catalog.infrastructure.cleansing.rules.numeric_rules import (
    normalize_decimal_separator,
    parse_price,
)
from stamp_catalog.infrastructure.cleansing.rules.string_rules import (
    collapse_whitespace,
    normalize_text_field,
    strip_trailing_blanks,
)


def apply_field_rules(value: Any, record: str, field: str) -> Any:
    """Apply the declared rules for ``record.field`` to ``value``."""
    return registry.apply_rules(value, registry.get_field_rules(record, field))


__all__: list[str] = [
    "registry",
    "rule",
    "CleansingRule",
    "CleansingRegistry",
    "get_cleansing_registry",
    "load_field_rules",
    "apply_field_rules",
    "collapse_whitespace",
    "strip_trailing_blanks",
    "normalize_text_field",
    "normalize_decimal_separator",
    "parse_price",
]
