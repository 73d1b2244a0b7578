"""Built-in cleansing rules; importing this package registers them."""

from stamp_catalog.infrastructure.cleansing.rules import numeric_rules, string_rules

__all__ = ["numeric_rules", "string_rules"]
