"""Unit tests for CleansingRegistry behaviour and the packaged field rules."""

from pathlib import Path

import pytest

from stamp_catalog.infrastructure.cleansing import (
    CleansingRegistry,
    CleansingRule,
    apply_field_rules,
    get_cleansing_registry,
    load_field_rules,
)

BUILTIN_RULES = {
    "collapse_whitespace",
    "strip_trailing_blanks",
    "normalize_text_field",
    "normalize_decimal_separator",
    "parse_price",
}


@pytest.mark.unit
class TestCleansingRegistry:
    def setup_method(self):
        self.registry = get_cleansing_registry()

    def test_builtin_rules_registered(self):
        assert BUILTIN_RULES <= set(self.registry.rule_names())

    def test_apply_rule_known_rule(self):
        assert self.registry.apply_rule("a  b ", "normalize_text_field") == "a b"

    def test_apply_rule_unknown_raises(self):
        with pytest.raises(ValueError) as exc_info:
            self.registry.apply_rule("value", "__missing_rule__")
        assert "not registered" in str(exc_info.value)

    def test_apply_rule_wraps_rule_failure(self):
        with pytest.raises(ValueError, match="parse_price"):
            self.registry.apply_rule("9" * 400, "parse_price")

    def test_apply_rules_executes_in_order(self):
        result = self.registry.apply_rules(
            "1,5", ["normalize_decimal_separator", "parse_price"]
        )
        assert result == 1.5

    def test_packaged_field_rules(self):
        assert self.registry.get_field_rules("stamp", "name") == ("normalize_text_field",)
        assert self.registry.get_field_rules("stamp", "post_office") == (
            "normalize_text_field",
        )
        assert self.registry.get_field_rules("stamp", "price") == ("parse_price",)

    def test_undeclared_field_raises(self):
        with pytest.raises(KeyError, match="stamp.unknown"):
            self.registry.get_field_rules("stamp", "unknown")

    def test_apply_field_rules(self):
        assert apply_field_rules("Port   Louis  ", "stamp", "post_office") == "Port Louis"
        assert apply_field_rules("   ", "stamp", "name") == ""
        assert apply_field_rules("1,50", "stamp", "price") == 1.5


@pytest.mark.unit
class TestFieldRuleLoading:
    def _write(self, tmp_path: Path, text: str) -> Path:
        path = tmp_path / "rules.yml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_loads_rule_tuples(self, tmp_path: Path):
        path = self._write(
            tmp_path, "records:\n  stamp:\n    name:\n      - collapse_whitespace\n"
        )
        assert load_field_rules(path, BUILTIN_RULES) == {
            "stamp": {"name": ("collapse_whitespace",)}
        }

    def test_unknown_rule_fails(self, tmp_path: Path):
        path = self._write(
            tmp_path, "records:\n  stamp:\n    name:\n      - no_such_rule\n"
        )
        with pytest.raises(ValueError, match="not registered"):
            load_field_rules(path, BUILTIN_RULES)

    def test_empty_rule_list_fails(self, tmp_path: Path):
        path = self._write(tmp_path, "records:\n  stamp:\n    price: []\n")
        with pytest.raises(ValueError, match="at least one rule"):
            load_field_rules(path, BUILTIN_RULES)

    def test_missing_records_fails(self, tmp_path: Path):
        path = self._write(tmp_path, "default_rules: []\n")
        with pytest.raises(ValueError, match="records"):
            load_field_rules(path, BUILTIN_RULES)

    def test_field_rules_are_read_once(self, tmp_path: Path):
        path = self._write(
            tmp_path, "records:\n  stamp:\n    name:\n      - upper\n"
        )
        registry = CleansingRegistry(field_rules_path=path)
        registry.register(CleansingRule("upper", str.upper, "Upper-case"))

        assert registry.get_field_rules("stamp", "name") == ("upper",)
        path.unlink()
        assert registry.get_field_rules("stamp", "name") == ("upper",)
