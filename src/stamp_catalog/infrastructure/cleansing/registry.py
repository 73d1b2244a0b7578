"""
Cleansing rule registry.

Rules are plain functions registered through the ``@rule`` decorator and looked
up by name. Which rules run on which record field is declared in the packaged
``settings/cleansing_rules.yml``; the file ships with the package, is read once
per process and cannot be swapped at runtime, so the field normalization is the
same for every run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

FIELD_RULES_PATH = Path(__file__).resolve().parent / "settings" / "cleansing_rules.yml"

FieldRules = Dict[str, Dict[str, Tuple[str, ...]]]


@dataclass(frozen=True)
class CleansingRule:
    """A named single-argument transformation of a field value."""

    name: str
    func: Callable[[Any], Any]
    description: str

    def __post_init__(self):
        if not callable(self.func):
            raise ValueError(f"Rule {self.name} must have a callable function")


def load_field_rules(path: Path, known_rules: Iterable[str]) -> FieldRules:
    """
    Read a field rule file of the form ``records: {record: {field: [rule, ...]}}``.

    Args:
        path: YAML file to read
        known_rules: Names every referenced rule must belong to

    Returns:
        Rule name tuples keyed by record, then field

    Raises:
        ValueError: If the file is malformed or names an unregistered rule
    """
    with path.open("r", encoding="utf-8") as handle:
        parsed = yaml.safe_load(handle) or {}

    records = parsed.get("records")
    if not isinstance(records, dict) or not records:
        raise ValueError(f"{path.name}: 'records' must be a non-empty mapping")

    known = set(known_rules)
    field_rules: FieldRules = {}
    for record, fields in records.items():
        if not isinstance(fields, dict):
            raise ValueError(f"{path.name}: record '{record}' must be a mapping")
        field_rules[record] = {}
        for field_name, names in fields.items():
            label = f"{record}.{field_name}"
            if not isinstance(names, list) or not names:
                raise ValueError(f"{path.name}: '{label}' must list at least one rule")
            unknown = [name for name in names if name not in known]
            if unknown:
                raise ValueError(
                    f"{path.name}: rule(s) {unknown} referenced in '{label}' "
                    "are not registered"
                )
            field_rules[record][field_name] = tuple(names)
    return field_rules


class CleansingRegistry:
    """Registered rules plus the packaged field rule declarations."""

    def __init__(self, field_rules_path: Path = FIELD_RULES_PATH) -> None:
        self._rules: Dict[str, CleansingRule] = {}
        self._field_rules_path = field_rules_path
        self._field_rules: Optional[FieldRules] = None
        self._lock = RLock()

    def register(self, rule: CleansingRule) -> None:
        if rule.name in self._rules:
            logger.warning("Overriding existing rule: %s", rule.name)
        self._rules[rule.name] = rule
        logger.debug("Registered cleansing rule: %s", rule.name)

    def get_rule(self, name: str) -> Optional[CleansingRule]:
        return self._rules.get(name)

    def rule_names(self) -> List[str]:
        return sorted(self._rules)

    def apply_rule(self, value: Any, rule_name: str) -> Any:
        """Run a single named rule on ``value``.

        Raises:
            ValueError: If the rule is unknown or the rule itself rejects the value
        """
        rule = self.get_rule(rule_name)
        if rule is None:
            raise ValueError(
                f"Cleansing rule '{rule_name}' not registered. "
                f"Available: {self.rule_names()}"
            )

        try:
            return rule.func(value)
        except ValueError as exc:
            raise ValueError(
                f"Cleansing rule '{rule_name}' failed for value '{value}': {exc}"
            ) from exc

    def apply_rules(self, value: Any, rule_names: Iterable[str]) -> Any:
        """Run rules in order, feeding each result into the next."""
        result = value
        for rule_name in rule_names:
            result = self.apply_rule(result, rule_name)
        return result

    def get_field_rules(self, record: str, field: str) -> Tuple[str, ...]:
        """Return the declared rule names for ``record.field``.

        Raises:
            KeyError: If the packaged declarations have no entry for the field
        """
        field_rules = self._load_field_rules()
        try:
            return field_rules[record][field]
        except KeyError:
            raise KeyError(f"No cleansing rules declared for '{record}.{field}'")

    def _load_field_rules(self) -> FieldRules:
        with self._lock:
            if self._field_rules is None:
                self._field_rules = load_field_rules(
                    self._field_rules_path, self._rules
                )
                logger.debug("Loaded field rules from %s", self._field_rules_path)
            return self._field_rules


registry = CleansingRegistry()


def rule(name: str, description: str):
    """
    Register the decorated function as a cleansing rule.

    Example:
        @rule(
            name="collapse_whitespace",
            description="Collapse whitespace runs to one space",
        )
        def collapse_whitespace(value):
            return _WHITESPACE_RUN.sub(" ", value)
    """

    def decorator(func: Callable) -> Callable:
        rule_obj = CleansingRule(name=name, func=func, description=description)
        registry.register(rule_obj)
        func._cleansing_rule = rule_obj  # type: ignore[attr-defined]
        return func

    return decorator


def get_cleansing_registry() -> CleansingRegistry:
    """Dependency-injection helper returning the global registry."""
    return registry
