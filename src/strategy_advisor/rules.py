"""Rule Engine - rule-based inference for the Strategy Advisor.

Evaluates declarative condition rules against a project and accumulates
points per strategy. A rule matches only if every clause matches.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from .scales import numeric_value
from .schema import (
    Condition,
    EqualsCondition,
    Project,
    RangeCondition,
    Rule,
    SetMembershipCondition,
)

logger = logging.getLogger(__name__)


class MalformedRuleError(ValueError):
    """Raised when a rule's condition payload cannot be parsed."""


@dataclass
class RuleScore:
    """Points and matched rules accumulated for one strategy."""
    points: float = 0.0
    matched_rules: list[Rule] = field(default_factory=list)


def parse_clause(clause: Any) -> list[Condition]:
    """Parse one field clause into its ordered list of tests.

    A literal becomes an exact-match test. A mapping may combine `min`,
    `max`, `eq` and `in`; the tests run in that order. A bare list is
    malformed; list membership is written as `{"in": [...]}`.
    """
    if isinstance(clause, list):
        raise MalformedRuleError(f"Use {{\"in\": [...]}} for a list of values: {clause}")
    if not isinstance(clause, dict):
        return [EqualsCondition(value=clause)]

    tests: list[Condition] = []
    if clause.get("min") is not None or clause.get("max") is not None:
        try:
            tests.append(RangeCondition(minimum=clause.get("min"), maximum=clause.get("max")))
        except ValueError as e:
            raise MalformedRuleError(f"Invalid range bounds: {clause}") from e
    if clause.get("eq") is not None:
        tests.append(EqualsCondition(value=clause["eq"]))
    if clause.get("in") is not None:
        if not isinstance(clause["in"], list):
            raise MalformedRuleError(f"'in' must be a list: {clause}")
        tests.append(SetMembershipCondition(values=clause["in"]))
    return tests


def parse_conditions(rule: Rule) -> dict[str, list[Condition]]:
    """Parse a rule's conditions payload.

    Raises:
        MalformedRuleError: If the payload is not valid JSON or not a mapping.
    """
    try:
        raw = rule.raw_conditions()
    except json.JSONDecodeError as e:
        raise MalformedRuleError(f"Conditions are not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise MalformedRuleError(f"Conditions must be a mapping, got {type(raw).__name__}")

    return {str(name): parse_clause(clause) for name, clause in raw.items()}


class RuleEngine:
    """Evaluates strategy rules against a project.

    Malformed rules are skipped, never fatal. A clause on a field the
    project does not have fails the rule.
    """

    def evaluate_rules(self, project: Project, rules: list[Rule]) -> dict[str, RuleScore]:
        """Evaluate all rules and accumulate points per strategy.

        Args:
            project: Project to evaluate
            rules: Rules to apply, in order

        Returns:
            Mapping of strategy id to accumulated score (only strategies
            with at least one matched rule appear)
        """
        scores: dict[str, RuleScore] = {}

        for rule in rules:
            try:
                conditions = parse_conditions(rule)
            except MalformedRuleError as e:
                logger.warning("Skipping rule %s for strategy %s: %s", rule.id, rule.strategy_id, e)
                continue

            if not self._matches(project, conditions):
                continue

            score = scores.setdefault(rule.strategy_id, RuleScore())
            score.points += rule.weight or 1
            score.matched_rules.append(rule)

        return scores

    def _matches(self, project: Project, conditions: dict[str, list[Condition]]) -> bool:
        """Check if every clause matches (short-circuits on first failure)."""
        for name, tests in conditions.items():
            value = project.field_value(name)
            if value is None:
                return False
            for test in tests:
                if not self._check_condition(name, value, test):
                    return False
        return True

    def _check_condition(self, name: str, value: Any, condition: Condition) -> bool:
        """Check a single test against a project value."""
        if isinstance(condition, EqualsCondition):
            return value == condition.value

        if isinstance(condition, SetMembershipCondition):
            return value in condition.values

        # Range tests compare numbers; categories compare by scale rank
        number = value if isinstance(value, (int, float)) and not isinstance(value, bool) else numeric_value(name, value)
        if condition.minimum is not None and number < condition.minimum:
            return False
        if condition.maximum is not None and number > condition.maximum:
            return False
        return True


def evaluate_rules(project: Project, rules: list[Rule]) -> dict[str, RuleScore]:
    """Evaluate rules against a project (see RuleEngine.evaluate_rules)."""
    return RuleEngine().evaluate_rules(project, rules)
