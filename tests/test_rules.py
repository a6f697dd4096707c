"""Tests for rule parsing and evaluation."""

import logging

import pytest

from strategy_advisor.rules import (
    MalformedRuleError,
    RuleEngine,
    evaluate_rules,
    parse_clause,
    parse_conditions,
)
from strategy_advisor.schema import (
    EqualsCondition,
    Project,
    RangeCondition,
    Rule,
    SetMembershipCondition,
)


def make_rule(conditions, strategy_id="s1", weight=None, **kwargs) -> Rule:
    return Rule.model_validate({
        "strategy_id": strategy_id,
        "conditions": conditions,
        "weight": weight,
        **kwargs,
    })


class TestParseClause:
    """Tests for clause parsing."""

    def test_literal_is_equals(self):
        assert parse_clause("high") == [EqualsCondition(value="high")]

    def test_mapping_order(self):
        tests = parse_clause({"in": ["a"], "eq": "a", "min": 1})
        assert [type(t) for t in tests] == [RangeCondition, EqualsCondition, SetMembershipCondition]

    def test_only_max(self):
        assert parse_clause({"max": 5}) == [RangeCondition(maximum=5)]

    def test_in_must_be_list(self):
        with pytest.raises(MalformedRuleError):
            parse_clause({"in": "abc"})

    def test_invalid_json(self):
        with pytest.raises(MalformedRuleError):
            parse_conditions(make_rule("{not json"))

    def test_bare_list_is_malformed(self):
        with pytest.raises(MalformedRuleError):
            parse_clause(["high", "low"])

    def test_non_mapping(self):
        with pytest.raises(MalformedRuleError):
            parse_conditions(make_rule("[1, 2]"))


class TestRuleEngine:
    """Tests for rule evaluation."""

    def test_all_clauses_must_match(self):
        project = Project(team_size=10, complexity="high")
        rules = [
            make_rule({"complexity": "high", "team_size": {"min": 5}}, "a"),
            make_rule({"complexity": "high", "team_size": {"min": 50}}, "b"),
        ]
        scores = RuleEngine().evaluate_rules(project, rules)
        assert set(scores) == {"a"}

    def test_weights_accumulate(self):
        project = Project(complexity="high")
        rules = [
            make_rule({"complexity": "high"}, "a", weight=2.5),
            make_rule({"complexity": "high"}, "a"),
        ]
        score = evaluate_rules(project, rules)["a"]
        assert score.points == pytest.approx(3.5)
        assert len(score.matched_rules) == 2

    def test_zero_weight_counts_as_one(self):
        project = Project(complexity="high")
        score = evaluate_rules(project, [make_rule({"complexity": "high"}, "a", weight=0)])["a"]
        assert score.points == 1
        assert len(score.matched_rules) == 1

    def test_missing_field_fails(self):
        project = Project(team_size=10)
        assert evaluate_rules(project, [make_rule({"budget": {"max": 1000}})]) == {}

    def test_categorical_range_uses_scale_rank(self):
        project = Project(risk_level="high")
        assert "s1" in evaluate_rules(project, [make_rule({"risk_level": {"min": 3}})])
        assert evaluate_rules(project, [make_rule({"risk_level": {"min": 4}})]) == {}

    def test_inclusive_bounds(self):
        project = Project(team_size=5)
        assert "s1" in evaluate_rules(project, [make_rule({"team_size": {"min": 5, "max": 5}})])

    def test_set_membership(self):
        project = Project(project_type="migration")
        rules = [make_rule({"project_type": {"in": ["migration", "integration"]}})]
        assert "s1" in evaluate_rules(project, rules)

    def test_extra_field(self):
        project = Project.model_validate({"region": "eu"})
        assert "s1" in evaluate_rules(project, [make_rule({"region": "eu"})])

    def test_empty_conditions_match(self):
        assert "s1" in evaluate_rules(Project(), [make_rule({})])

    def test_malformed_rule_is_skipped(self, caplog):
        project = Project(complexity="high")
        rules = [
            make_rule("{broken", "a", id="bad"),
            make_rule({"complexity": "high"}, "b"),
        ]
        with caplog.at_level(logging.WARNING, logger="strategy_advisor.rules"):
            scores = evaluate_rules(project, rules)
        assert set(scores) == {"b"}
        assert "bad" in caplog.text

    def test_bare_list_rule_is_skipped(self):
        project = Project(complexity="high")
        rules = [
            make_rule({"complexity": ["high", "low"]}, "a"),
            make_rule({"complexity": {"in": ["high", "low"]}}, "b"),
        ]
        assert set(evaluate_rules(project, rules)) == {"b"}

    def test_no_rules(self, project):
        assert evaluate_rules(project, []) == {}
