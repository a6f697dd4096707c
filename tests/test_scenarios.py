"""Tests for outcome scenario projection."""

import pytest

from strategy_advisor.scenarios import ScenarioAnalyzer, analyze_scenarios, round_half_up
from strategy_advisor.schema import Project


class TestRoundHalfUp:
    """Tests for rounding."""

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (2.4, 2)])
    def test_ties_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestScenarioAnalyzer:
    """Tests for scenario success rates and variances."""

    def test_medium_project(self, project):
        scenarios = analyze_scenarios(project, 0.5)
        # 50 - 5 (risk) + 4 (experience) + 0 (volatile) - 4 (complexity)
        assert scenarios.realistic.success_rate == 45
        assert scenarios.optimistic.success_rate == 60
        assert scenarios.pessimistic.success_rate == 20

    def test_budget_variance(self):
        project = Project(complexity="medium", risk_level="medium")
        scenarios = analyze_scenarios(project, 0.5)
        assert scenarios.realistic.budget_variance == 14
        assert scenarios.optimistic.budget_variance == -8
        assert scenarios.pessimistic.budget_variance == 42

    def test_optimistic_variances_are_savings(self, project):
        scenarios = analyze_scenarios(project, 0.7)
        assert scenarios.optimistic.budget_variance <= 0
        assert scenarios.optimistic.time_variance <= 0
        assert scenarios.pessimistic.budget_variance > scenarios.realistic.budget_variance > 0

    @pytest.mark.parametrize("strength", [0.0, 0.1, 0.45, 0.8, 0.99, 1.0])
    def test_ordering_and_bounds(self, strength):
        for project in [
            Project(),
            Project(complexity="critical", risk_level="critical", team_experience="junior",
                    requirements_stability="volatile"),
            Project(complexity="low", risk_level="low", team_experience="expert",
                    requirements_stability="stable"),
        ]:
            s = analyze_scenarios(project, strength)
            assert s.optimistic.success_rate >= s.realistic.success_rate >= s.pessimistic.success_rate
            assert 15 <= s.realistic.success_rate <= 98
            assert s.optimistic.success_rate <= 99
            assert s.pessimistic.success_rate >= 10

    def test_missing_parameters_use_medium(self):
        missing = analyze_scenarios(Project(), 0.6)
        medium = analyze_scenarios(
            Project(complexity="medium", risk_level="medium", team_experience="mixed",
                    requirements_stability="evolving"),
            0.6,
        )
        assert missing == medium

    def test_floor(self):
        project = Project(complexity="critical", risk_level="critical", team_experience="junior")
        assert ScenarioAnalyzer().analyze_scenarios(project, 0.0).realistic.success_rate == 15

    def test_descriptions_are_localized(self, project):
        scenarios = analyze_scenarios(project, 0.5)
        assert scenarios.realistic.description.get("en").startswith("Expected case")
        assert scenarios.realistic.description.get("uk")
