"""Scenario Projector - outcome scenarios for a recommended strategy.

Derives optimistic, realistic and pessimistic success rates and
budget/time variances from the strategy's match strength and the
project's complexity, risk, experience and requirements stability.
"""

import math

from .i18n import localized
from .scales import SCALES
from .schema import Project, Scenario, ScenarioSet


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return int(math.floor(value + 0.5))


class ScenarioAnalyzer:
    """Projects outcome scenarios for a strategy.

    The realistic success rate starts from the match strength and is
    adjusted by project parameters; the other scenarios are fixed offsets
    from it, so optimistic >= realistic >= pessimistic always holds.
    """

    # Rank assumed when a parameter is missing (a "medium" project)
    DEFAULT_RANK = 2

    # Success rate bounds
    REALISTIC_FLOOR = 15
    REALISTIC_CEILING = 98
    OPTIMISTIC_OFFSET = 15
    OPTIMISTIC_CEILING = 99
    PESSIMISTIC_OFFSET = 25
    PESSIMISTIC_FLOOR = 10

    # Success rate adjustments per rank step above the lowest rank
    RISK_PENALTY = 5
    EXPERIENCE_BONUS = 4
    STABILITY_BONUS = 3
    COMPLEXITY_PENALTY = 4

    # Variance magnitude scaling per scenario
    OPTIMISTIC_VARIANCE = 0.3
    REALISTIC_VARIANCE = 0.5
    PESSIMISTIC_VARIANCE = 1.5

    def analyze_scenarios(self, project: Project, match_strength: float) -> ScenarioSet:
        """Build the three scenarios for a strategy.

        Args:
            project: Project being analyzed
            match_strength: Strategy match strength (0.0 - 1.0)

        Returns:
            Optimistic, realistic and pessimistic scenarios
        """
        complexity = self._rank("complexity", project.complexity)
        risk = self._rank("risk_level", project.risk_level)
        experience = self._rank("team_experience", project.team_experience)
        stability = self._rank("requirements_stability", project.requirements_stability)

        base = (
            match_strength * 100
            - (risk - 1) * self.RISK_PENALTY
            + (experience - 1) * self.EXPERIENCE_BONUS
            + (stability - 1) * self.STABILITY_BONUS
            - (complexity - 1) * self.COMPLEXITY_PENALTY
        )
        realistic = min(self.REALISTIC_CEILING, max(self.REALISTIC_FLOOR, base))
        optimistic = min(self.OPTIMISTIC_CEILING, realistic + self.OPTIMISTIC_OFFSET)
        pessimistic = max(self.PESSIMISTIC_FLOOR, realistic - self.PESSIMISTIC_OFFSET)

        budget_variance = (complexity * 0.08 + risk * 0.06) * 100
        time_variance = (complexity * 0.07 + (3 - stability) * 0.05) * 100

        return ScenarioSet(
            optimistic=Scenario(
                success_rate=round_half_up(optimistic),
                budget_variance=-round_half_up(budget_variance * self.OPTIMISTIC_VARIANCE),
                time_variance=-round_half_up(time_variance * self.OPTIMISTIC_VARIANCE),
                description=localized("scenario.optimistic"),
            ),
            realistic=Scenario(
                success_rate=round_half_up(realistic),
                budget_variance=round_half_up(budget_variance * self.REALISTIC_VARIANCE),
                time_variance=round_half_up(time_variance * self.REALISTIC_VARIANCE),
                description=localized("scenario.realistic"),
            ),
            pessimistic=Scenario(
                success_rate=round_half_up(pessimistic),
                budget_variance=round_half_up(budget_variance * self.PESSIMISTIC_VARIANCE),
                time_variance=round_half_up(time_variance * self.PESSIMISTIC_VARIANCE),
                description=localized("scenario.pessimistic"),
            ),
        )

    def _rank(self, feature: str, value) -> int:
        """Scale rank of a parameter, DEFAULT_RANK if missing or unknown."""
        return SCALES[feature].get(value, 0) or self.DEFAULT_RANK


def analyze_scenarios(project: Project, match_strength: float) -> ScenarioSet:
    """Build scenarios for a strategy (see ScenarioAnalyzer.analyze_scenarios)."""
    return ScenarioAnalyzer().analyze_scenarios(project, match_strength)
