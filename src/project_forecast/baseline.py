"""Baseline Generator - synthetic weekly metric series.

Simulates how spend, velocity or open bugs evolve week by week from the
project's parameters, with bounded random noise.
"""

import math
import random
from typing import Optional

from strategy_advisor.schema import Project

from .config import ForecastConfig, get_config
from .schema import InvalidArgumentError, Metric, ScenarioKind, parse_enum


class BaselineGenerator:
    """Generates a weekly baseline series for a metric and scenario.

    Noise is drawn from an injectable random source, one draw per week;
    pass a seeded `random.Random` for reproducible series.
    """

    REQUIRED_FIELDS = {
        Metric.SPEND: "budget",
        Metric.VELOCITY: "team_size",
    }

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[ForecastConfig] = None,
    ):
        """Initialize generator with an optional random source and config."""
        self.rng = rng or random.Random()
        self.config = config or get_config()

    def generate(
        self,
        project: Project,
        metric: str,
        scenario: str = "realistic",
    ) -> list[float]:
        """Generate the baseline series.

        Args:
            project: Project parameters
            metric: "spend", "velocity" or "bugs"
            scenario: "optimistic", "realistic" or "pessimistic"

        Returns:
            One value per week (week 1 first)

        Raises:
            InvalidArgumentError: For an unknown metric or scenario.
        """
        metric = parse_enum(Metric, metric, "metric")
        scenario = parse_enum(ScenarioKind, scenario, "scenario")

        weeks = self.weeks_for(project)
        if weeks <= 0:
            raise InvalidArgumentError("Project duration_months is required to generate a baseline")
        required = self.REQUIRED_FIELDS.get(metric)
        if required and project.field_value(required) is None:
            raise InvalidArgumentError(f"Project {required} is required for the {metric.value} metric")

        scenario_mult = self.config.multipliers.scenario.get(scenario.value, 1.0)

        if metric == Metric.SPEND:
            return self._spend(project, weeks, scenario_mult)
        if metric == Metric.VELOCITY:
            return self._velocity(project, weeks, scenario_mult)
        return self._bugs(project, weeks, scenario_mult)

    def weeks_for(self, project: Project) -> int:
        """Number of simulated weeks for the project's duration."""
        months = project.duration_months or 0
        return math.ceil(months * self.config.baseline.weeks_per_month)

    def _noise(self, low: float, high: float) -> float:
        """Uniform noise in [low, high)."""
        return low + self.rng.random() * (high - low)

    def _spend(self, project: Project, weeks: int, scenario_mult: float) -> list[float]:
        """Weekly spend ($/week): a mid-project wave around the budget rate."""
        cfg = self.config.baseline
        risk_mult = self.config.multipliers.risk.get(project.risk_level, 1.0)
        base = (project.budget or 0) / weeks * risk_mult * scenario_mult

        series = []
        for t in range(weeks):
            wave = 1 + cfg.spend_wave_amplitude * math.sin(t / weeks * math.pi)
            value = base * wave * (1 + self._noise(-cfg.spend_noise, cfg.spend_noise))
            series.append(max(0.0, value))
        return series

    def _velocity(self, project: Project, weeks: int, scenario_mult: float) -> list[float]:
        """Weekly velocity (story points/week) with a learning curve."""
        cfg = self.config.baseline
        multipliers = self.config.multipliers
        exp_mult = multipliers.experience.get(project.team_experience, 1.0)
        complexity_mult = multipliers.complexity.get(project.complexity, 1.0)
        base = (project.team_size or 0) * cfg.velocity_points_per_person * exp_mult
        base *= complexity_mult * scenario_mult

        series = []
        for t in range(weeks):
            learning_curve = 1 + t / weeks * cfg.velocity_learning_gain
            value = base * learning_curve * (1 + self._noise(-cfg.velocity_noise, cfg.velocity_noise))
            series.append(max(0.0, value))
        return series

    def _bugs(self, project: Project, weeks: int, scenario_mult: float) -> list[float]:
        """Open bugs: peak mid-project, drift with requirements stability."""
        cfg = self.config.baseline
        multipliers = self.config.multipliers
        complexity_score = multipliers.bug_complexity_score.get(
            project.complexity, multipliers.default_bug_complexity_score
        )
        risk_score = multipliers.bug_risk_score.get(project.risk_level, multipliers.default_bug_risk_score)
        stability_trend = multipliers.stability_trend.get(project.requirements_stability, 0.0)
        base = complexity_score * risk_score * scenario_mult

        series = []
        for t in range(weeks):
            lifecycle = base * (1 + math.sin(t / weeks * math.pi))
            trend = stability_trend * (t / weeks) * base
            value = lifecycle + trend + self._noise(-cfg.bug_noise, cfg.bug_noise)
            series.append(float(max(0, math.floor(value + 0.5))))
        return series


def generate_baseline(
    project: Project,
    metric: str,
    scenario: str = "realistic",
    rng: Optional[random.Random] = None,
) -> list[float]:
    """Generate a baseline series (see BaselineGenerator.generate)."""
    return BaselineGenerator(rng).generate(project, metric, scenario)
