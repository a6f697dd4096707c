"""Project-management insights derived from a forecast baseline.

- spend: projected total spend against the budget
- velocity: last week's velocity against the average
- bugs: second-half open bugs against the first half
"""

from typing import Optional

from strategy_advisor.i18n import translate
from strategy_advisor.schema import Project

from .schema import ForecastResult, Insight, InsightLevel, Metric


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _change_pct(current: float, reference: float) -> float:
    """Relative change in percent (0 for a zero reference)."""
    if reference == 0:
        return 0.0
    return (current - reference) / reference * 100


def _insight(level: InsightLevel, title_key: str, description_key: str, change: float, language: str) -> Insight:
    sign = "+" if change > 0 else ""
    return Insight(
        level=level,
        title=translate(title_key, language),
        value=f"{sign}{change:.1f}%",
        description=translate(description_key, language),
        change_pct=change,
    )


def budget_insight(baseline: list[float], budget: Optional[float], language: str) -> Insight:
    """Budget overrun of the total projected spend."""
    overrun = _change_pct(sum(baseline), budget or 0)
    if overrun > 10:
        level, description = InsightLevel.WARNING, "insight.high_overrun"
    elif overrun > 0:
        level, description = InsightLevel.INFO, "insight.moderate_overrun"
    else:
        level, description = InsightLevel.SUCCESS, "insight.on_budget"
    return _insight(level, "insight.budget_overrun", description, overrun, language)


def velocity_insight(baseline: list[float], language: str) -> Insight:
    """Trend of the last week's velocity against the average."""
    trend = _change_pct(baseline[-1], _mean(baseline)) if baseline else 0.0
    if trend < -10:
        level, description = InsightLevel.WARNING, "insight.declining_velocity"
    elif trend > 10:
        level, description = InsightLevel.SUCCESS, "insight.improving_velocity"
    else:
        level, description = InsightLevel.INFO, "insight.stable_velocity"
    return _insight(level, "insight.velocity_trend", description, trend, language)


def quality_insight(baseline: list[float], language: str) -> Insight:
    """Trend of open bugs between the two halves of the project."""
    middle = len(baseline) // 2
    trend = _change_pct(_mean(baseline[middle:]), _mean(baseline[:middle]))
    if trend > 20:
        level, description = InsightLevel.WARNING, "insight.high_quality_risk"
    elif trend < -20:
        level, description = InsightLevel.SUCCESS, "insight.improving_quality"
    else:
        level, description = InsightLevel.INFO, "insight.stable_quality"
    return _insight(level, "insight.quality_risk", description, trend, language)


def generate_insights(result: ForecastResult, project: Project, language: str = "uk") -> list[Insight]:
    """Generate insights for a forecast result."""
    if result.metric == Metric.SPEND:
        return [budget_insight(result.baseline, project.budget, language)]
    if result.metric == Metric.VELOCITY:
        return [velocity_insight(result.baseline, language)]
    return [quality_insight(result.baseline, language)]
