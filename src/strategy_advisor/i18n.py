"""Message catalog for text emitted by the advisor and the forecaster.

Every message exists in English and in the fallback language (Ukrainian).
"""

from .schema import FALLBACK_LANGUAGE, LocalizedText


MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        # Key decision factors
        "factor.high_complexity": "High Complexity",
        "factor.critical_risk": "Critical Risk",
        "factor.junior_team": "Junior Team",
        "factor.volatile_requirements": "Volatile Requirements",
        "factor.cutting_edge": "Cutting-Edge Tech",
        "factor.large_team": "Large Team (>{threshold})",
        "factor.long_project": "Long Duration (>{threshold}mo)",
        "factor.high_budget": "High Budget",
        "factor.active_client": "Active Client",
        "factor.stable_requirements": "Stable Requirements",
        # Reasoning
        "reasoning.similar_cases": "{count} similar projects in knowledge base used this strategy",
        # Scenarios
        "scenario.optimistic": "Best case: experienced team, clear requirements, minimal risks materialize",
        "scenario.realistic": "Expected case: typical challenges, moderate scope changes",
        "scenario.pessimistic": "Worst case: key risks materialize, significant scope creep",
        # Forecast insights
        "insight.budget_overrun": "Budget Overrun",
        "insight.high_overrun": "Projected spend exceeds the budget by more than 10%",
        "insight.moderate_overrun": "Projected spend slightly exceeds the budget",
        "insight.on_budget": "Projected spend stays within the budget",
        "insight.velocity_trend": "Velocity Trend",
        "insight.declining_velocity": "Velocity is declining; delivery dates are at risk",
        "insight.improving_velocity": "Velocity is improving as the team matures",
        "insight.stable_velocity": "Velocity is stable",
        "insight.quality_risk": "Quality Risk",
        "insight.high_quality_risk": "Open bugs grow in the second half of the project",
        "insight.improving_quality": "Open bugs decrease in the second half of the project",
        "insight.stable_quality": "Open bug count is stable",
    },
    "uk": {
        "factor.high_complexity": "Висока складність",
        "factor.critical_risk": "Критичний ризик",
        "factor.junior_team": "Молодша команда",
        "factor.volatile_requirements": "Нестабільні вимоги",
        "factor.cutting_edge": "Найновіші технології",
        "factor.large_team": "Велика команда (>{threshold})",
        "factor.long_project": "Тривалий проєкт (>{threshold} міс)",
        "factor.high_budget": "Великий бюджет",
        "factor.active_client": "Активний клієнт",
        "factor.stable_requirements": "Стабільні вимоги",
        "reasoning.similar_cases": "{count} подібних проєктів у базі знань використовували цю стратегію",
        "scenario.optimistic": "Найкращий випадок: досвідчена команда, чіткі вимоги, мінімальні ризики",
        "scenario.realistic": "Очікуваний випадок: типові виклики, помірні зміни обсягу",
        "scenario.pessimistic": "Найгірший випадок: ключові ризики реалізуються, значне розширення обсягу",
        "insight.budget_overrun": "Перевищення бюджету",
        "insight.high_overrun": "Прогнозовані витрати перевищують бюджет більш ніж на 10%",
        "insight.moderate_overrun": "Прогнозовані витрати дещо перевищують бюджет",
        "insight.on_budget": "Прогнозовані витрати вкладаються в бюджет",
        "insight.velocity_trend": "Тренд швидкості",
        "insight.declining_velocity": "Швидкість знижується, терміни під загрозою",
        "insight.improving_velocity": "Швидкість зростає разом із досвідом команди",
        "insight.stable_velocity": "Швидкість стабільна",
        "insight.quality_risk": "Ризик якості",
        "insight.high_quality_risk": "Кількість відкритих дефектів зростає в другій половині проєкту",
        "insight.improving_quality": "Кількість відкритих дефектів зменшується в другій половині проєкту",
        "insight.stable_quality": "Кількість відкритих дефектів стабільна",
    },
}


def translate(key: str, language: str, **kwargs) -> str:
    """Get a message in the requested language.

    Falls back to the fallback language, then to the key itself.
    """
    catalog = MESSAGES.get(language) or MESSAGES[FALLBACK_LANGUAGE]
    template = catalog.get(key) or MESSAGES[FALLBACK_LANGUAGE].get(key, key)
    return template.format(**kwargs) if kwargs else template


def localized(key: str, **kwargs) -> LocalizedText:
    """Get a message in every available language."""
    return LocalizedText(translations={
        language: translate(key, language, **kwargs) for language in MESSAGES
    })
