"""Explainer - reasoning text and key decision factors.

Generates the human-readable parts of an analysis: why a strategy was
recommended and which project characteristics drive the decision.
"""

from typing import Callable, Optional

from .config import AdvisorConfig, get_config
from .i18n import translate
from .schema import Project, Rule


class RecommendationExplainer:
    """Generates explanations for strategy recommendations.

    Key decision factors are a fixed, ordered checklist: each true check
    appends its label, so the output order never depends on input order.

    Configuration:
    - Numeric thresholds can be customized via advisor-config.yaml
    """

    def __init__(self, config: Optional[AdvisorConfig] = None):
        """Initialize explainer with configuration."""
        cfg = (config or get_config()).key_factors
        self.large_team_size = cfg.large_team_size
        self.long_duration_months = cfg.long_duration_months
        self.high_budget = cfg.high_budget

    def build_reasoning(
        self,
        matched_rules: list[Rule],
        similar_count: int,
        language: str,
    ) -> list[str]:
        """Build reasoning lines for a strategy.

        Args:
            matched_rules: Rules that awarded points to the strategy
            similar_count: Number of top similar cases that used the strategy
            language: Language tag for emitted text

        Returns:
            Matched rule descriptions, then the similar-cases sentence
        """
        reasons = [rule.description.get(language) for rule in matched_rules]
        reasons = [reason for reason in reasons if reason]
        if similar_count > 0:
            reasons.append(translate("reasoning.similar_cases", language, count=similar_count))
        return reasons

    def key_factors(self, project: Project, language: str) -> list[str]:
        """Extract key decision factors for a project."""
        return [
            translate(key, language, **kwargs)
            for key, check, kwargs in self._checklist()
            if check(project)
        ]

    def _checklist(self) -> list[tuple[str, Callable[[Project], bool], dict]]:
        """Ordered (message key, check, message arguments) triples."""
        return [
            ("factor.high_complexity", lambda p: p.complexity in ("high", "critical"), {}),
            ("factor.critical_risk", lambda p: p.risk_level in ("high", "critical"), {}),
            ("factor.junior_team", lambda p: p.team_experience == "junior", {}),
            ("factor.volatile_requirements", lambda p: p.requirements_stability == "volatile", {}),
            ("factor.cutting_edge", lambda p: p.tech_stack_novelty == "cutting_edge", {}),
            (
                "factor.large_team",
                lambda p: p.team_size is not None and p.team_size > self.large_team_size,
                {"threshold": self.large_team_size},
            ),
            (
                "factor.long_project",
                lambda p: p.duration_months is not None and p.duration_months > self.long_duration_months,
                {"threshold": self.long_duration_months},
            ),
            ("factor.high_budget", lambda p: p.budget is not None and p.budget > self.high_budget, {}),
            ("factor.active_client", lambda p: p.client_involvement in ("active", "embedded"), {}),
            ("factor.stable_requirements", lambda p: p.requirements_stability == "stable", {}),
        ]
