"""Inference Engine - orchestrates the Strategy Advisor.

Combines rule-based inference and case-based reasoning into a ranked list
of strategies with scenarios, reasoning and key decision factors.

Pipeline:
1. Rule Engine - rule points per strategy
2. Similarity Engine - top similar knowledge-base cases
3. Scoring - normalized rule score + case score per strategy
4. Scenario Projector - outcome scenarios per strategy
5. Explainer - reasoning text and key decision factors
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from .config import AdvisorConfig, get_config
from .explainer import RecommendationExplainer
from .rules import MalformedRuleError, RuleEngine, parse_conditions
from .scenarios import ScenarioAnalyzer, round_half_up
from .schema import (
    AnalysisResult,
    KnowledgeProject,
    Project,
    Rule,
    SimilarProjectSummary,
    Strategy,
    StrategyResult,
)
from .similarity import SimilarityEngine

logger = logging.getLogger(__name__)


@dataclass
class CaseScore:
    """Support a strategy receives from the top similar cases."""
    total_similarity: float = 0.0
    count: int = 0
    success_bonus: float = 0.0


class InferenceEngine:
    """Hybrid rule-based and case-based strategy recommender.

    Usage:
        engine = InferenceEngine()
        result = engine.run_analysis(project, knowledge, strategies, rules, "en")
    """

    def __init__(self, config: Optional[AdvisorConfig] = None):
        """Initialize the engine and its components."""
        self.config = config or get_config()
        self.rule_engine = RuleEngine()
        self.similarity_engine = SimilarityEngine(self.config.similarity.feature_weights)
        self.scenario_analyzer = ScenarioAnalyzer()
        self.explainer = RecommendationExplainer(self.config)

    def run_analysis(
        self,
        project: Project,
        knowledge: list[KnowledgeProject],
        strategies: list[Strategy],
        rules: list[Rule],
        language: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze a project and rank candidate strategies.

        Args:
            project: Project to analyze
            knowledge: Historical projects for case-based reasoning
            strategies: Candidate strategies
            rules: Strategy rules
            language: Language tag for emitted text (config default if None)

        Returns:
            Ranked strategies, top similar projects and key factors
        """
        language = language or self.config.default_language
        scoring = self.config.scoring

        # Phase 1: Rule-based inference
        rule_scores = self.rule_engine.evaluate_rules(project, rules)

        # Phase 2: Case-based reasoning
        ranked_cases = self.similarity_engine.find_similar_projects(project, knowledge)
        top_cases = ranked_cases[:self.config.similarity.top_similar]
        case_scores = self._aggregate_cases(top_cases)

        # Phase 3-5: Score, project scenarios and explain each strategy
        max_rule_points = max([score.points for score in rule_scores.values()] + [1])

        results = []
        for strategy in strategies:
            rule_score = rule_scores.get(strategy.id)
            points = rule_score.points if rule_score else 0
            matched_rules = rule_score.matched_rules if rule_score else []
            cases = case_scores.get(strategy.id, CaseScore())

            normalized_rule = points / max_rule_points * scoring.rule_scale
            normalized_cases = 0.0
            if cases.count > 0:
                normalized_cases = (
                    cases.total_similarity / cases.count * scoring.cbr_scale
                    + cases.success_bonus * scoring.success_bonus_scale
                )

            match_score = min(scoring.max_match_score, round_half_up(normalized_rule + normalized_cases))
            match_score = max(0, match_score)

            results.append(StrategyResult(
                strategy=strategy,
                match_score=match_score,
                scenarios=self.scenario_analyzer.analyze_scenarios(project, match_score / 100),
                reasoning=self.explainer.build_reasoning(matched_rules, cases.count, language),
                matched_rules_count=len(matched_rules),
                similar_projects_count=cases.count,
            ))

        results.sort(key=lambda r: r.match_score, reverse=True)

        logger.debug(
            "Analyzed project %s: %d strategies, %d rule-scored, %d similar cases",
            project.id, len(results), len(rule_scores), len(top_cases),
        )

        return AnalysisResult(
            language=language,
            strategies=results,
            similar_projects=self._summarize_cases(top_cases, strategies, language),
            key_factors=self.explainer.key_factors(project, language),
        )

    def _aggregate_cases(
        self,
        top_cases: list[tuple[KnowledgeProject, float]],
    ) -> dict[str, CaseScore]:
        """Aggregate case support per strategy id."""
        factor = self.config.scoring.success_bonus_factor
        case_scores: dict[str, CaseScore] = {}
        for case, similarity in top_cases:
            if not case.strategy_id:
                continue
            score = case_scores.setdefault(case.strategy_id, CaseScore())
            score.total_similarity += similarity
            score.count += 1
            if case.outcome == "success":
                score.success_bonus += similarity * factor
        return case_scores

    def _summarize_cases(
        self,
        top_cases: list[tuple[KnowledgeProject, float]],
        strategies: list[Strategy],
        language: str,
    ) -> list[SimilarProjectSummary]:
        """Build output summaries for the top similar cases."""
        names = {strategy.id: strategy.name.get(language) for strategy in strategies}
        return [
            SimilarProjectSummary(
                id=case.id,
                name=case.name,
                similarity=min(100, max(0, round_half_up(similarity * 100))),
                strategy_id=case.strategy_id,
                strategy_name=names.get(case.strategy_id, ""),
                outcome=case.outcome,
                description=case.description,
            )
            for case, similarity in top_cases
        ]


def run_analysis(
    project: Project,
    knowledge: list[KnowledgeProject],
    strategies: list[Strategy],
    rules: list[Rule],
    language: Optional[str] = None,
) -> AnalysisResult:
    """Analyze a project (see InferenceEngine.run_analysis)."""
    return InferenceEngine().run_analysis(project, knowledge, strategies, rules, language)


# =============================================================================
# Input Loading and Validation
# =============================================================================


def _load_json(file_path: str) -> Any:
    """Load a UTF-8 JSON file."""
    path = Path(file_path)
    if not path.exists():
        raise ValueError(f"File not found: {file_path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e


def _load_list(file_path: str) -> list[Any]:
    """Load a JSON file holding an array (a single object is wrapped)."""
    data = _load_json(file_path)
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array or object in {file_path}")
    return data


def load_project(file_path: str) -> Project:
    """Load a project from a JSON file (an object or a one-item array)."""
    data = _load_list(file_path)
    if len(data) != 1:
        raise ValueError(f"Expected exactly 1 project, got {len(data)}")
    return Project.model_validate(data[0])


def load_knowledge_projects(file_path: str) -> list[KnowledgeProject]:
    """Load knowledge-base projects from a JSON file."""
    return [KnowledgeProject.model_validate(item) for item in _load_list(file_path)]


def load_strategies(file_path: str) -> list[Strategy]:
    """Load strategies from a JSON file."""
    return [Strategy.model_validate(item) for item in _load_list(file_path)]


def load_rules(file_path: str) -> list[Rule]:
    """Load rules from a JSON file."""
    return [Rule.model_validate(item) for item in _load_list(file_path)]


def validate_input(file_path: str, kind: str) -> tuple[bool, list[str]]:
    """Validate an input file.

    Args:
        file_path: Path to the JSON file
        kind: One of "project", "knowledge", "strategies", "rules"

    Returns:
        Tuple of (is_valid, list of issues)
    """
    loaders = {
        "project": load_project,
        "knowledge": load_knowledge_projects,
        "strategies": load_strategies,
        "rules": load_rules,
    }
    issues = []

    try:
        loaded = loaders[kind](file_path)
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            issues.append(f"{location}: {error['msg']}")
        return False, issues
    except ValueError as e:
        return False, [str(e)]

    if kind == "rules":
        for index, rule in enumerate(loaded):
            try:
                parse_conditions(rule)
            except MalformedRuleError as e:
                issues.append(f"Rule {rule.id or index}: {e} (will be skipped)")

    if kind == "strategies":
        ids = [strategy.id for strategy in loaded]
        duplicates = sorted({sid for sid in ids if ids.count(sid) > 1})
        if duplicates:
            issues.append(f"Duplicate strategy ids: {', '.join(duplicates)}")
            return False, issues

    # Unparsable rules are skipped at analysis time, so they only warn
    return True, issues
