"""Strategy recommendation engine for IT project management."""

from strategy_advisor.engine import InferenceEngine, run_analysis
from strategy_advisor.rules import RuleEngine, evaluate_rules
from strategy_advisor.scenarios import ScenarioAnalyzer, analyze_scenarios
from strategy_advisor.schema import (
    AnalysisResult,
    KnowledgeProject,
    LocalizedText,
    Project,
    Rule,
    Strategy,
    StrategyResult,
)
from strategy_advisor.similarity import SimilarityEngine

__all__ = [
    "InferenceEngine",
    "run_analysis",
    "RuleEngine",
    "evaluate_rules",
    "ScenarioAnalyzer",
    "analyze_scenarios",
    "SimilarityEngine",
    "AnalysisResult",
    "KnowledgeProject",
    "LocalizedText",
    "Project",
    "Rule",
    "Strategy",
    "StrategyResult",
]
