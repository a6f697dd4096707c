"""Pydantic models for the Strategy Advisor.

Input schemas for projects, knowledge-base cases, strategies and rules,
and output schemas for ranked strategy recommendations.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator


FALLBACK_LANGUAGE = "uk"


# =============================================================================
# Project Parameter Enums
# =============================================================================


class ComplexityLevel(str, Enum):
    """Technical complexity of the project."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ProjectType(str, Enum):
    """Kind of work the project delivers."""
    SUPPORT = "support"
    MIGRATION = "migration"
    DEVELOPMENT = "development"
    INTEGRATION = "integration"
    RESEARCH = "research"


class RiskLevel(str, Enum):
    """Overall project risk."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TeamExperience(str, Enum):
    """Seniority mix of the delivery team."""
    JUNIOR = "junior"
    MIXED = "mixed"
    SENIOR = "senior"
    EXPERT = "expert"


class ClientInvolvement(str, Enum):
    """How closely the client works with the team."""
    MINIMAL = "minimal"
    MODERATE = "moderate"
    ACTIVE = "active"
    EMBEDDED = "embedded"


class RequirementsStability(str, Enum):
    """How often requirements change."""
    STABLE = "stable"
    EVOLVING = "evolving"
    VOLATILE = "volatile"


class TechStackNovelty(str, Enum):
    """How new the technology stack is to the organisation."""
    ESTABLISHED = "established"
    MODERATE = "moderate"
    CUTTING_EDGE = "cutting_edge"


class ScenarioKind(str, Enum):
    """Outcome scenario."""
    OPTIMISTIC = "optimistic"
    REALISTIC = "realistic"
    PESSIMISTIC = "pessimistic"


# =============================================================================
# Localized Text
# =============================================================================


class LocalizedText(BaseModel):
    """Text keyed by language tag.

    Accepts either a mapping ({"en": ..., "uk": ...}) or a plain string,
    which is used for every language.
    """
    translations: dict[str, str] = Field(default_factory=dict)

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if data is None:
            return {"translations": {}}
        if isinstance(data, str):
            return {"translations": {FALLBACK_LANGUAGE: data}}
        if isinstance(data, dict) and "translations" not in data:
            return {"translations": {k: v for k, v in data.items() if isinstance(v, str)}}
        return data

    def get(self, language: str) -> str:
        """Resolve text for a language, falling back to the fallback language."""
        if self.translations.get(language):
            return self.translations[language]
        if self.translations.get(FALLBACK_LANGUAGE):
            return self.translations[FALLBACK_LANGUAGE]
        return next((text for text in self.translations.values() if text), "")


# =============================================================================
# Project Models
# =============================================================================


class Project(BaseModel):
    """Project parameters as recorded by the user.

    Every parameter is optional so that partially recorded rows can still
    be compared; a missing value behaves as numeric 0 in similarity and
    never satisfies a rule clause.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    team_size: Optional[int] = Field(None, gt=0)
    budget: Optional[float] = Field(None, gt=0)
    duration_months: Optional[int] = Field(None, gt=0)
    complexity: Optional[ComplexityLevel] = None
    project_type: Optional[ProjectType] = None
    risk_level: Optional[RiskLevel] = None
    team_experience: Optional[TeamExperience] = None
    client_involvement: Optional[ClientInvolvement] = None
    requirements_stability: Optional[RequirementsStability] = None
    tech_stack_novelty: Optional[TechStackNovelty] = None

    class Config:
        extra = "allow"
        frozen = True
        use_enum_values = True

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def field_value(self, field: str) -> Any:
        """Get a parameter (declared or extra) by name; None if absent."""
        if field in type(self).model_fields:
            return getattr(self, field)
        return (self.model_extra or {}).get(field)


class KnowledgeProject(Project):
    """A historical project with its recorded outcome."""
    outcome: Optional[str] = None
    strategy_id: Optional[str] = None
    success_rate: Optional[float] = None
    description: Optional[str] = None

    @field_validator("strategy_id", mode="before")
    @classmethod
    def _stringify_strategy_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("success_rate")
    @classmethod
    def _clamp_success_rate(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return min(100.0, max(0.0, value))


class Strategy(BaseModel):
    """A delivery/management approach the engine can recommend."""
    id: str
    name: LocalizedText = Field(default_factory=LocalizedText)
    description: LocalizedText = Field(default_factory=LocalizedText)

    class Config:
        extra = "allow"
        frozen = True

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return value if isinstance(value, str) else str(value)


# =============================================================================
# Rule Conditions
# =============================================================================


class EqualsCondition(BaseModel):
    """Project value must equal the literal exactly."""
    kind: Literal["equals"] = "equals"
    value: Any


class RangeCondition(BaseModel):
    """Numeric value (scale rank for categories) within inclusive bounds."""
    kind: Literal["range"] = "range"
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class SetMembershipCondition(BaseModel):
    """Project value must be one of the listed values."""
    kind: Literal["in"] = "in"
    values: list[Any] = Field(default_factory=list)


Condition = Union[EqualsCondition, RangeCondition, SetMembershipCondition]


class Rule(BaseModel):
    """A declarative rule awarding points to a strategy.

    `conditions` is kept as supplied (a JSON string or a mapping) and is
    parsed at evaluation time, so one malformed rule cannot reject a whole
    rule set on load.
    """
    id: Optional[str] = None
    strategy_id: str
    conditions: Any = None
    weight: Optional[float] = None
    description: LocalizedText = Field(default_factory=LocalizedText)

    class Config:
        extra = "allow"
        frozen = True

    @field_validator("id", "strategy_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def raw_conditions(self) -> Any:
        """Conditions payload, decoding JSON strings."""
        if isinstance(self.conditions, str):
            return json.loads(self.conditions)
        return self.conditions


# =============================================================================
# Scoring and Output Models
# =============================================================================


class Scenario(BaseModel):
    """Projected outcome for one scenario."""
    success_rate: int = Field(..., ge=0, le=100)
    budget_variance: int  # percent, negative means savings
    time_variance: int  # percent, negative means ahead of schedule
    description: LocalizedText


class ScenarioSet(BaseModel):
    """Optimistic, realistic and pessimistic projections."""
    optimistic: Scenario
    realistic: Scenario
    pessimistic: Scenario


class StrategyResult(BaseModel):
    """A strategy with its score, scenarios and reasoning."""
    strategy: Strategy
    match_score: int = Field(..., ge=0, le=99)
    scenarios: ScenarioSet
    reasoning: list[str] = Field(default_factory=list)
    matched_rules_count: int = 0
    similar_projects_count: int = 0


class SimilarProjectSummary(BaseModel):
    """A knowledge-base case ranked by similarity."""
    id: Optional[str] = None
    name: Optional[str] = None
    similarity: int = Field(..., ge=0, le=100)  # percent
    strategy_id: Optional[str] = None
    strategy_name: str = ""
    outcome: Optional[str] = None
    description: Optional[str] = None


class AnalysisResult(BaseModel):
    """Complete output from the inference engine."""
    analyzed_at: datetime = Field(default_factory=datetime.utcnow)
    language: str = FALLBACK_LANGUAGE
    strategies: list[StrategyResult] = Field(default_factory=list)
    similar_projects: list[SimilarProjectSummary] = Field(default_factory=list)
    key_factors: list[str] = Field(default_factory=list)
