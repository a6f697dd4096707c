"""Models for the Project Forecaster.

Enums for metrics and smoothing models, parameter and result models, and
the invalid-argument error raised for unknown names or bad parameters.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel, Field

# Re-export for convenience
from strategy_advisor.schema import ScenarioKind


class InvalidArgumentError(ValueError):
    """Raised for unknown metrics, scenarios or models, and invalid parameters."""


class Metric(str, Enum):
    """Weekly project metric to simulate."""
    SPEND = "spend"
    VELOCITY = "velocity"
    BUGS = "bugs"


class ModelType(str, Enum):
    """Smoothing model."""
    SMA = "sma"
    EMA = "ema"
    HOLT = "holt"


class InsightLevel(str, Enum):
    """Severity of a forecast insight."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"


METRIC_UNITS = {
    Metric.SPEND: "$/week",
    Metric.VELOCITY: "SP/week",
    Metric.BUGS: "bugs",
}


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value, label: str) -> E:
    """Parse a name into an enum member.

    Raises:
        InvalidArgumentError: If the name is not a member.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(f"Unknown {label}: {value} (expected one of: {choices})") from None


# =============================================================================
# Parameters and Results
# =============================================================================


class ForecastParams(BaseModel):
    """Smoothing parameters, or auto selection."""
    k: Optional[int] = None  # SMA window
    alpha: Optional[float] = None  # level smoothing (EMA, Holt)
    beta: Optional[float] = None  # trend smoothing (Holt)
    auto: bool = False


@dataclass
class SmoothingResult:
    """Parallel series produced by a smoothing model.

    forecast[t] is the one-step-ahead prediction made at t; errors[t] is
    series[t] minus the prediction made at t - 1.
    """
    smoothed: list[Optional[float]] = field(default_factory=list)
    forecast: list[Optional[float]] = field(default_factory=list)
    errors: list[Optional[float]] = field(default_factory=list)
    trend: Optional[list[float]] = None


class AdaptiveSelection(BaseModel):
    """Outcome of a parameter grid search."""
    best_params: ForecastParams
    best_mae: float
    best_mape: float


class ForecastResult(BaseModel):
    """Complete output from a forecast run."""
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    metric: Metric
    scenario: ScenarioKind
    model: ModelType
    unit: str
    baseline: list[float]
    smoothed: list[Optional[float]]
    forecast: list[Optional[float]]
    errors: list[Optional[float]]
    trend: Optional[list[float]] = None
    future_forecasts: list[float]
    params: ForecastParams
    mae: float
    mape: float
    weeks: int
    horizon: int


class Insight(BaseModel):
    """A project-management reading of a forecast."""
    level: InsightLevel
    title: str
    value: str  # signed percent, e.g. "+12.5%"
    description: str
    change_pct: float
