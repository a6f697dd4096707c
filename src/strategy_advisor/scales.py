"""Ordinal scales for categorical project parameters.

Categorical values are compared numerically through these ranks. Features
without a scale are treated as already numeric.
"""

import math
from typing import Any


SCALES: dict[str, dict[str, int]] = {
    "complexity": {"low": 1, "medium": 2, "high": 3, "critical": 4},
    "risk_level": {"low": 1, "medium": 2, "high": 3, "critical": 4},
    "team_experience": {"junior": 1, "mixed": 2, "senior": 3, "expert": 4},
    "client_involvement": {"minimal": 1, "moderate": 2, "active": 3, "embedded": 4},
    "requirements_stability": {"stable": 3, "evolving": 2, "volatile": 1},
    "tech_stack_novelty": {"established": 1, "moderate": 2, "cutting_edge": 3},
    "project_type": {"support": 1, "migration": 2, "development": 3, "integration": 4, "research": 5},
}

# Parameters normalized against the range of the compared batch
NUMERIC_FEATURES = ("team_size", "budget", "duration_months")


def has_scale(feature: str) -> bool:
    """Check if a feature is categorical (has an ordinal scale)."""
    return feature in SCALES


def rank(feature: str, value: Any) -> int:
    """Get the ordinal rank of a categorical value (0 if unknown)."""
    return SCALES[feature].get(value, 0) if isinstance(value, str) else 0


def scale_bounds(feature: str) -> tuple[int, int]:
    """Get the (min, max) rank of a feature's full scale."""
    ranks = SCALES[feature].values()
    return min(ranks), max(ranks)


def to_float(value: Any) -> float:
    """Parse a value as float, 0 for missing or unparsable values."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def numeric_value(feature: str, value: Any) -> float:
    """Get the numeric value of a feature: scale rank or parsed number."""
    if has_scale(feature):
        return float(rank(feature, value))
    return to_float(value)
