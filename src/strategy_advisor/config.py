"""Centralized configuration management for the strategy advisor."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class SimilarityConfig(BaseModel):
    """Case-based reasoning configuration.

    Feature weights control how much each project parameter contributes to
    similarity. They need not sum to 1.0; they are renormalized per
    comparison. Parameters missing from this table are ignored.
    """
    feature_weights: dict[str, float] = Field(
        default_factory=lambda: {
            "team_size": 0.10,
            "budget": 0.10,
            "duration_months": 0.08,
            "complexity": 0.15,
            "project_type": 0.12,
            "risk_level": 0.12,
            "team_experience": 0.10,
            "client_involvement": 0.08,
            "requirements_stability": 0.08,
            "tech_stack_novelty": 0.07,
        },
        description="Relative importance of each parameter (0-1)"
    )
    top_similar: int = Field(
        5,
        description="Number of most similar knowledge-base cases considered"
    )


class ScoringConfig(BaseModel):
    """How rule points and similar cases combine into a match score."""
    rule_scale: float = Field(
        50.0,
        description="Points awarded to the strategy with the most rule points"
    )
    cbr_scale: float = Field(
        40.0,
        description="Points awarded for an average case similarity of 1.0"
    )
    success_bonus_factor: float = Field(
        0.2,
        description="Share of a successful case's similarity added as bonus"
    )
    success_bonus_scale: float = Field(
        10.0,
        description="Multiplier applied to the accumulated success bonus"
    )
    max_match_score: int = Field(
        99,
        description="Upper bound of the match score"
    )


class KeyFactorConfig(BaseModel):
    """Thresholds for numeric key decision factors."""
    large_team_size: int = Field(20, description="Team size above which the team is large")
    long_duration_months: int = Field(12, description="Duration above which the project is long")
    high_budget: float = Field(500000.0, description="Budget above which the budget is high")


class AdvisorConfig(BaseModel):
    """Complete configuration for the strategy advisor."""
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    key_factors: KeyFactorConfig = Field(default_factory=KeyFactorConfig)
    default_language: str = Field("uk", description="Language used when none is requested")


# Global config instance
_config: Optional[AdvisorConfig] = None


def get_config() -> AdvisorConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = AdvisorConfig()
    return _config


def load_config(path: Path) -> AdvisorConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded AdvisorConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = AdvisorConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = AdvisorConfig()


def find_config_file() -> Optional[Path]:
    """Find an advisor configuration file.

    Looks in (order of priority):
    1. STRATEGY_ADVISOR_CONFIG environment variable
    2. ./advisor-config.yaml
    3. ./advisor-config.yml
    4. ~/.config/strategy-advisor/config.yaml
    """
    env_path = os.environ.get("STRATEGY_ADVISOR_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["advisor-config.yaml", "advisor-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "strategy-advisor" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = AdvisorConfig().model_dump()

    yaml_content = """# Strategy Advisor Configuration
# =============================
#
# This file configures case similarity weights, match score composition
# and key decision factor thresholds.
#
# Copy this file to one of these locations:
#   - ./advisor-config.yaml (current directory)
#   - ~/.config/strategy-advisor/config.yaml (user config)
#
# Or set the STRATEGY_ADVISOR_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
