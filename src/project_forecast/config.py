"""Centralized configuration management for the project forecaster."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class MultiplierConfig(BaseModel):
    """Multiplier tables applied to baseline formulas.

    Unknown keys fall back to 1.0 (0 for the stability trend). Note that the
    experience table keys the middle level as "mid"; projects recorded as
    "mixed" therefore use the 1.0 fallback.
    """
    scenario: dict[str, float] = Field(
        default_factory=lambda: {"optimistic": 0.9, "realistic": 1.0, "pessimistic": 1.15},
        description="Scale applied to every metric per scenario"
    )
    risk: dict[str, float] = Field(
        default_factory=lambda: {"low": 0.95, "medium": 1.0, "high": 1.15, "critical": 1.3},
        description="Spend multiplier per risk level"
    )
    complexity: dict[str, float] = Field(
        default_factory=lambda: {"low": 1.2, "medium": 1.0, "high": 0.8, "critical": 0.6},
        description="Velocity multiplier per complexity level (inverted)"
    )
    experience: dict[str, float] = Field(
        default_factory=lambda: {"junior": 0.7, "mid": 1.0, "senior": 1.3, "expert": 1.5},
        description="Velocity multiplier per team experience"
    )
    stability_trend: dict[str, float] = Field(
        default_factory=lambda: {"stable": -0.3, "moderate": 0.0, "volatile": 0.5},
        description="Bug trend over the project per requirements stability"
    )
    bug_complexity_score: dict[str, float] = Field(
        default_factory=lambda: {"low": 2, "medium": 5, "high": 10, "critical": 20},
        description="Base open bugs per complexity level"
    )
    bug_risk_score: dict[str, float] = Field(
        default_factory=lambda: {"low": 1, "medium": 1.5, "high": 2, "critical": 3},
        description="Bug multiplier per risk level"
    )
    default_bug_complexity_score: float = Field(5, description="Used when complexity is missing")
    default_bug_risk_score: float = Field(1.5, description="Used when risk level is missing")


class BaselineConfig(BaseModel):
    """Shape and noise of generated baselines."""
    weeks_per_month: float = Field(4.33, description="Weeks simulated per project month")
    spend_wave_amplitude: float = Field(0.2, description="Mid-project spend increase")
    spend_noise: float = Field(0.1, description="Relative spend noise (+/-)")
    velocity_points_per_person: float = Field(2.0, description="Story points per person per week")
    velocity_learning_gain: float = Field(0.15, description="Velocity gain by project end")
    velocity_noise: float = Field(0.15, description="Relative velocity noise (+/-)")
    bug_noise: float = Field(2.0, description="Absolute bug noise (+/-)")


class SelectionConfig(BaseModel):
    """Grid search for automatic parameter selection.

    Grids are inclusive and expressed as (start, stop, step).
    """
    validation_split: float = Field(0.2, description="Share of the series held out for validation")
    ema_alpha_grid: tuple[float, float, float] = Field((0.05, 0.95, 0.05))
    holt_alpha_grid: tuple[float, float, float] = Field((0.1, 0.9, 0.2))
    holt_beta_grid: tuple[float, float, float] = Field((0.1, 0.9, 0.2))
    max_sma_window: int = Field(4, description="Upper bound of the automatic SMA window")


class ForecastConfig(BaseModel):
    """Complete configuration for the project forecaster."""
    multipliers: MultiplierConfig = Field(default_factory=MultiplierConfig)
    baseline: BaselineConfig = Field(default_factory=BaselineConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    default_horizon: int = Field(4, description="Weeks forecast beyond the baseline")


# Global config instance
_config: Optional[ForecastConfig] = None


def get_config() -> ForecastConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ForecastConfig()
    return _config


def load_config(path: Path) -> ForecastConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ForecastConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ForecastConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ForecastConfig()


def find_config_file() -> Optional[Path]:
    """Find a forecaster configuration file.

    Looks in (order of priority):
    1. PROJECT_FORECAST_CONFIG environment variable
    2. ./forecast-config.yaml
    3. ./forecast-config.yml
    4. ~/.config/project-forecast/config.yaml
    """
    env_path = os.environ.get("PROJECT_FORECAST_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["forecast-config.yaml", "forecast-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "project-forecast" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = ForecastConfig().model_dump(mode="json")

    yaml_content = """# Project Forecaster Configuration
# ===============================
#
# This file configures baseline multipliers, baseline shape and noise,
# and the grid search used for automatic parameter selection.
#
# Copy this file to one of these locations:
#   - ./forecast-config.yaml (current directory)
#   - ~/.config/project-forecast/config.yaml (user config)
#
# Or set the PROJECT_FORECAST_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
