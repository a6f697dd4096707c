"""Weekly metric baselines and smoothing forecasts for IT projects."""

from project_forecast.baseline import BaselineGenerator, generate_baseline
from project_forecast.forecaster import Forecaster, run_forecast
from project_forecast.insights import generate_insights
from project_forecast.schema import (
    ForecastParams,
    ForecastResult,
    InvalidArgumentError,
    Metric,
    ModelType,
)
from project_forecast.selector import adaptive_selection
from project_forecast.smoothing import calculate_mae, calculate_mape, ema, holt, sma

__all__ = [
    "BaselineGenerator",
    "generate_baseline",
    "Forecaster",
    "run_forecast",
    "generate_insights",
    "ForecastParams",
    "ForecastResult",
    "InvalidArgumentError",
    "Metric",
    "ModelType",
    "adaptive_selection",
    "calculate_mae",
    "calculate_mape",
    "ema",
    "holt",
    "sma",
]
