"""Forecaster - end-to-end forecast runs.

Generates a baseline, resolves smoothing parameters (explicit or
automatic), fits the chosen model, measures accuracy on the final 20% of
the baseline and extrapolates future weeks.
"""

import logging
import math
import random
from typing import Optional, Union

from strategy_advisor.schema import Project

from .baseline import BaselineGenerator
from .config import ForecastConfig, get_config
from .schema import (
    METRIC_UNITS,
    ForecastParams,
    ForecastResult,
    InvalidArgumentError,
    Metric,
    ModelType,
    ScenarioKind,
    SmoothingResult,
    parse_enum,
)
from .selector import adaptive_selection, default_sma_window
from .smoothing import calculate_mae, calculate_mape, ema, holt, sma

logger = logging.getLogger(__name__)

# Share of the baseline, from the start, excluded from reported accuracy
ACCURACY_START = 0.8


class Forecaster:
    """Runs forecasts for a project.

    Usage:
        forecaster = Forecaster(rng=random.Random(42))
        result = forecaster.run(project, "spend", "realistic", "ema", {"auto": True})
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[ForecastConfig] = None,
    ):
        """Initialize forecaster with an optional random source and config."""
        self.config = config or get_config()
        self.generator = BaselineGenerator(rng, self.config)

    def run(
        self,
        project: Project,
        metric: str,
        scenario: str,
        model: str,
        params: Union[ForecastParams, dict, None] = None,
        horizon: Optional[int] = None,
    ) -> ForecastResult:
        """Run a complete forecast.

        Args:
            project: Project parameters
            metric: "spend", "velocity" or "bugs"
            scenario: "optimistic", "realistic" or "pessimistic"
            model: "sma", "ema" or "holt"
            params: Explicit parameters or {"auto": True} (auto if None)
            horizon: Weeks to forecast beyond the baseline (config default if None)

        Returns:
            Baseline, fitted series, accuracy and future forecasts

        Raises:
            InvalidArgumentError: For unknown names or invalid parameters.
        """
        metric = parse_enum(Metric, metric, "metric")
        scenario = parse_enum(ScenarioKind, scenario, "scenario")
        model = parse_enum(ModelType, model, "model")
        params = self._coerce_params(params)
        horizon = self.config.default_horizon if horizon is None else horizon
        if horizon < 0:
            raise InvalidArgumentError(f"Horizon must not be negative, got {horizon}")

        baseline = self.generator.generate(project, metric, scenario)
        resolved = self._resolve_params(baseline, model, params)
        fitted = self._fit(baseline, model, resolved)

        validation_start = int(math.floor(len(baseline) * ACCURACY_START))
        actual_valid = baseline[validation_start:]
        forecast_valid = fitted.forecast[validation_start:]
        mae = calculate_mae(actual_valid, forecast_valid)
        mape = calculate_mape(actual_valid, forecast_valid)

        future = self._extrapolate(baseline, fitted, model, resolved, horizon)

        logger.debug(
            "Forecast %s/%s with %s %s: %d weeks, MAE %.4f, MAPE %.2f%%",
            metric.value, scenario.value, model.value, resolved, len(baseline), mae, mape,
        )

        return ForecastResult(
            metric=metric,
            scenario=scenario,
            model=model,
            unit=METRIC_UNITS[metric],
            baseline=baseline,
            smoothed=fitted.smoothed,
            forecast=fitted.forecast,
            errors=fitted.errors,
            trend=fitted.trend,
            future_forecasts=future,
            params=resolved,
            mae=mae,
            mape=mape,
            weeks=len(baseline),
            horizon=horizon,
        )

    def _coerce_params(self, params: Union[ForecastParams, dict, None]) -> ForecastParams:
        """Accept a params model, a plain mapping or None (auto)."""
        if params is None:
            return ForecastParams(auto=True)
        if isinstance(params, ForecastParams):
            return params
        return ForecastParams.model_validate(params)

    def _resolve_params(
        self,
        baseline: list[float],
        model: ModelType,
        params: ForecastParams,
    ) -> ForecastParams:
        """Resolve auto mode and validate explicit parameters."""
        if params.auto:
            if model == ModelType.SMA:
                return ForecastParams(k=default_sma_window(len(baseline), self.config.selection.max_sma_window))
            return adaptive_selection(baseline, model.value, config=self.config.selection).best_params

        if model == ModelType.SMA:
            if params.k is None or params.k < 1:
                raise InvalidArgumentError(f"SMA requires a window k >= 1, got {params.k}")
            return ForecastParams(k=params.k)

        self._check_smoothing("alpha", params.alpha)
        if model == ModelType.EMA:
            return ForecastParams(alpha=params.alpha)

        self._check_smoothing("beta", params.beta)
        return ForecastParams(alpha=params.alpha, beta=params.beta)

    @staticmethod
    def _check_smoothing(name: str, value: Optional[float]) -> None:
        """Validate a smoothing factor in [0, 1]."""
        if value is None or not 0 <= value <= 1:
            raise InvalidArgumentError(f"{name} must be between 0 and 1, got {value}")

    def _fit(self, baseline: list[float], model: ModelType, params: ForecastParams) -> SmoothingResult:
        """Run the smoothing model over the full baseline."""
        if model == ModelType.SMA:
            return sma(baseline, params.k)
        if model == ModelType.EMA:
            return ema(baseline, params.alpha)
        return holt(baseline, params.alpha, params.beta)

    def _extrapolate(
        self,
        baseline: list[float],
        fitted: SmoothingResult,
        model: ModelType,
        params: ForecastParams,
        horizon: int,
    ) -> list[float]:
        """Forecast `horizon` weeks beyond the baseline."""
        if model == ModelType.SMA:
            last_k = baseline[-params.k:]
            return [sum(last_k) / len(last_k)] * horizon
        if model == ModelType.EMA:
            return [fitted.smoothed[-1]] * horizon
        level = fitted.smoothed[-1]
        trend = fitted.trend[-1]
        return [level + h * trend for h in range(1, horizon + 1)]


def run_forecast(
    project: Project,
    metric: str,
    scenario: str,
    model: str,
    params: Union[ForecastParams, dict, None] = None,
    horizon: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> ForecastResult:
    """Run a forecast (see Forecaster.run)."""
    return Forecaster(rng).run(project, metric, scenario, model, params, horizon)
