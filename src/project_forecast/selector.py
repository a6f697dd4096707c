"""Model Selector - automatic smoothing parameter selection.

Grid-searches smoothing parameters on a time-ordered train/validation
split and keeps the parameters with the lowest validation MAE.
"""

import logging
import math
from typing import Optional, Sequence

from .config import SelectionConfig, get_config
from .schema import (
    AdaptiveSelection,
    ForecastParams,
    InvalidArgumentError,
    ModelType,
    parse_enum,
)
from .smoothing import calculate_mae, calculate_mape, ema, holt

logger = logging.getLogger(__name__)


def parameter_grid(start: float, stop: float, step: float) -> list[float]:
    """Inclusive, ascending grid of values rounded to two decimals."""
    count = int(round((stop - start) / step))
    return [round(start + i * step, 2) for i in range(count + 1)]


def split_series(series: Sequence[float], validation_split: float) -> tuple[list[float], list[float]]:
    """Split a series in time order into (train, validation)."""
    split_index = int(math.floor(len(series) * (1 - validation_split)))
    return list(series[:split_index]), list(series[split_index:])


def default_sma_window(length: int, max_window: Optional[int] = None) -> int:
    """Automatic SMA window: a quarter of the series, capped, at least 1."""
    if max_window is None:
        max_window = get_config().selection.max_sma_window
    return max(1, min(max_window, length // 4))


def _ema_validation(train: list[float], valid: list[float], alpha: float) -> list[float]:
    """One-step predictions over the validation window, continuing EMA state."""
    st = ema(train, alpha).smoothed[-1]
    predictions = []
    for value in valid:
        predictions.append(st)
        st = alpha * value + (1 - alpha) * st
    return predictions


def _holt_validation(train: list[float], valid: list[float], alpha: float, beta: float) -> list[float]:
    """One-step predictions over the validation window, continuing Holt state."""
    fitted = holt(train, alpha, beta)
    lt = fitted.smoothed[-1]
    bt = fitted.trend[-1]
    predictions = []
    for value in valid:
        predictions.append(lt + bt)
        lt_new = alpha * value + (1 - alpha) * (lt + bt)
        bt = beta * (lt_new - lt) + (1 - beta) * bt
        lt = lt_new
    return predictions


def adaptive_selection(
    series: Sequence[float],
    model: str,
    validation_split: Optional[float] = None,
    config: Optional[SelectionConfig] = None,
) -> AdaptiveSelection:
    """Select smoothing parameters by grid search.

    Parameters are tried in ascending order and replaced only on a strictly
    lower validation MAE, so the first of equally good candidates wins.

    Args:
        series: Time series (not shuffled)
        model: "ema" or "holt"
        validation_split: Share held out for validation (config default if None)
        config: Selection config (global config if None)

    Returns:
        Best parameters with their validation MAE and MAPE

    Raises:
        InvalidArgumentError: For an unsupported model or a series too short
            to split into non-empty train and validation parts.
    """
    cfg = config or get_config().selection
    model = parse_enum(ModelType, model, "model")
    if model == ModelType.SMA:
        raise InvalidArgumentError("SMA has no grid search; use default_sma_window()")

    split = cfg.validation_split if validation_split is None else validation_split
    train, valid = split_series(series, split)
    if not train or not valid:
        raise InvalidArgumentError(
            f"Series of length {len(series)} is too short for a {split:.0%} validation split"
        )

    best_params = None
    best_mae = math.inf
    best_mape = math.inf

    if model == ModelType.EMA:
        for alpha in parameter_grid(*cfg.ema_alpha_grid):
            predictions = _ema_validation(train, valid, alpha)
            mae = calculate_mae(valid, predictions)
            if mae < best_mae:
                best_mae = mae
                best_mape = calculate_mape(valid, predictions)
                best_params = ForecastParams(alpha=alpha)
    else:
        for alpha in parameter_grid(*cfg.holt_alpha_grid):
            for beta in parameter_grid(*cfg.holt_beta_grid):
                predictions = _holt_validation(train, valid, alpha, beta)
                mae = calculate_mae(valid, predictions)
                if mae < best_mae:
                    best_mae = mae
                    best_mape = calculate_mape(valid, predictions)
                    best_params = ForecastParams(alpha=alpha, beta=beta)

    logger.debug("Selected %s parameters %s (validation MAE %.4f)", model.value, best_params, best_mae)
    return AdaptiveSelection(best_params=best_params, best_mae=best_mae, best_mape=best_mape)
