"""Tests for automatic parameter selection."""

import pytest

from project_forecast.config import SelectionConfig
from project_forecast.schema import InvalidArgumentError
from project_forecast.selector import (
    _ema_validation,
    adaptive_selection,
    default_sma_window,
    parameter_grid,
    split_series,
)
from project_forecast.smoothing import calculate_mae

LINEAR = [10.0 * i for i in range(1, 21)]


class TestGrid:
    """Tests for grids and splits."""

    def test_ema_grid(self):
        grid = parameter_grid(0.05, 0.95, 0.05)
        assert len(grid) == 19
        assert grid[0] == 0.05
        assert grid[-1] == 0.95
        assert grid[5] == 0.3

    def test_holt_grid(self):
        assert parameter_grid(0.1, 0.9, 0.2) == [0.1, 0.3, 0.5, 0.7, 0.9]

    def test_split_keeps_order(self):
        train, valid = split_series(list(range(10)), 0.2)
        assert train == list(range(8))
        assert valid == [8, 9]

    @pytest.mark.parametrize("length,expected", [(3, 1), (10, 2), (26, 4), (100, 4)])
    def test_default_sma_window(self, length, expected):
        assert default_sma_window(length) == expected


class TestAdaptiveSelection:
    """Tests for the grid search."""

    def test_ema_prefers_fast_smoothing_on_trend(self):
        selection = adaptive_selection(LINEAR, "ema")
        assert selection.best_params.alpha == 0.95
        assert selection.best_params.beta is None

    def test_ema_beats_default_alpha(self):
        selection = adaptive_selection(LINEAR, "ema")
        train, valid = split_series(LINEAR, 0.2)
        default_mae = calculate_mae(valid, _ema_validation(train, valid, 0.3))
        assert selection.best_mae <= default_mae
        assert selection.best_mape >= 0

    def test_ties_keep_first_candidate(self):
        flat = [5.0] * 10
        assert adaptive_selection(flat, "ema").best_params.alpha == 0.05
        holt_params = adaptive_selection(flat, "holt").best_params
        assert (holt_params.alpha, holt_params.beta) == (0.1, 0.1)

    def test_holt_on_trend(self):
        selection = adaptive_selection(LINEAR, "holt")
        assert selection.best_params.alpha is not None
        assert selection.best_params.beta is not None
        assert selection.best_mae < adaptive_selection(LINEAR, "ema").best_mae

    def test_custom_config(self):
        config = SelectionConfig(ema_alpha_grid=(0.5, 0.5, 0.1))
        assert adaptive_selection(LINEAR, "ema", config=config).best_params.alpha == 0.5

    def test_sma_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            adaptive_selection(LINEAR, "sma")

    def test_unknown_model(self):
        with pytest.raises(InvalidArgumentError):
            adaptive_selection(LINEAR, "arima")

    def test_too_short(self):
        with pytest.raises(InvalidArgumentError, match="too short"):
            adaptive_selection([1.0], "ema")
