"""Tests for smoothing models and accuracy metrics."""

import pytest

from project_forecast.schema import InvalidArgumentError
from project_forecast.smoothing import calculate_mae, calculate_mape, ema, holt, sma

SERIES = [10.0, 20.0, 30.0, 40.0, 50.0]


class TestSMA:
    """Tests for the simple moving average."""

    def test_window_of_three(self):
        result = sma(SERIES, 3)
        assert result.smoothed == [None, None, 20.0, 30.0, 40.0]
        assert result.forecast == result.smoothed
        assert result.errors == [None, None, None, 20.0, 20.0]
        assert result.trend is None

    def test_window_of_one_is_identity(self):
        result = sma(SERIES, 1)
        assert result.smoothed == SERIES
        assert result.errors == [None, 10.0, 10.0, 10.0, 10.0]

    def test_window_longer_than_series(self):
        result = sma([1.0, 2.0], 5)
        assert result.smoothed == [None, None]

    def test_invalid_window(self):
        with pytest.raises(InvalidArgumentError):
            sma(SERIES, 0)


class TestEMA:
    """Tests for exponential smoothing."""

    def test_alpha_one_is_identity(self):
        assert ema(SERIES, 1.0).smoothed == SERIES

    def test_alpha_zero_is_constant(self):
        assert ema(SERIES, 0.0).smoothed == [10.0] * 5

    def test_recurrence(self):
        result = ema([10.0, 20.0], 0.3)
        assert result.smoothed[1] == pytest.approx(13.0)
        assert result.errors == [None, pytest.approx(10.0)]

    def test_empty(self):
        result = ema([], 0.3)
        assert result.smoothed == [] and result.forecast == [] and result.errors == []


class TestHolt:
    """Tests for Holt's linear trend."""

    def test_beta_zero_has_no_trend(self):
        result = holt(SERIES, 0.5, 0.0)
        assert result.trend == [0.0] * 5
        assert result.smoothed == pytest.approx(ema(SERIES, 0.5).smoothed)

    def test_tracks_linear_trend(self):
        result = holt(SERIES, 1.0, 1.0)
        assert result.smoothed == pytest.approx(SERIES)
        assert result.trend[1:] == pytest.approx([10.0] * 4)
        assert result.forecast[-1] == pytest.approx(60.0)

    def test_first_point(self):
        result = holt(SERIES)
        assert result.smoothed[0] == 10.0
        assert result.trend[0] == 0.0
        assert result.errors[0] is None

    def test_empty(self):
        result = holt([])
        assert result.smoothed == [] and result.trend == []


class TestAccuracy:
    """Tests for MAE and MAPE."""

    def test_mae(self):
        assert calculate_mae([10, 20, 30], [12, 18, 30]) == pytest.approx(4 / 3)

    def test_mae_skips_undefined(self):
        assert calculate_mae([10, 20, 30], [None, 25, None]) == pytest.approx(5)

    def test_mape(self):
        assert calculate_mape([100, 200], [110, 180]) == pytest.approx(10.0)

    def test_mape_skips_zero_actuals(self):
        assert calculate_mape([0, 100], [5, 90]) == pytest.approx(10.0)

    def test_no_pairs(self):
        assert calculate_mae([], []) == 0
        assert calculate_mape([None], [1]) == 0
