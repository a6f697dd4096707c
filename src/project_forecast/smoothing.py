"""Smoothing models and accuracy metrics.

SMA, EMA and Holt's linear trend each return parallel smoothed, forecast
and error series aligned to the input; accuracy is measured with MAE and
MAPE over the index pairs where both values are defined.
"""

from typing import Optional, Sequence

from .schema import InvalidArgumentError, SmoothingResult


def sma(series: Sequence[float], k: int = 3) -> SmoothingResult:
    """Simple moving average.

    s_t = mean(y_{t-k+1} .. y_t), defined from index k - 1; the forecast
    for t + 1 is s_t.
    """
    if k < 1:
        raise InvalidArgumentError(f"SMA window must be at least 1, got {k}")

    result = SmoothingResult()

    for t in range(len(series)):
        if t < k - 1:
            result.smoothed.append(None)
            result.forecast.append(None)
            result.errors.append(None)
            continue

        window = series[t - k + 1:t + 1]
        st = sum(window) / k
        result.smoothed.append(st)
        result.forecast.append(st)
        # First defined point has no prior forecast
        result.errors.append(series[t] - result.smoothed[t - 1] if t > k - 1 else None)

    return result


def ema(series: Sequence[float], alpha: float = 0.3) -> SmoothingResult:
    """Exponential moving average (simple exponential smoothing).

    s_0 = y_0; s_t = alpha * y_t + (1 - alpha) * s_{t-1}.
    """
    result = SmoothingResult()
    if not series:
        return result

    st = series[0]
    result.smoothed.append(st)
    result.forecast.append(st)
    result.errors.append(None)

    for t in range(1, len(series)):
        st = alpha * series[t] + (1 - alpha) * st
        result.smoothed.append(st)
        result.forecast.append(st)
        result.errors.append(series[t] - result.forecast[t - 1])

    return result


def holt(series: Sequence[float], alpha: float = 0.3, beta: float = 0.1) -> SmoothingResult:
    """Holt's linear trend (double exponential smoothing).

    l_0 = y_0, b_0 = 0;
    l_t = alpha * y_t + (1 - alpha) * (l_{t-1} + b_{t-1});
    b_t = beta * (l_t - l_{t-1}) + (1 - beta) * b_{t-1};
    the forecast for t + 1 is l_t + b_t.
    """
    result = SmoothingResult(trend=[])
    if not series:
        return result

    lt = series[0]
    bt = 0.0
    result.smoothed.append(lt)
    result.trend.append(bt)
    result.forecast.append(lt + bt)
    result.errors.append(None)

    for t in range(1, len(series)):
        yt = series[t]
        lt_new = alpha * yt + (1 - alpha) * (lt + bt)
        bt = beta * (lt_new - lt) + (1 - beta) * bt
        lt = lt_new

        result.smoothed.append(lt)
        result.trend.append(bt)
        result.forecast.append(lt + bt)
        result.errors.append(yt - result.forecast[t - 1])

    return result


def _defined_pairs(actual: Sequence[Optional[float]], predicted: Sequence[Optional[float]]):
    """Index-aligned pairs where both values are defined."""
    return [(a, p) for a, p in zip(actual, predicted) if a is not None and p is not None]


def calculate_mae(actual: Sequence[Optional[float]], predicted: Sequence[Optional[float]]) -> float:
    """Mean absolute error (0 if no pair is defined)."""
    pairs = _defined_pairs(actual, predicted)
    if not pairs:
        return 0.0
    return sum(abs(a - p) for a, p in pairs) / len(pairs)


def calculate_mape(actual: Sequence[Optional[float]], predicted: Sequence[Optional[float]]) -> float:
    """Mean absolute percentage error, in percent (zero actuals skipped)."""
    pairs = [(a, p) for a, p in _defined_pairs(actual, predicted) if a != 0]
    if not pairs:
        return 0.0
    return sum(abs((a - p) / a) for a, p in pairs) / len(pairs) * 100
