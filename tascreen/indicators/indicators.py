"""Technical indicators over OHLC bars.

All functions return series with one point per input bar, using None where
there is not enough history. Nothing is carried between calls; each call
recomputes over the full input. Internally values are NumPy float arrays
with NaN marking undefined positions.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from tascreen.indicators.registry import register_indicator
from tascreen.models.ohlc import OHLCBar
from tascreen.models.series import (
    ADXResult,
    BollingerResult,
    HistogramPoint,
    LinePoint,
    LineSeries,
    MACDResult,
    StochasticResult,
)

# Below this many bars every indicator is undefined everywhere
MIN_BARS = 2


# =============================================================================
# Array helpers
# =============================================================================

def _check_period(period: int | float, name: str = "period") -> int:
    """Validate a lookback period and return it as int."""
    if period < 1 or int(period) != period:
        raise ValueError(f"{name} must be a positive integer, got {period!r}")
    return int(period)


def _closes(bars: Sequence[OHLCBar]) -> np.ndarray:
    return np.array([b.close for b in bars], dtype=np.float64)


def _highs(bars: Sequence[OHLCBar]) -> np.ndarray:
    return np.array([b.high for b in bars], dtype=np.float64)


def _lows(bars: Sequence[OHLCBar]) -> np.ndarray:
    return np.array([b.low for b in bars], dtype=np.float64)


def _to_series(bars: Sequence[OHLCBar], values: np.ndarray) -> LineSeries:
    """Pair values with bar times, mapping NaN to None."""
    return [
        LinePoint(time=bar.time, value=None if math.isnan(v) else float(v))
        for bar, v in zip(bars, values)
    ]


def _undefined(bars: Sequence[OHLCBar]) -> LineSeries:
    return [LinePoint(time=bar.time, value=None) for bar in bars]


def _rolling_mean(values: np.ndarray, period: int) -> np.ndarray:
    """Trailing mean over ``period`` values, NaN before the window fills."""
    result = np.full(len(values), np.nan)
    for i in range(period - 1, len(values)):
        result[i] = np.mean(values[i - period + 1 : i + 1])
    return result


def _ema(values: np.ndarray, period: int) -> np.ndarray:
    """EMA seeded with the SMA of the first ``period`` values."""
    result = np.full(len(values), np.nan)
    if len(values) < period:
        return result

    multiplier = 2.0 / (period + 1)
    result[period - 1] = np.mean(values[:period])
    for i in range(period, len(values)):
        result[i] = (values[i] - result[i - 1]) * multiplier + result[i - 1]
    return result


def _ema_of_defined(values: np.ndarray, period: int) -> np.ndarray:
    """EMA over the defined (non-NaN) entries of ``values``.

    The first output lands on the ``period``-th defined entry and equals the
    mean of the defined entries seen so far.
    """
    result = np.full(len(values), np.nan)
    multiplier = 2.0 / (period + 1)
    seen: list[float] = []
    prev = math.nan

    for i, v in enumerate(values):
        if math.isnan(v):
            continue
        seen.append(float(v))
        if len(seen) < period:
            continue
        if len(seen) == period:
            prev = sum(seen) / period
        else:
            prev = (v - prev) * multiplier + prev
        result[i] = prev
    return result


def _true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True range per bar; the first bar has no previous close and uses high - low."""
    tr = highs - lows
    if len(tr) > 1:
        prev_close = closes[:-1]
        tr[1:] = np.maximum.reduce([
            highs[1:] - lows[1:],
            np.abs(highs[1:] - prev_close),
            np.abs(lows[1:] - prev_close),
        ])
    return tr


def _wilder_rsi(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


# =============================================================================
# Moving averages
# =============================================================================

@register_indicator("sma")
def calculate_sma(bars: Sequence[OHLCBar], period: int) -> LineSeries:
    """
    Calculate Simple Moving Average of closes.

    Args:
        bars: Time-ordered OHLC bars
        period: SMA period

    Returns:
        Series of SMA values, None for the first ``period - 1`` bars
    """
    period = _check_period(period)
    if len(bars) < MIN_BARS:
        return _undefined(bars)
    return _to_series(bars, _rolling_mean(_closes(bars), period))


@register_indicator("ema")
def calculate_ema(bars: Sequence[OHLCBar], period: int) -> LineSeries:
    """
    Calculate Exponential Moving Average of closes.

    The first value (at ``period - 1``) is the SMA of the same window; after
    that ``ema = prev + 2 / (period + 1) * (close - prev)``.

    Args:
        bars: Time-ordered OHLC bars
        period: EMA period

    Returns:
        Series of EMA values
    """
    period = _check_period(period)
    if len(bars) < MIN_BARS:
        return _undefined(bars)
    return _to_series(bars, _ema(_closes(bars), period))


# =============================================================================
# Momentum
# =============================================================================

@register_indicator("rsi")
def calculate_rsi(bars: Sequence[OHLCBar], period: int = 14) -> LineSeries:
    """
    Calculate Relative Strength Index with Wilder's smoothing.

    The first value sits at index ``period`` and uses simple averages of the
    first ``period`` gains and losses. Output is bounded to [0, 100].

    Args:
        bars: Time-ordered OHLC bars
        period: RSI period

    Returns:
        Series of RSI values
    """
    period = _check_period(period)
    if len(bars) < max(MIN_BARS, period + 1):
        return _undefined(bars)

    changes = np.diff(_closes(bars))
    gains = np.where(changes > 0, changes, 0.0)
    losses = np.where(changes < 0, -changes, 0.0)

    result = np.full(len(bars), np.nan)
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    result[period] = _wilder_rsi(avg_gain, avg_loss)

    for i in range(period + 1, len(bars)):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        result[i] = _wilder_rsi(avg_gain, avg_loss)

    return _to_series(bars, result)


@register_indicator("macd")
def calculate_macd(
    bars: Sequence[OHLCBar],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult:
    """
    Calculate MACD line, signal line and histogram.

    macd = EMA(fast) - EMA(slow), signal = EMA(signal) of the defined macd
    values, histogram = macd - signal.

    Args:
        bars: Time-ordered OHLC bars
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal line period

    Returns:
        MACDResult with three aligned series
    """
    fast = _check_period(fast, "fast")
    slow = _check_period(slow, "slow")
    signal = _check_period(signal, "signal")

    if len(bars) < MIN_BARS:
        return MACDResult(
            macd=_undefined(bars),
            signal=_undefined(bars),
            histogram=[HistogramPoint(time=b.time, value=None) for b in bars],
        )

    closes = _closes(bars)
    macd_line = _ema(closes, fast) - _ema(closes, slow)
    signal_line = _ema_of_defined(macd_line, signal)
    histogram = macd_line - signal_line

    return MACDResult(
        macd=_to_series(bars, macd_line),
        signal=_to_series(bars, signal_line),
        histogram=[
            HistogramPoint(time=b.time, value=None if math.isnan(v) else float(v))
            for b, v in zip(bars, histogram)
        ],
    )


@register_indicator("stochastic")
def calculate_stochastic(
    bars: Sequence[OHLCBar],
    k_period: int = 14,
    k_slow_period: int = 3,
    d_period: int = 3,
) -> StochasticResult:
    """
    Calculate the Stochastic Oscillator.

    raw %K = 100 * (close - lowest low) / (highest high - lowest low) over
    ``k_period`` bars (50 when the range is zero). %K is the SMA of raw %K
    over ``k_slow_period``; %D is the SMA of %K over ``d_period``.

    Args:
        bars: Time-ordered OHLC bars
        k_period: Lookback for highest high / lowest low
        k_slow_period: Smoothing of raw %K (1 gives the fast stochastic)
        d_period: Smoothing of %K into %D

    Returns:
        StochasticResult with %K and %D series
    """
    k_period = _check_period(k_period, "k_period")
    k_slow_period = _check_period(k_slow_period, "k_slow_period")
    d_period = _check_period(d_period, "d_period")

    if len(bars) < MIN_BARS:
        return StochasticResult(k=_undefined(bars), d=_undefined(bars))

    highs, lows, closes = _highs(bars), _lows(bars), _closes(bars)
    n = len(bars)

    raw_k = np.full(n, np.nan)
    for i in range(k_period - 1, n):
        lowest_low = np.min(lows[i - k_period + 1 : i + 1])
        highest_high = np.max(highs[i - k_period + 1 : i + 1])
        value_range = highest_high - lowest_low
        raw_k[i] = 50.0 if value_range == 0 else 100.0 * (closes[i] - lowest_low) / value_range

    k = np.full(n, np.nan)
    for i in range(k_period + k_slow_period - 2, n):
        k[i] = np.mean(raw_k[i - k_slow_period + 1 : i + 1])

    d = np.full(n, np.nan)
    for i in range(k_period + k_slow_period + d_period - 3, n):
        d[i] = np.mean(k[i - d_period + 1 : i + 1])

    return StochasticResult(k=_to_series(bars, k), d=_to_series(bars, d))


# =============================================================================
# Volatility
# =============================================================================

@register_indicator("bollinger")
def calculate_bollinger(
    bars: Sequence[OHLCBar],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerResult:
    """
    Calculate Bollinger Bands.

    The middle band is the SMA series; upper/lower are offset by
    ``std_dev`` population standard deviations of the same window.

    Args:
        bars: Time-ordered OHLC bars
        period: Moving average period
        std_dev: Standard deviation multiplier

    Returns:
        BollingerResult with upper, middle and lower series
    """
    period = _check_period(period)
    if len(bars) < MIN_BARS:
        return BollingerResult(
            upper=_undefined(bars), middle=_undefined(bars), lower=_undefined(bars),
        )

    closes = _closes(bars)
    middle = _rolling_mean(closes, period)
    upper = np.full(len(bars), np.nan)
    lower = np.full(len(bars), np.nan)

    for i in range(period - 1, len(bars)):
        window = closes[i - period + 1 : i + 1]
        std = math.sqrt(float(np.mean((window - middle[i]) ** 2)))
        upper[i] = middle[i] + std_dev * std
        lower[i] = middle[i] - std_dev * std

    return BollingerResult(
        upper=_to_series(bars, upper),
        middle=_to_series(bars, middle),
        lower=_to_series(bars, lower),
    )


@register_indicator("atr")
def calculate_atr(bars: Sequence[OHLCBar], period: int = 14) -> LineSeries:
    """
    Calculate Average True Range with Wilder's smoothing.

    TR = max(high - low, |high - prev_close|, |low - prev_close|). The first
    ATR (index ``period``) is the mean of TR over bars 1..period; after that
    ``atr = (prev * (period - 1) + tr) / period``.

    Args:
        bars: Time-ordered OHLC bars
        period: ATR period

    Returns:
        Series of ATR values
    """
    period = _check_period(period)
    if len(bars) < MIN_BARS:
        return _undefined(bars)

    tr = _true_range(_highs(bars), _lows(bars), _closes(bars))
    result = np.full(len(bars), np.nan)
    if len(bars) > period:
        result[period] = np.mean(tr[1 : period + 1])
        for i in range(period + 1, len(bars)):
            result[i] = (result[i - 1] * (period - 1) + tr[i]) / period

    return _to_series(bars, result)


# =============================================================================
# Trend strength
# =============================================================================

@register_indicator("adx")
def calculate_adx(bars: Sequence[OHLCBar], period: int = 14) -> ADXResult:
    """
    Calculate ADX with +DI and -DI (Wilder's directional movement).

    DI values start at index ``period``; ADX needs ``period`` DX values and
    starts at index ``2 * period - 1``.

    Args:
        bars: Time-ordered OHLC bars
        period: Smoothing period

    Returns:
        ADXResult with ADX, +DI and -DI series
    """
    period = _check_period(period)
    n = len(bars)
    if n < max(MIN_BARS, period + 1):
        return ADXResult(
            adx=_undefined(bars), di_plus=_undefined(bars), di_minus=_undefined(bars),
        )

    highs, lows, closes = _highs(bars), _lows(bars), _closes(bars)

    # Movements between bar i-1 and bar i, stored at i-1
    up_move = highs[1:] - highs[:-1]
    down_move = lows[:-1] - lows[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = _true_range(highs, lows, closes)[1:]

    smoothed_tr = float(np.sum(tr[:period]))
    smoothed_plus = float(np.sum(plus_dm[:period]))
    smoothed_minus = float(np.sum(minus_dm[:period]))

    di_plus = np.full(n, np.nan)
    di_minus = np.full(n, np.nan)
    adx = np.full(n, np.nan)
    dx: list[float] = []

    for i in range(period, n):
        if i > period:
            smoothed_tr = smoothed_tr - smoothed_tr / period + tr[i - 1]
            smoothed_plus = smoothed_plus - smoothed_plus / period + plus_dm[i - 1]
            smoothed_minus = smoothed_minus - smoothed_minus / period + minus_dm[i - 1]

        plus_di = 0.0 if smoothed_tr == 0 else 100.0 * smoothed_plus / smoothed_tr
        minus_di = 0.0 if smoothed_tr == 0 else 100.0 * smoothed_minus / smoothed_tr
        di_plus[i] = plus_di
        di_minus[i] = minus_di

        di_sum = plus_di + minus_di
        dx.append(0.0 if di_sum == 0 else 100.0 * abs(plus_di - minus_di) / di_sum)

        if len(dx) == period:
            adx[i] = sum(dx) / period
        elif len(dx) > period:
            adx[i] = (adx[i - 1] * (period - 1) + dx[-1]) / period

    return ADXResult(
        adx=_to_series(bars, adx),
        di_plus=_to_series(bars, di_plus),
        di_minus=_to_series(bars, di_minus),
    )


# =============================================================================
# Volume
# =============================================================================

@register_indicator("obv")
def calculate_obv(bars: Sequence[OHLCBar]) -> LineSeries:
    """
    Calculate On-Balance Volume.

    Seeded with the first bar's volume; each later bar adds its volume on an
    up close, subtracts it on a down close and leaves OBV unchanged
    otherwise. Missing volume counts as 0.
    """
    if len(bars) < MIN_BARS:
        return _undefined(bars)

    result = []
    obv = 0.0
    for i, bar in enumerate(bars):
        volume = bar.volume or 0.0
        if i == 0:
            obv = volume
        elif bar.close > bars[i - 1].close:
            obv += volume
        elif bar.close < bars[i - 1].close:
            obv -= volume
        result.append(LinePoint(time=bar.time, value=obv))
    return result


@register_indicator("vwap")
def calculate_vwap(bars: Sequence[OHLCBar]) -> LineSeries:
    """
    Calculate cumulative Volume Weighted Average Price.

    Bars without volume are undefined and do not contribute. This is a
    simple cumulative VWAP; intraday callers reset it per session by
    passing one session at a time.
    """
    if len(bars) < MIN_BARS:
        return _undefined(bars)

    result = []
    cum_pv = 0.0
    cum_vol = 0.0
    for bar in bars:
        if not bar.volume:
            result.append(LinePoint(time=bar.time, value=None))
            continue
        cum_pv += bar.typical_price * bar.volume
        cum_vol += bar.volume
        result.append(LinePoint(time=bar.time, value=cum_pv / cum_vol))
    return result
