"""Price level studies: Ichimoku cloud, pivot points, Fibonacci retracements."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from tascreen.indicators.indicators import (
    MIN_BARS,
    _check_period,
    _highs,
    _lows,
    _to_series,
    _undefined,
)
from tascreen.indicators.registry import register_indicator
from tascreen.models.ohlc import OHLCBar
from tascreen.models.series import (
    FibonacciLevel,
    FibonacciResult,
    IchimokuResult,
    LinePoint,
    PivotPointsResult,
    SwingPoint,
)

FIBONACCI_RATIOS = (0.0, 0.236, 0.382, 0.5, 0.618, 0.786, 1.0)


def _midpoint(highs: np.ndarray, lows: np.ndarray, period: int) -> np.ndarray:
    """(highest high + lowest low) / 2 over a trailing window."""
    result = np.full(len(highs), np.nan)
    for i in range(period - 1, len(highs)):
        window = slice(i - period + 1, i + 1)
        result[i] = (np.max(highs[window]) + np.min(lows[window])) / 2
    return result


@register_indicator("ichimoku")
def calculate_ichimoku(
    bars: Sequence[OHLCBar],
    tenkan_period: int = 9,
    kijun_period: int = 26,
    senkou_b_period: int = 52,
) -> IchimokuResult:
    """
    Calculate Ichimoku cloud lines.

    Values are aligned to the bar they are computed on. Shifting senkou
    spans forward and chikou back by ``kijun_period`` is left to the
    chart that plots them.

    Args:
        bars: Time-ordered OHLC bars
        tenkan_period: Conversion line period
        kijun_period: Base line period
        senkou_b_period: Leading span B period

    Returns:
        IchimokuResult with five aligned series
    """
    tenkan_period = _check_period(tenkan_period, "tenkan_period")
    kijun_period = _check_period(kijun_period, "kijun_period")
    senkou_b_period = _check_period(senkou_b_period, "senkou_b_period")

    if len(bars) < MIN_BARS:
        return IchimokuResult(
            tenkan=_undefined(bars),
            kijun=_undefined(bars),
            senkou_a=_undefined(bars),
            senkou_b=_undefined(bars),
            chikou=_undefined(bars),
        )

    highs, lows = _highs(bars), _lows(bars)
    tenkan = _midpoint(highs, lows, tenkan_period)
    kijun = _midpoint(highs, lows, kijun_period)
    senkou_a = (tenkan + kijun) / 2
    senkou_b = _midpoint(highs, lows, senkou_b_period)

    return IchimokuResult(
        tenkan=_to_series(bars, tenkan),
        kijun=_to_series(bars, kijun),
        senkou_a=_to_series(bars, senkou_a),
        senkou_b=_to_series(bars, senkou_b),
        chikou=[LinePoint(time=b.time, value=b.close) for b in bars],
    )


def _pivot_levels(high: float, low: float, close: float, pivot_type: str) -> tuple:
    """Return (P, R1, R2, R3, S1, S2, S3) for one prior bar."""
    if pivot_type == "standard":
        p = (high + low + close) / 3
        return (
            p,
            2 * p - low,
            p + (high - low),
            high + 2 * (p - low),
            2 * p - high,
            p - (high - low),
            low - 2 * (high - p),
        )
    if pivot_type == "fibonacci":
        p = (high + low + close) / 3
        rng = high - low
        return (
            p,
            p + 0.382 * rng,
            p + 0.618 * rng,
            p + rng,
            p - 0.382 * rng,
            p - 0.618 * rng,
            p - rng,
        )
    # woodie
    p = (high + low + 2 * close) / 4
    r1 = 2 * p - low
    s1 = 2 * p - high
    return (
        p,
        r1,
        p + (high - low),
        r1 + (high - low),
        s1,
        p - (high - low),
        s1 - (high - low),
    )


@register_indicator("pivot")
def calculate_pivot_points(
    bars: Sequence[OHLCBar],
    pivot_type: str = "standard",
) -> PivotPointsResult:
    """
    Calculate floor pivot points from each previous bar.

    Args:
        bars: Time-ordered OHLC bars
        pivot_type: 'standard', 'fibonacci' or 'woodie'

    Returns:
        PivotPointsResult; the first bar is undefined

    Raises:
        ValueError: On an unknown pivot type
    """
    if pivot_type not in ("standard", "fibonacci", "woodie"):
        raise ValueError(f"Unknown pivot type '{pivot_type}'")

    columns: list[list[LinePoint]] = [[] for _ in range(7)]
    for i, bar in enumerate(bars):
        if i == 0:
            levels = (None,) * 7
        else:
            prev = bars[i - 1]
            levels = _pivot_levels(prev.high, prev.low, prev.close, pivot_type)
        for column, value in zip(columns, levels):
            column.append(LinePoint(time=bar.time, value=value))

    pivot, r1, r2, r3, s1, s2, s3 = columns
    return PivotPointsResult(pivot=pivot, r1=r1, r2=r2, r3=r3, s1=s1, s2=s2, s3=s3)


@register_indicator("fibonacci")
def calculate_fibonacci(bars: Sequence[OHLCBar], lookback: int = 50) -> FibonacciResult:
    """
    Calculate Fibonacci retracement levels from the recent swing high/low.

    If the swing low comes before the swing high the move is an uptrend and
    levels are measured down from the high; otherwise up from the low.

    Args:
        bars: Time-ordered OHLC bars
        lookback: Number of trailing bars searched for the swing points

    Returns:
        FibonacciResult with levels ordered 0% .. 100%

    Raises:
        ValueError: If ``bars`` is empty
    """
    lookback = _check_period(lookback, "lookback")
    if not bars:
        raise ValueError("Fibonacci levels need at least one bar")

    recent = list(bars[-lookback:])
    high_idx = max(range(len(recent)), key=lambda i: (recent[i].high, -i))
    low_idx = min(range(len(recent)), key=lambda i: (recent[i].low, i))
    swing_high = SwingPoint(price=recent[high_idx].high, time=recent[high_idx].time)
    swing_low = SwingPoint(price=recent[low_idx].low, time=recent[low_idx].time)

    is_uptrend = low_idx < high_idx
    price_range = swing_high.price - swing_low.price

    levels = []
    for ratio in FIBONACCI_RATIOS:
        if is_uptrend:
            price = swing_high.price - ratio * price_range
        else:
            price = swing_low.price + ratio * price_range
        levels.append(
            FibonacciLevel(level=ratio * 100, price=price, label=f"{ratio * 100:.1f}%")
        )

    return FibonacciResult(levels=levels, swing_high=swing_high, swing_low=swing_low)
