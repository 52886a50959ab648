"""Indicator series containers.

Every series has one point per input bar. ``value`` is None where the
indicator has insufficient lookback.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LinePoint:
    """A single (time, value) point of an indicator series."""

    time: str
    value: float | None


@dataclass(frozen=True)
class HistogramPoint(LinePoint):
    """Histogram bar; carries a sign flag for presentation."""

    @property
    def is_positive(self) -> bool | None:
        """True for non-negative bars, None where undefined."""
        if self.value is None:
            return None
        return self.value >= 0


LineSeries = list[LinePoint]


@dataclass
class MACDResult:
    macd: LineSeries
    signal: LineSeries
    histogram: list[HistogramPoint]


@dataclass
class BollingerResult:
    upper: LineSeries
    middle: LineSeries
    lower: LineSeries


@dataclass
class StochasticResult:
    k: LineSeries  # %K (fast line)
    d: LineSeries  # %D (signal line)


@dataclass
class ADXResult:
    adx: LineSeries  # trend strength, 0-100
    di_plus: LineSeries
    di_minus: LineSeries


@dataclass
class IchimokuResult:
    tenkan: LineSeries
    kijun: LineSeries
    senkou_a: LineSeries
    senkou_b: LineSeries
    chikou: LineSeries


@dataclass
class PivotPointsResult:
    pivot: LineSeries
    r1: LineSeries
    r2: LineSeries
    r3: LineSeries
    s1: LineSeries
    s2: LineSeries
    s3: LineSeries


@dataclass(frozen=True)
class FibonacciLevel:
    level: float  # percent, e.g. 61.8
    price: float
    label: str


@dataclass(frozen=True)
class SwingPoint:
    price: float
    time: str


@dataclass
class FibonacciResult:
    levels: list[FibonacciLevel] = field(default_factory=list)
    swing_high: SwingPoint | None = None
    swing_low: SwingPoint | None = None


def last_value(series: LineSeries) -> float | None:
    """Value of the last point, or None if empty or undefined."""
    if not series:
        return None
    return series[-1].value


def prev_value(series: LineSeries, offset: int = 1) -> float | None:
    """Value ``offset`` points before the last one, or None."""
    if len(series) <= offset:
        return None
    return series[-1 - offset].value
