"""Current-value snapshot of a security's indicators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tascreen.config import Settings, get_settings
from tascreen.indicators import (
    calculate_adx,
    calculate_bollinger,
    calculate_macd,
    calculate_obv,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
)
from tascreen.models.ohlc import OHLCBar
from tascreen.models.series import last_value, prev_value


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicator values on the last bar (and the bar before, where needed).

    Fields are None where the series has not enough history for a value.
    """

    price: float
    volume: float
    volume_avg: float
    rsi: float | None = None
    macd: float | None = None
    macd_signal: float | None = None
    macd_histogram: float | None = None
    macd_histogram_prev: float | None = None
    bollinger_upper: float | None = None
    bollinger_lower: float | None = None
    bollinger_middle: float | None = None
    bollinger_width: float | None = None
    stochastic_k: float | None = None
    stochastic_d: float | None = None
    stochastic_k_prev: float | None = None
    stochastic_d_prev: float | None = None
    adx: float | None = None
    di_plus: float | None = None
    di_minus: float | None = None
    obv: float | None = None
    sma_20: float | None = None
    sma_50: float | None = None
    sma_200: float | None = None
    change_1d: float | None = None
    change_5d: float | None = None
    change_20d: float | None = None

    @property
    def volume_pct(self) -> float | None:
        """Last volume as percent of its trailing average."""
        if self.volume_avg <= 0:
            return None
        return self.volume / self.volume_avg * 100


def _pct_change(current: float, reference: float) -> float | None:
    if reference == 0:
        return None
    return (current - reference) / reference * 100


def _band_width(upper: float | None, lower: float | None, middle: float | None) -> float | None:
    if upper is None or lower is None or not middle:
        return None
    return (upper - lower) / middle * 100


def compute_snapshot(
    bars: Sequence[OHLCBar],
    settings: Settings | None = None,
) -> IndicatorSnapshot | None:
    """
    Compute the current-value snapshot for one security.

    Args:
        bars: Time-ordered OHLC bars
        settings: Indicator periods; defaults to the global settings

    Returns:
        IndicatorSnapshot, or None with fewer than 2 bars
    """
    if len(bars) < 2:
        return None

    s = settings or get_settings()
    last = bars[-1]
    n = len(bars)

    volume_window = bars[-s.volume_avg_window:]
    volume_avg = sum(b.volume or 0.0 for b in volume_window) / len(volume_window)

    rsi = calculate_rsi(bars, s.rsi_period)
    macd = calculate_macd(bars, s.macd_fast, s.macd_slow, s.macd_signal)
    bollinger = calculate_bollinger(bars, s.bollinger_period, s.bollinger_std_dev)
    stochastic = calculate_stochastic(
        bars, s.stochastic_k_period, s.stochastic_k_slow_period, s.stochastic_d_period,
    )
    adx = calculate_adx(bars, s.adx_period)
    obv = calculate_obv(bars)

    upper = last_value(bollinger.upper)
    lower = last_value(bollinger.lower)
    middle = last_value(bollinger.middle)

    return IndicatorSnapshot(
        price=last.close,
        volume=last.volume or 0.0,
        volume_avg=volume_avg,
        rsi=last_value(rsi),
        macd=last_value(macd.macd),
        macd_signal=last_value(macd.signal),
        macd_histogram=last_value(macd.histogram),
        macd_histogram_prev=prev_value(macd.histogram),
        bollinger_upper=upper,
        bollinger_lower=lower,
        bollinger_middle=middle,
        bollinger_width=_band_width(upper, lower, middle),
        stochastic_k=last_value(stochastic.k),
        stochastic_d=last_value(stochastic.d),
        stochastic_k_prev=prev_value(stochastic.k),
        stochastic_d_prev=prev_value(stochastic.d),
        adx=last_value(adx.adx),
        di_plus=last_value(adx.di_plus),
        di_minus=last_value(adx.di_minus),
        obv=last_value(obv),
        sma_20=last_value(calculate_sma(bars, 20)),
        sma_50=last_value(calculate_sma(bars, 50)),
        sma_200=last_value(calculate_sma(bars, 200)),
        change_1d=_pct_change(last.close, bars[-2].close),
        # Reference closes sit 5 and 20 positions from the end, the last bar included
        change_5d=_pct_change(last.close, bars[-5].close) if n >= 5 else None,
        change_20d=_pct_change(last.close, bars[-20].close) if n >= 20 else None,
    )
