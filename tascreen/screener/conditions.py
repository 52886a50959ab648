"""Filter condition evaluation against an indicator snapshot.

Malformed or unsupported filters evaluate to False instead of raising, so
one bad filter cannot abort a screening run.
"""

from __future__ import annotations

from typing import Callable

from tascreen.models.screener import ScreenerCondition, ScreenerFilter, ScreenerIndicator
from tascreen.screener.snapshot import IndicatorSnapshot


def _price_to_band(price: float, band: float | None) -> float | None:
    """Price as percent of a Bollinger band."""
    if not band or not price:
        return None
    return price / band * 100


_RESOLVERS: dict[ScreenerIndicator, Callable[[IndicatorSnapshot], float | None]] = {
    ScreenerIndicator.PRICE: lambda s: s.price,
    ScreenerIndicator.VOLUME: lambda s: s.volume_pct,
    ScreenerIndicator.RSI: lambda s: s.rsi,
    ScreenerIndicator.MACD: lambda s: s.macd,
    ScreenerIndicator.MACD_SIGNAL: lambda s: s.macd_signal,
    ScreenerIndicator.MACD_HISTOGRAM: lambda s: s.macd_histogram,
    ScreenerIndicator.BOLLINGER_UPPER: lambda s: _price_to_band(s.price, s.bollinger_upper),
    ScreenerIndicator.BOLLINGER_LOWER: lambda s: _price_to_band(s.price, s.bollinger_lower),
    ScreenerIndicator.BOLLINGER_WIDTH: lambda s: s.bollinger_width,
    ScreenerIndicator.STOCHASTIC_K: lambda s: s.stochastic_k,
    ScreenerIndicator.STOCHASTIC_D: lambda s: s.stochastic_d,
    ScreenerIndicator.ADX: lambda s: s.adx,
    ScreenerIndicator.DI_PLUS: lambda s: s.di_plus,
    ScreenerIndicator.DI_MINUS: lambda s: s.di_minus,
    ScreenerIndicator.OBV: lambda s: s.obv,
    ScreenerIndicator.SMA_20: lambda s: s.sma_20,
    ScreenerIndicator.SMA_50: lambda s: s.sma_50,
    ScreenerIndicator.SMA_200: lambda s: s.sma_200,
    ScreenerIndicator.CHANGE_1D: lambda s: s.change_1d,
    ScreenerIndicator.CHANGE_5D: lambda s: s.change_5d,
    ScreenerIndicator.CHANGE_20D: lambda s: s.change_20d,
}

# Previous-bar values available for cross detection
_CROSS_PREVIOUS: dict[ScreenerIndicator, Callable[[IndicatorSnapshot], float | None]] = {
    ScreenerIndicator.STOCHASTIC_K: lambda s: s.stochastic_k_prev,
    ScreenerIndicator.STOCHASTIC_D: lambda s: s.stochastic_d_prev,
}


def resolve_indicator_value(
    indicator: ScreenerIndicator,
    snapshot: IndicatorSnapshot,
) -> float | None:
    """Resolve a filter indicator to the number its condition compares.

    Volume resolves to percent of its trailing average and the Bollinger
    bands to price as percent of the band.
    """
    resolver = _RESOLVERS.get(indicator)
    if resolver is None:
        return None
    return resolver(snapshot)


def check_condition(screener_filter: ScreenerFilter, snapshot: IndicatorSnapshot) -> bool:
    """
    Evaluate one filter against a snapshot.

    Special cases:
    - di_plus/di_minus with 'above' compare against the opposing DI and
      ignore the threshold (when the opposing DI is defined).
    - crosses_above/crosses_below only work for stochastic %K and %D.
    - increasing/decreasing only work for the MACD histogram.

    Returns:
        True if the filter matches; False when it does not, when the value
        is undefined, or when the combination is unsupported
    """
    value = resolve_indicator_value(screener_filter.indicator, snapshot)
    if value is None:
        return False

    indicator = screener_filter.indicator
    condition = screener_filter.condition
    threshold = screener_filter.value

    if condition == ScreenerCondition.ABOVE:
        if indicator == ScreenerIndicator.DI_PLUS and snapshot.di_minus is not None:
            return value > snapshot.di_minus
        if indicator == ScreenerIndicator.DI_MINUS and snapshot.di_plus is not None:
            return value > snapshot.di_plus
        return value > threshold

    if condition == ScreenerCondition.BELOW:
        return value < threshold

    if condition in (ScreenerCondition.CROSSES_ABOVE, ScreenerCondition.CROSSES_BELOW):
        previous_of = _CROSS_PREVIOUS.get(indicator)
        previous = previous_of(snapshot) if previous_of else None
        if previous is None:
            return False
        if condition == ScreenerCondition.CROSSES_ABOVE:
            return previous <= threshold and value > threshold
        return previous >= threshold and value < threshold

    if condition == ScreenerCondition.BETWEEN:
        upper = screener_filter.value2
        return upper is not None and threshold <= value <= upper

    if condition in (ScreenerCondition.INCREASING, ScreenerCondition.DECREASING):
        if indicator != ScreenerIndicator.MACD_HISTOGRAM:
            return False
        previous = snapshot.macd_histogram_prev
        if previous is None:
            return False
        if condition == ScreenerCondition.INCREASING:
            return value > previous
        return value < previous

    return False
