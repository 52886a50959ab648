"""Bar transformations: Heikin-Ashi and synthetic OHLC from a price line."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from tascreen.models.ohlc import OHLCBar


def convert_to_heikin_ashi(bars: Sequence[OHLCBar]) -> list[OHLCBar]:
    """
    Convert regular bars to Heikin-Ashi bars.

    HA close = (open + high + low + close) / 4
    HA open  = (prev HA open + prev HA close) / 2, first = (open + close) / 2
    HA high  = max(high, HA open, HA close)
    HA low   = min(low, HA open, HA close)

    Volume and time are carried over unchanged.
    """
    result: list[OHLCBar] = []
    for i, bar in enumerate(bars):
        ha_close = (bar.open + bar.high + bar.low + bar.close) / 4
        if i == 0:
            ha_open = (bar.open + bar.close) / 2
        else:
            prev = result[i - 1]
            ha_open = (prev.open + prev.close) / 2

        result.append(
            OHLCBar(
                time=bar.time,
                open=ha_open,
                high=max(bar.high, ha_open, ha_close),
                low=min(bar.low, ha_open, ha_close),
                close=ha_close,
                volume=bar.volume,
            )
        )
    return result


def convert_to_ohlc(
    prices: Iterable[tuple[str, float]],
    volatility_percent: float = 1.5,
    rng: np.random.Generator | None = None,
) -> list[OHLCBar]:
    """
    Build synthetic OHLC bars from a close-only price line.

    Each bar opens at the previous close (the first at its own close) and
    its high/low extend beyond open/close by a random fraction of
    ``volatility_percent`` of the close. Volume is random as well.

    Args:
        prices: (date, close) pairs in time order
        volatility_percent: Maximum wick size as percent of close
        rng: NumPy random generator; pass a seeded one for reproducible bars

    Returns:
        List of OHLCBar
    """
    rng = rng or np.random.default_rng()
    bars: list[OHLCBar] = []
    prev_close: float | None = None

    for date, close in prices:
        variance = close * (volatility_percent / 100)
        open_ = prev_close if prev_close is not None else close
        high = max(open_, close) + float(rng.random()) * variance
        low = min(open_, close) - float(rng.random()) * variance
        volume = float(rng.integers(100_000, 1_100_000))

        bars.append(
            OHLCBar(time=date, open=open_, high=high, low=low, close=close, volume=volume)
        )
        prev_close = close
    return bars
