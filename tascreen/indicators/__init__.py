"""Technical indicators (pure math, no I/O).

Importing this package registers every indicator with the registry.
"""

from tascreen.indicators.indicators import (
    calculate_adx,
    calculate_atr,
    calculate_bollinger,
    calculate_ema,
    calculate_macd,
    calculate_obv,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    calculate_vwap,
)
from tascreen.indicators.levels import (
    calculate_fibonacci,
    calculate_ichimoku,
    calculate_pivot_points,
)
from tascreen.indicators.registry import (
    compute_indicator,
    get_indicator,
    list_indicators,
    register_indicator,
)
from tascreen.indicators.transforms import convert_to_heikin_ashi, convert_to_ohlc

__all__ = [
    "calculate_adx",
    "calculate_atr",
    "calculate_bollinger",
    "calculate_ema",
    "calculate_macd",
    "calculate_obv",
    "calculate_rsi",
    "calculate_sma",
    "calculate_stochastic",
    "calculate_vwap",
    "calculate_fibonacci",
    "calculate_ichimoku",
    "calculate_pivot_points",
    "compute_indicator",
    "get_indicator",
    "list_indicators",
    "register_indicator",
    "convert_to_heikin_ashi",
    "convert_to_ohlc",
]
