"""Technical indicators and rule-based security screening.

This package contains pure computation with no I/O dependencies
(no database, file or network access outside the CLI). Callers hand in
time-ordered OHLC bars and filter definitions and get back indicator
series or ranked screener matches.
"""

from tascreen.indicators import (
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
from tascreen.models import (
    OHLCBar,
    Security,
    ScreenerCondition,
    ScreenerFilter,
    ScreenerIndicator,
    ScreenerPreset,
    ScreenerResult,
)
from tascreen.screener import (
    SCREENER_PRESETS,
    apply_preset,
    create_filter,
    run_screener,
)

__version__ = "0.1.0"

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
    "OHLCBar",
    "Security",
    "ScreenerCondition",
    "ScreenerFilter",
    "ScreenerIndicator",
    "ScreenerPreset",
    "ScreenerResult",
    "SCREENER_PRESETS",
    "apply_preset",
    "create_filter",
    "run_screener",
]
