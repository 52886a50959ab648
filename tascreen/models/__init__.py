"""Domain models: bars, securities, indicator series, screener rules."""

from tascreen.models.config import (
    DEFAULT_INDICATOR_CONFIGS,
    IndicatorConfig,
    IndicatorType,
    PivotType,
)
from tascreen.models.ohlc import OHLCBar, Security
from tascreen.models.screener import (
    FilterTemplate,
    ScreenerCondition,
    ScreenerFilter,
    ScreenerIndicator,
    ScreenerPreset,
    ScreenerResult,
)
from tascreen.models.series import (
    ADXResult,
    BollingerResult,
    FibonacciLevel,
    FibonacciResult,
    HistogramPoint,
    IchimokuResult,
    LinePoint,
    LineSeries,
    MACDResult,
    PivotPointsResult,
    StochasticResult,
    SwingPoint,
    last_value,
    prev_value,
)

__all__ = [
    "DEFAULT_INDICATOR_CONFIGS",
    "IndicatorConfig",
    "IndicatorType",
    "PivotType",
    "OHLCBar",
    "Security",
    "FilterTemplate",
    "ScreenerCondition",
    "ScreenerFilter",
    "ScreenerIndicator",
    "ScreenerPreset",
    "ScreenerResult",
    "ADXResult",
    "BollingerResult",
    "FibonacciLevel",
    "FibonacciResult",
    "HistogramPoint",
    "IchimokuResult",
    "LinePoint",
    "LineSeries",
    "MACDResult",
    "PivotPointsResult",
    "StochasticResult",
    "SwingPoint",
    "last_value",
    "prev_value",
]
