"""Chart indicator configuration models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class IndicatorType(str, Enum):
    """Indicators that can be computed through the registry."""

    SMA = "sma"
    EMA = "ema"
    RSI = "rsi"
    MACD = "macd"
    BOLLINGER = "bollinger"
    ATR = "atr"
    VWAP = "vwap"
    STOCHASTIC = "stochastic"
    OBV = "obv"
    ADX = "adx"
    ICHIMOKU = "ichimoku"
    PIVOT = "pivot"
    FIBONACCI = "fibonacci"


class PivotType(str, Enum):
    STANDARD = "standard"
    FIBONACCI = "fibonacci"
    WOODIE = "woodie"


class IndicatorConfig(BaseModel):
    """A configured indicator instance on a chart.

    ``params`` holds the keyword arguments of the indicator function.
    """

    id: str
    type: IndicatorType
    enabled: bool = False
    params: dict[str, int | float] = {}
    color: str | None = None
    pivot_type: PivotType | None = None


DEFAULT_INDICATOR_CONFIGS: dict[IndicatorType, IndicatorConfig] = {
    IndicatorType.SMA: IndicatorConfig(
        id="sma", type=IndicatorType.SMA, params={"period": 20}, color="#2196f3",
    ),
    IndicatorType.EMA: IndicatorConfig(
        id="ema", type=IndicatorType.EMA, params={"period": 20}, color="#ff9800",
    ),
    IndicatorType.RSI: IndicatorConfig(
        id="rsi", type=IndicatorType.RSI, params={"period": 14},
    ),
    IndicatorType.MACD: IndicatorConfig(
        id="macd", type=IndicatorType.MACD,
        params={"fast": 12, "slow": 26, "signal": 9},
    ),
    IndicatorType.BOLLINGER: IndicatorConfig(
        id="bollinger", type=IndicatorType.BOLLINGER,
        params={"period": 20, "std_dev": 2}, color="#9c27b0",
    ),
    IndicatorType.ATR: IndicatorConfig(
        id="atr", type=IndicatorType.ATR, params={"period": 14},
    ),
    IndicatorType.VWAP: IndicatorConfig(
        id="vwap", type=IndicatorType.VWAP, color="#e91e63",
    ),
    IndicatorType.STOCHASTIC: IndicatorConfig(
        id="stochastic", type=IndicatorType.STOCHASTIC,
        params={"k_period": 14, "k_slow_period": 3, "d_period": 3},
    ),
    IndicatorType.OBV: IndicatorConfig(id="obv", type=IndicatorType.OBV),
    IndicatorType.ADX: IndicatorConfig(
        id="adx", type=IndicatorType.ADX, params={"period": 14},
    ),
    IndicatorType.ICHIMOKU: IndicatorConfig(
        id="ichimoku", type=IndicatorType.ICHIMOKU,
        params={"tenkan_period": 9, "kijun_period": 26, "senkou_b_period": 52},
        color="#00bcd4",
    ),
    IndicatorType.PIVOT: IndicatorConfig(
        id="pivot", type=IndicatorType.PIVOT, pivot_type=PivotType.STANDARD,
    ),
    IndicatorType.FIBONACCI: IndicatorConfig(
        id="fibonacci", type=IndicatorType.FIBONACCI, params={"lookback": 50},
    ),
}
