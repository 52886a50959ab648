"""Screener filter, preset and result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScreenerIndicator(str, Enum):
    """Quantity a filter is evaluated against."""

    PRICE = "price"
    VOLUME = "volume"  # % of the trailing average volume
    RSI = "rsi"
    MACD = "macd"
    MACD_SIGNAL = "macd_signal"
    MACD_HISTOGRAM = "macd_histogram"
    BOLLINGER_UPPER = "bollinger_upper"  # price as % of the upper band
    BOLLINGER_LOWER = "bollinger_lower"  # price as % of the lower band
    BOLLINGER_WIDTH = "bollinger_width"
    STOCHASTIC_K = "stochastic_k"
    STOCHASTIC_D = "stochastic_d"
    ADX = "adx"
    DI_PLUS = "di_plus"
    DI_MINUS = "di_minus"
    OBV = "obv"
    SMA_20 = "sma_20"
    SMA_50 = "sma_50"
    SMA_200 = "sma_200"
    CHANGE_1D = "change_1d"
    CHANGE_5D = "change_5d"
    CHANGE_20D = "change_20d"


class ScreenerCondition(str, Enum):
    """Comparison applied to the resolved indicator value."""

    ABOVE = "above"
    BELOW = "below"
    CROSSES_ABOVE = "crosses_above"
    CROSSES_BELOW = "crosses_below"
    BETWEEN = "between"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class FilterTemplate(BaseModel):
    """Filter rule without identity, as stored in a preset."""

    model_config = ConfigDict(frozen=True)

    indicator: ScreenerIndicator
    condition: ScreenerCondition
    value: float = 0.0
    value2: float | None = None  # upper bound for 'between'


class ScreenerFilter(BaseModel):
    """A single screening rule.

    Disabled filters are left out of evaluation entirely.
    """

    id: str
    indicator: ScreenerIndicator
    condition: ScreenerCondition
    value: float = 0.0
    value2: float | None = None
    enabled: bool = True


class ScreenerPreset(BaseModel):
    """Named bundle of filter templates offered as a starting point."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    filters: list[FilterTemplate] = Field(default_factory=list)


class ScreenerResult(BaseModel):
    """One matching security of a screening run."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    security_id: int
    security_name: str
    ticker: str | None = None
    isin: str | None = None
    currency: str | None = None
    matched_filters: list[str] = Field(default_factory=list)
    current_values: dict[str, float | None] = Field(default_factory=dict)
    last_price: float
    # Same names as the current_values keys
    change_1d: float | None = Field(default=None, alias="change1d")
    change_5d: float | None = Field(default=None, alias="change5d")
    change_20d: float | None = Field(default=None, alias="change20d")
