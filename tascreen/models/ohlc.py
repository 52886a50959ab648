"""OHLC (candlestick) bar and security models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OHLCBar(BaseModel):
    """One bar of price history.

    ``time`` is any string that sorts in time order (ISO dates in practice).
    A missing or zero ``volume`` means the bar carries no volume data.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    time: str
    open: float
    high: float
    low: float
    close: float
    volume: float | None = Field(default=None, ge=0)

    @property
    def typical_price(self) -> float:
        """Get (high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3


class Security(BaseModel):
    """A security with its price history, as supplied for one screening run."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    security_id: int
    name: str
    ticker: str | None = None
    isin: str | None = None
    currency: str | None = None
    ohlc_data: list[OHLCBar] = Field(default_factory=list)

    @property
    def label(self) -> str:
        """Short display label: ticker if known, else name."""
        return self.ticker or self.name
