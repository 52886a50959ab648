"""Shared fixtures: OHLC bar and security factories."""

from datetime import date, timedelta

import pytest

from tascreen.models.ohlc import OHLCBar, Security


def _bars(
    closes,
    spread: float = 1.0,
    volume: float | None = 1_000_000.0,
    start: date = date(2024, 1, 1),
) -> list[OHLCBar]:
    """Bars with high/low at close +/- spread and open half a point below close."""
    return [
        OHLCBar(
            time=(start + timedelta(days=i)).isoformat(),
            open=close - 0.5,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=volume,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_bars():
    return _bars


@pytest.fixture
def make_security():
    def factory(security_id: int, closes, name: str | None = None, **bar_kwargs) -> Security:
        return Security(
            security_id=security_id,
            name=name or f"Security {security_id}",
            ticker=f"SEC{security_id}",
            ohlc_data=_bars(closes, **bar_kwargs),
        )

    return factory


@pytest.fixture
def rising_closes():
    """20 closes rising by 2 per bar: 100, 102, ..., 138."""
    return [100.0 + 2 * i for i in range(20)]


@pytest.fixture
def zigzag_closes():
    """60 closes oscillating around an upward drift."""
    return [100.0 + i * 0.3 + (3.0 if i % 3 == 0 else -2.0 if i % 3 == 1 else 0.5) for i in range(60)]
