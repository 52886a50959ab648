"""Screener result assembly and ranking."""

from __future__ import annotations

from tascreen.models.ohlc import Security
from tascreen.models.screener import ScreenerResult
from tascreen.screener.snapshot import IndicatorSnapshot


def build_result(
    security: Security,
    snapshot: IndicatorSnapshot,
    matched_filters: list[str],
) -> ScreenerResult:
    """Assemble the result record for a matching security."""
    return ScreenerResult(
        security_id=security.security_id,
        security_name=security.name,
        ticker=security.ticker,
        isin=security.isin,
        currency=security.currency,
        matched_filters=list(matched_filters),
        current_values={
            "price": snapshot.price,
            "rsi": snapshot.rsi,
            "macd": snapshot.macd,
            "adx": snapshot.adx,
            "volume": snapshot.volume_pct,
            "change1d": snapshot.change_1d,
            "change5d": snapshot.change_5d,
            "change20d": snapshot.change_20d,
        },
        last_price=snapshot.price,
        change_1d=snapshot.change_1d,
        change_5d=snapshot.change_5d,
        change_20d=snapshot.change_20d,
    )


def rank_results(results: list[ScreenerResult]) -> list[ScreenerResult]:
    """Order by absolute 1-day change, most volatile first.

    Missing changes count as 0; ties keep their input order.
    """
    return sorted(results, key=lambda r: abs(r.change_1d or 0.0), reverse=True)
