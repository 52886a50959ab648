"""Screener engine: match securities against a set of filters.

Per security:
1. Skip it if it has fewer than ``min_bars`` bars
2. Compute the indicator snapshot for the last bar
3. Evaluate every enabled filter (logical AND, stop at the first miss)
4. Emit a result with the matched filter descriptions

Matches are ranked by absolute 1-day change. The run is a pure pass over
the inputs: same inputs, same ordered output.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from tascreen.config import Settings, get_settings
from tascreen.models.ohlc import Security
from tascreen.models.screener import ScreenerFilter, ScreenerResult
from tascreen.screener.conditions import check_condition
from tascreen.screener.labels import describe_filter
from tascreen.screener.results import build_result, rank_results
from tascreen.screener.snapshot import compute_snapshot

logger = logging.getLogger(__name__)


def screen_security(
    security: Security,
    active_filters: Sequence[ScreenerFilter],
    settings: Settings,
    locale: str,
) -> ScreenerResult | None:
    """
    Run the filter pipeline for a single security.

    Args:
        security: Security with its OHLC history
        active_filters: Enabled filters only
        settings: Screener settings (minimum history, indicator periods)
        locale: Locale for match descriptions

    Returns:
        ScreenerResult if every filter matches, else None
    """
    if not active_filters:
        return None

    if len(security.ohlc_data) < settings.min_bars:
        logger.debug(
            "Skipping %s: %d bars < %d required",
            security.label, len(security.ohlc_data), settings.min_bars,
        )
        return None

    snapshot = compute_snapshot(security.ohlc_data, settings)
    if snapshot is None:
        return None

    matched: list[str] = []
    for screener_filter in active_filters:
        if not check_condition(screener_filter, snapshot):
            return None
        matched.append(describe_filter(screener_filter, locale))

    return build_result(security, snapshot, matched)


def run_screener(
    securities: Sequence[Security],
    filters: Sequence[ScreenerFilter],
    *,
    settings: Settings | None = None,
    locale: str | None = None,
    max_workers: int | None = None,
) -> list[ScreenerResult]:
    """
    Screen securities against the enabled filters.

    Args:
        securities: Securities with their OHLC histories
        filters: Filter definitions; disabled ones are ignored
        settings: Screener settings; defaults to the global settings
        locale: Locale for match descriptions; defaults to settings.label_locale
        max_workers: Thread count for per-security work; defaults to
            settings.max_workers (1 runs inline)

    Returns:
        Matching securities ranked by descending absolute 1-day change
    """
    active_filters = [f for f in filters if f.enabled]
    if not active_filters:
        logger.debug("No enabled filters, nothing to screen")
        return []

    s = settings or get_settings()
    locale = locale or s.label_locale
    workers = max_workers if max_workers is not None else s.max_workers

    def screen(security: Security) -> ScreenerResult | None:
        return screen_security(security, active_filters, s, locale)

    if workers > 1 and len(securities) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in input order
            outcomes = list(executor.map(screen, securities))
    else:
        outcomes = [screen(security) for security in securities]

    results = rank_results([r for r in outcomes if r is not None])
    logger.info(
        "Screened %d securities against %d filters: %d matches",
        len(securities), len(active_filters), len(results),
    )
    return results
