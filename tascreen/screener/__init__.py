"""Rule-based security screener.

Public API:
- run_screener: Screen securities against filters, ranked by 1-day move
- compute_snapshot: Current indicator values for one security
- check_condition: Evaluate one filter against a snapshot
- SCREENER_PRESETS / apply_preset / create_filter: Filter construction
- describe_filter: Localized filter description
"""

from tascreen.screener.conditions import check_condition, resolve_indicator_value
from tascreen.screener.engine import run_screener, screen_security
from tascreen.screener.labels import (
    CONDITION_LABELS,
    INDICATOR_LABELS,
    condition_label,
    describe_filter,
    indicator_label,
)
from tascreen.screener.presets import (
    SCREENER_PRESETS,
    apply_preset,
    create_filter,
    get_preset,
    load_presets,
)
from tascreen.screener.results import build_result, rank_results
from tascreen.screener.snapshot import IndicatorSnapshot, compute_snapshot

__all__ = [
    "check_condition",
    "resolve_indicator_value",
    "run_screener",
    "screen_security",
    "CONDITION_LABELS",
    "INDICATOR_LABELS",
    "condition_label",
    "describe_filter",
    "indicator_label",
    "SCREENER_PRESETS",
    "apply_preset",
    "create_filter",
    "get_preset",
    "load_presets",
    "build_result",
    "rank_results",
    "IndicatorSnapshot",
    "compute_snapshot",
]
