"""Preset catalog and filter construction helpers.

Supports:
- Built-in presets (SCREENER_PRESETS)
- User presets loaded from a YAML file, appended after the built-ins
- Filter creation with ids unique within a session
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

import yaml
from pydantic import BaseModel

from tascreen.models.screener import (
    FilterTemplate,
    ScreenerCondition,
    ScreenerFilter,
    ScreenerIndicator,
    ScreenerPreset,
)

logger = logging.getLogger(__name__)

_I = ScreenerIndicator
_C = ScreenerCondition


def _template(indicator: ScreenerIndicator, condition: ScreenerCondition, value: float) -> FilterTemplate:
    return FilterTemplate(indicator=indicator, condition=condition, value=value)


# =============================================================================
# Built-in presets
# =============================================================================
SCREENER_PRESETS: list[ScreenerPreset] = [
    ScreenerPreset(
        id="oversold",
        name="Überverkauft",
        description="RSI unter 30, potenzielle Kaufgelegenheit",
        filters=[_template(_I.RSI, _C.BELOW, 30)],
    ),
    ScreenerPreset(
        id="overbought",
        name="Überkauft",
        description="RSI über 70, potenzielle Verkaufssituation",
        filters=[_template(_I.RSI, _C.ABOVE, 70)],
    ),
    ScreenerPreset(
        id="strong_uptrend",
        name="Starker Aufwärtstrend",
        description="ADX > 25 mit +DI > -DI",
        filters=[
            _template(_I.ADX, _C.ABOVE, 25),
            # 'above' on di_plus compares against -DI, the threshold is ignored
            _template(_I.DI_PLUS, _C.ABOVE, 0),
        ],
    ),
    ScreenerPreset(
        id="strong_downtrend",
        name="Starker Abwärtstrend",
        description="ADX > 25 mit -DI > +DI",
        filters=[
            _template(_I.ADX, _C.ABOVE, 25),
            _template(_I.DI_MINUS, _C.ABOVE, 0),
        ],
    ),
    ScreenerPreset(
        id="bollinger_squeeze",
        name="Bollinger Squeeze",
        description="Niedrige Volatilität, Ausbruch erwartet",
        filters=[_template(_I.BOLLINGER_WIDTH, _C.BELOW, 5)],
    ),
    ScreenerPreset(
        id="golden_cross_setup",
        name="Golden Cross Setup",
        description="SMA 50 nahe SMA 200 (innerhalb 2%)",
        # Plain threshold test: matches any security with 50 bars of history
        filters=[_template(_I.SMA_50, _C.ABOVE, 0)],
    ),
    ScreenerPreset(
        id="volume_spike",
        name="Volumen-Spike",
        description="Volumen > 200% des Durchschnitts",
        filters=[_template(_I.VOLUME, _C.ABOVE, 200)],
    ),
    ScreenerPreset(
        id="momentum_bullish",
        name="Bullish Momentum",
        description="Positiver MACD mit steigendem Histogramm",
        filters=[
            _template(_I.MACD_HISTOGRAM, _C.ABOVE, 0),
            _template(_I.MACD_HISTOGRAM, _C.INCREASING, 0),
        ],
    ),
    ScreenerPreset(
        id="stochastic_oversold",
        name="Stochastic Überverkauft",
        description="K und D unter 20",
        filters=[
            _template(_I.STOCHASTIC_K, _C.BELOW, 20),
            _template(_I.STOCHASTIC_D, _C.BELOW, 20),
        ],
    ),
    ScreenerPreset(
        id="breakout_candidate",
        name="Ausbruchs-Kandidat",
        description="Preis nahe Bollinger Upper Band mit hohem Volumen",
        filters=[
            _template(_I.BOLLINGER_UPPER, _C.ABOVE, 95),  # price at 95% of the upper band
            _template(_I.VOLUME, _C.ABOVE, 150),
        ],
    ),
]


def get_preset(preset_id: str, presets: list[ScreenerPreset] | None = None) -> ScreenerPreset:
    """Look up a preset by id.

    Raises:
        KeyError: If no preset has the given id.
    """
    catalog = SCREENER_PRESETS if presets is None else presets
    for preset in catalog:
        if preset.id == preset_id:
            return preset
    available = ", ".join(p.id for p in catalog) or "(none)"
    raise KeyError(f"Unknown preset '{preset_id}'. Available: {available}")


# =============================================================================
# Filter construction
# =============================================================================

def _unique_suffix() -> str:
    """Nanosecond timestamp plus random hex."""
    return f"{time.time_ns()}-{uuid.uuid4().hex[:8]}"


def create_filter(
    indicator: ScreenerIndicator | str,
    condition: ScreenerCondition | str,
    value: float,
    value2: float | None = None,
) -> ScreenerFilter:
    """Create an enabled filter with a fresh id."""
    indicator = ScreenerIndicator(indicator)
    condition = ScreenerCondition(condition)
    return ScreenerFilter(
        id=f"{indicator.value}-{condition.value}-{value}-{_unique_suffix()}",
        indicator=indicator,
        condition=condition,
        value=value,
        value2=value2,
        enabled=True,
    )


def apply_preset(preset: ScreenerPreset) -> list[ScreenerFilter]:
    """Instantiate a preset's templates as enabled filters with fresh ids."""
    suffix = _unique_suffix()
    return [
        ScreenerFilter(
            id=f"{preset.id}-{i}-{suffix}",
            indicator=template.indicator,
            condition=template.condition,
            value=template.value,
            value2=template.value2,
            enabled=True,
        )
        for i, template in enumerate(preset.filters)
    ]


# =============================================================================
# YAML presets
# =============================================================================

class PresetFile(BaseModel):
    """Top-level layout of a presets YAML file."""

    presets: list[ScreenerPreset] = []


def load_presets(path: Path | str | None = None) -> list[ScreenerPreset]:
    """Load user presets from YAML, appended to the built-in catalog.

    Falls back to the built-ins alone if the file doesn't exist.

    Raises:
        ValueError: If a preset id in the file is already taken.
    """
    catalog = list(SCREENER_PRESETS)
    if path is None:
        return catalog

    config_path = Path(path)
    if not config_path.exists():
        logger.info("No preset file at %s, using built-in presets", config_path)
        return catalog

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    loaded = PresetFile.model_validate(raw)
    known = {p.id for p in catalog}
    for preset in loaded.presets:
        if preset.id in known:
            raise ValueError(f"Preset id '{preset.id}' is already defined")
        known.add(preset.id)
        catalog.append(preset)

    logger.info("Loaded %d presets from %s", len(loaded.presets), config_path)
    return catalog
