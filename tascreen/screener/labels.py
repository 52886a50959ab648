"""Display labels for screener indicators and conditions."""

from __future__ import annotations

from tascreen.models.screener import ScreenerCondition, ScreenerFilter, ScreenerIndicator

DEFAULT_LOCALE = "de"

INDICATOR_LABELS: dict[str, dict[ScreenerIndicator, str]] = {
    "de": {
        ScreenerIndicator.PRICE: "Preis",
        ScreenerIndicator.VOLUME: "Volumen (%)",
        ScreenerIndicator.RSI: "RSI (14)",
        ScreenerIndicator.MACD: "MACD",
        ScreenerIndicator.MACD_SIGNAL: "MACD Signal",
        ScreenerIndicator.MACD_HISTOGRAM: "MACD Histogramm",
        ScreenerIndicator.BOLLINGER_UPPER: "Bollinger Upper (%)",
        ScreenerIndicator.BOLLINGER_LOWER: "Bollinger Lower (%)",
        ScreenerIndicator.BOLLINGER_WIDTH: "Bollinger Breite (%)",
        ScreenerIndicator.STOCHASTIC_K: "Stochastic %K",
        ScreenerIndicator.STOCHASTIC_D: "Stochastic %D",
        ScreenerIndicator.ADX: "ADX (14)",
        ScreenerIndicator.DI_PLUS: "+DI",
        ScreenerIndicator.DI_MINUS: "-DI",
        ScreenerIndicator.OBV: "OBV",
        ScreenerIndicator.SMA_20: "SMA 20",
        ScreenerIndicator.SMA_50: "SMA 50",
        ScreenerIndicator.SMA_200: "SMA 200",
        ScreenerIndicator.CHANGE_1D: "Änderung 1T (%)",
        ScreenerIndicator.CHANGE_5D: "Änderung 5T (%)",
        ScreenerIndicator.CHANGE_20D: "Änderung 20T (%)",
    },
    "en": {
        ScreenerIndicator.PRICE: "Price",
        ScreenerIndicator.VOLUME: "Volume (%)",
        ScreenerIndicator.RSI: "RSI (14)",
        ScreenerIndicator.MACD: "MACD",
        ScreenerIndicator.MACD_SIGNAL: "MACD Signal",
        ScreenerIndicator.MACD_HISTOGRAM: "MACD Histogram",
        ScreenerIndicator.BOLLINGER_UPPER: "Bollinger Upper (%)",
        ScreenerIndicator.BOLLINGER_LOWER: "Bollinger Lower (%)",
        ScreenerIndicator.BOLLINGER_WIDTH: "Bollinger Width (%)",
        ScreenerIndicator.STOCHASTIC_K: "Stochastic %K",
        ScreenerIndicator.STOCHASTIC_D: "Stochastic %D",
        ScreenerIndicator.ADX: "ADX (14)",
        ScreenerIndicator.DI_PLUS: "+DI",
        ScreenerIndicator.DI_MINUS: "-DI",
        ScreenerIndicator.OBV: "OBV",
        ScreenerIndicator.SMA_20: "SMA 20",
        ScreenerIndicator.SMA_50: "SMA 50",
        ScreenerIndicator.SMA_200: "SMA 200",
        ScreenerIndicator.CHANGE_1D: "Change 1D (%)",
        ScreenerIndicator.CHANGE_5D: "Change 5D (%)",
        ScreenerIndicator.CHANGE_20D: "Change 20D (%)",
    },
}

CONDITION_LABELS: dict[str, dict[ScreenerCondition, str]] = {
    "de": {
        ScreenerCondition.ABOVE: "über",
        ScreenerCondition.BELOW: "unter",
        ScreenerCondition.CROSSES_ABOVE: "kreuzt über",
        ScreenerCondition.CROSSES_BELOW: "kreuzt unter",
        ScreenerCondition.BETWEEN: "zwischen",
        ScreenerCondition.INCREASING: "steigend",
        ScreenerCondition.DECREASING: "fallend",
    },
    "en": {
        ScreenerCondition.ABOVE: "above",
        ScreenerCondition.BELOW: "below",
        ScreenerCondition.CROSSES_ABOVE: "crosses above",
        ScreenerCondition.CROSSES_BELOW: "crosses below",
        ScreenerCondition.BETWEEN: "between",
        ScreenerCondition.INCREASING: "increasing",
        ScreenerCondition.DECREASING: "decreasing",
    },
}

# Joins the two bounds of a 'between' description
_AND = {"de": "und", "en": "and"}


def _resolve_locale(locale: str | None) -> str:
    if locale in INDICATOR_LABELS:
        return locale
    return DEFAULT_LOCALE


def format_number(value: float) -> str:
    """Print integral floats without a trailing '.0'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def indicator_label(indicator: ScreenerIndicator, locale: str | None = None) -> str:
    return INDICATOR_LABELS[_resolve_locale(locale)][indicator]


def condition_label(condition: ScreenerCondition, locale: str | None = None) -> str:
    return CONDITION_LABELS[_resolve_locale(locale)][condition]


def describe_filter(screener_filter: ScreenerFilter, locale: str | None = None) -> str:
    """Human-readable description of a filter, e.g. 'RSI (14) unter 30'.

    Unknown locales fall back to German.
    """
    locale = _resolve_locale(locale)
    text = (
        f"{indicator_label(screener_filter.indicator, locale)} "
        f"{condition_label(screener_filter.condition, locale)} "
        f"{format_number(screener_filter.value)}"
    )
    if screener_filter.value2 is not None:
        text += f" {_AND[locale]} {format_number(screener_filter.value2)}"
    return text
