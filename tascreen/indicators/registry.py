"""Indicator registry for dispatching chart indicator configurations.

Usage:
    @register_indicator("my_indicator")
    def calculate_my_indicator(bars, period=10):
        ...

    series = compute_indicator(config, bars)
    names = list_indicators()
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from tascreen.models.config import IndicatorConfig
from tascreen.models.ohlc import OHLCBar

logger = logging.getLogger(__name__)

# Global registry: indicator name -> calculation function
_REGISTRY: dict[str, Callable[..., Any]] = {}


def register_indicator(name: str):
    """Decorator to register an indicator function under a given name.

    Args:
        name: Unique indicator name (matches an IndicatorType value).

    Returns:
        Decorator that registers the function and returns it unchanged.

    Raises:
        ValueError: If an indicator with the same name is already registered.
    """

    def decorator(func):
        if name in _REGISTRY:
            raise ValueError(
                f"Indicator '{name}' is already registered by {_REGISTRY[name].__name__}"
            )
        _REGISTRY[name] = func
        logger.debug("Registered indicator: %s -> %s", name, func.__name__)
        return func

    return decorator


def get_indicator(name: str) -> Callable[..., Any]:
    """Get the calculation function registered under ``name``.

    Raises:
        KeyError: If no indicator is registered under the given name.
    """
    func = _REGISTRY.get(name)
    if func is None:
        available = ", ".join(sorted(_REGISTRY.keys())) or "(none)"
        raise KeyError(
            f"Unknown indicator '{name}'. Available: {available}"
        )
    return func


def list_indicators() -> list[str]:
    """Return a sorted list of registered indicator names."""
    return sorted(_REGISTRY.keys())


def compute_indicator(config: IndicatorConfig, bars: Sequence[OHLCBar]) -> Any:
    """Compute the indicator described by ``config`` over ``bars``.

    Args:
        config: Indicator configuration; ``params`` are passed as keyword
            arguments, and ``pivot_type`` is forwarded for pivot points.
        bars: Time-ordered OHLC bars.

    Returns:
        Whatever the registered function returns (a series or a result
        dataclass).
    """
    func = get_indicator(config.type.value)
    kwargs: dict[str, Any] = dict(config.params)
    if config.pivot_type is not None:
        kwargs["pivot_type"] = config.pivot_type.value
    return func(bars, **kwargs)
