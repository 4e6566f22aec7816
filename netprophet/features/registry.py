"""
Factor registry.

Factors register in explanation order: rating, surface, form, head-to-head,
physical. The registry order is the order of the ``factors`` map in every
prediction.
"""

from typing import Callable, Optional

FactorFn = Callable[..., Optional[float]]

_REGISTRY: dict[str, FactorFn] = {}


def register(name: str):
    """Decorator to register a factor function under its output name."""
    def wrapper(fn):
        if name in _REGISTRY:
            raise ValueError(f"Factor '{name}' registered twice")
        _REGISTRY[name] = fn
        return fn
    return wrapper


def get_factor(name: str) -> FactorFn:
    if name not in _REGISTRY:
        available = ", ".join(_REGISTRY.keys())
        raise ValueError(f"Unknown factor '{name}'. Available: {available}")
    return _REGISTRY[name]


def list_factors() -> list[str]:
    return list(_REGISTRY.keys())
