"""Domain layer definitions."""

from .production import ProductionState

__all__ = [
    "ProductionState",
]
