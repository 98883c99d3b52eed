"""
Synthetic Data Module
"""
from .generators import (
    CATEGORIES,
    MARKETPLACES,
    DimensionAggregateGenerator,
    FactRowGenerator,
    hourly_weights,
)

__all__ = [
    "CATEGORIES",
    "MARKETPLACES",
    "DimensionAggregateGenerator",
    "FactRowGenerator",
    "hourly_weights",
]
