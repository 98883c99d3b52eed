"""
Engine Data Models Module
"""
from .schemas import (
    BucketedSeries,
    ComparisonRow,
    DimensionAggregate,
    FactRow,
    Granularity,
    SeriesPoint,
    is_defined,
    sanitize_amount,
)

__all__ = [
    "BucketedSeries",
    "ComparisonRow",
    "DimensionAggregate",
    "FactRow",
    "Granularity",
    "SeriesPoint",
    "is_defined",
    "sanitize_amount",
]
