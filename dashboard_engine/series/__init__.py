"""
Series Aggregation and Projection Module
"""
from .builder import (
    BucketedSeriesBuilder,
    build_daily_series,
    build_hourly_series,
    builder_for,
    facts_to_frame,
    to_cumulative,
)
from .periods import (
    PeriodStatus,
    bucket_count_for,
    days_in_month,
    is_iso_day,
    is_iso_month,
    period_key_for,
    resolve_cutoff,
    shift_day,
    shift_month,
    shift_period,
)
from .projection import ProjectionEngine, elapsed_points, estimate_projected_total

__all__ = [
    "BucketedSeriesBuilder",
    "build_daily_series",
    "build_hourly_series",
    "builder_for",
    "facts_to_frame",
    "to_cumulative",
    "PeriodStatus",
    "bucket_count_for",
    "days_in_month",
    "is_iso_day",
    "is_iso_month",
    "period_key_for",
    "resolve_cutoff",
    "shift_day",
    "shift_month",
    "shift_period",
    "ProjectionEngine",
    "elapsed_points",
    "estimate_projected_total",
]
