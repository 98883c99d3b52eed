"""
Bucketed Series Builder

Turns flat (period_key, bucket, value) facts into a dense, zero-filled
series over every bucket of one period. One builder serves both the
intraday (hour buckets) and the month (day buckets) views; the granularity
only decides the first bucket index and the label format.

Duplicate facts for the same bucket are not summed: the last one wins.
Callers are expected to pre-aggregate per bucket.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import polars as pl
import structlog

from dashboard_engine.models import BucketedSeries, FactRow, Granularity, SeriesPoint
from .periods import HOURS_PER_DAY, days_in_month

logger = structlog.get_logger(__name__)

FACT_SCHEMA = {
    "period_key": pl.Utf8,
    "bucket": pl.Int64,
    "value": pl.Float64,
}

_COLUMN_ALIASES = {"periodKey": "period_key"}

FactInput = Union[pl.DataFrame, Iterable[Union[FactRow, Mapping]]]


def _sanitized(expr: pl.Expr) -> pl.Expr:
    """Non-finite, negative and null amounts become 0"""
    return pl.when(expr.is_finite() & (expr > 0)).then(expr).otherwise(0.0)


def _integral_bucket(expr: pl.Expr, dtype: pl.DataType) -> pl.Expr:
    """Buckets as Int64; fractional, non-finite and unparsable ones become null"""
    if dtype.is_integer():
        return expr.cast(pl.Int64, strict=False)
    as_float = expr.cast(pl.Float64, strict=False)
    return (
        pl.when(as_float.is_finite() & (as_float == as_float.floor()))
        .then(as_float)
        .otherwise(None)
        .cast(pl.Int64, strict=False)
    )


def facts_to_frame(rows: FactInput) -> pl.DataFrame:
    """
    Normalize fact input into a polars frame with FACT_SCHEMA columns.

    Accepts a DataFrame (snake_case or camelCase period column) or any
    iterable of FactRow / mappings. Row order is preserved.
    """
    if isinstance(rows, pl.DataFrame):
        frame = rows.rename({k: v for k, v in _COLUMN_ALIASES.items() if k in rows.columns})
        missing = [col for col in FACT_SCHEMA if col not in frame.columns]
        if missing:
            raise ValueError(f"Fact frame is missing columns: {missing}")

        return frame.select([
            pl.col("period_key").cast(pl.Utf8, strict=False).str.strip_chars(),
            _integral_bucket(pl.col("bucket"), frame.schema["bucket"]).alias("bucket"),
            _sanitized(pl.col("value").cast(pl.Float64, strict=False)).alias("value"),
        ])

    records = [
        (row if isinstance(row, FactRow) else FactRow.model_validate(row)).model_dump()
        for row in rows
    ]
    if not records:
        return pl.DataFrame(schema=FACT_SCHEMA)
    return pl.DataFrame(records, schema=FACT_SCHEMA)


class BucketedSeriesBuilder:
    """
    Dense series builder for one bucket granularity.

    Example:
        builder = BucketedSeriesBuilder(Granularity.HOUR)
        series = builder.build(facts, "2026-10-19", bucket_count=24)
    """

    def __init__(self, granularity: Granularity):
        self.granularity = granularity

    def build(
        self,
        rows: FactInput,
        period_key: Optional[str],
        bucket_count: int,
    ) -> BucketedSeries:
        """
        Build the series of one period.

        Args:
            rows: Facts for any number of periods
            period_key: Period to keep; facts of other periods are ignored
            bucket_count: Bucket cardinality of the period

        Returns:
            BucketedSeries with exactly bucket_count points
        """
        if bucket_count <= 0:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")

        frame = facts_to_frame(rows)
        first = self.granularity.first_bucket
        last = first + bucket_count - 1
        key = str(period_key or "").strip()

        values = np.zeros(bucket_count, dtype=float)
        if key:
            matching = frame.filter(
                (pl.col("period_key") == key)
                & pl.col("bucket").is_between(first, last)
            )
            for bucket, value in matching.select(["bucket", "value"]).iter_rows():
                values[bucket - first] = value

            duplicates = matching.height - matching["bucket"].n_unique()
            if duplicates:
                logger.debug(
                    "Duplicate facts collapsed, last write wins",
                    period_key=key,
                    duplicates=duplicates,
                )

        logger.debug(
            "Series built",
            period_key=key or None,
            granularity=self.granularity.value,
            bucket_count=bucket_count,
            input_rows=frame.height,
        )

        return BucketedSeries(
            period_key=key or None,
            granularity=self.granularity,
            points=[
                SeriesPoint(label=self.granularity.label(first + i), value=float(v))
                for i, v in enumerate(values)
            ],
        )

    def build_many(
        self,
        rows: FactInput,
        period_keys: Iterable[str],
        bucket_count: int,
    ) -> Dict[str, BucketedSeries]:
        """Build one series per period key over the same bucket axis"""
        frame = facts_to_frame(rows)
        return {key: self.build(frame, key, bucket_count) for key in period_keys}


HOURLY_BUILDER = BucketedSeriesBuilder(Granularity.HOUR)
DAILY_BUILDER = BucketedSeriesBuilder(Granularity.DAY)


def builder_for(granularity: Granularity) -> BucketedSeriesBuilder:
    return HOURLY_BUILDER if granularity is Granularity.HOUR else DAILY_BUILDER


def build_hourly_series(rows: FactInput, day_key: str) -> BucketedSeries:
    """24 hourly buckets of one "YYYY-MM-DD" day"""
    return HOURLY_BUILDER.build(rows, day_key, HOURS_PER_DAY)


def build_daily_series(
    rows: FactInput,
    month_key: str,
    bucket_count: Optional[int] = None,
) -> BucketedSeries:
    """Daily buckets of one "YYYY-MM" month (days in that month by default)"""
    return DAILY_BUILDER.build(rows, month_key, bucket_count or days_in_month(month_key))


def to_cumulative(series: BucketedSeries) -> BucketedSeries:
    """Running total of a series, same labels and length"""
    running: List[float] = np.cumsum(np.asarray(series.values(), dtype=float)).tolist()
    return series.model_copy(update={
        "points": [
            SeriesPoint(label=point.label, value=value)
            for point, value in zip(series.points, running)
        ],
    })
