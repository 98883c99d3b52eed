"""
Projection Engine

Projects an in-progress period to completion. Elapsed buckets always carry
the actual values; the remaining buckets follow the shape of a reference
period (a completed comparable day or month) scaled to a target total.

The target total is an opaque input computed upstream;
estimate_projected_total reproduces the growth heuristic the live-day view
uses when no upstream figure exists.
"""

import math
from typing import List, Sequence

import numpy as np
import structlog

from dashboard_engine.models import BucketedSeries, SeriesPoint, sanitize_amount

logger = structlog.get_logger(__name__)


def _finite_array(values: Sequence[float]) -> np.ndarray:
    """Float array with non-finite and negative entries replaced by 0"""
    array = np.asarray(values, dtype=float)
    return np.where(np.isfinite(array) & (array > 0), array, 0.0)


def _with_values(template: BucketedSeries, values: np.ndarray) -> BucketedSeries:
    values = np.where(np.isfinite(values), values, 0.0)
    return template.model_copy(update={
        "points": [
            SeriesPoint(label=point.label, value=float(value))
            for point, value in zip(template.points, values)
        ],
    })


class ProjectionEngine:
    """
    Forward projection of a live period.

    Example:
        engine = ProjectionEngine()
        projected = engine.project(today, same_day_last_week, 4800.0, cutoff_bucket=14)
    """

    @staticmethod
    def _check_aligned(actual: BucketedSeries, reference: BucketedSeries) -> None:
        if len(actual) != len(reference) or actual.granularity != reference.granularity:
            raise ValueError(
                f"Series are not aligned: {len(actual)} {actual.granularity.value} buckets "
                f"vs {len(reference)} {reference.granularity.value} buckets"
            )

    def scale_factor(self, reference_series: BucketedSeries, projected_total: float) -> float:
        """projected_total / sum(reference), or 0 when the reference is empty"""
        reference_sum = float(_finite_array(reference_series.values()).sum())
        total = sanitize_amount(projected_total)
        if reference_sum <= 0:
            return 0.0
        return total / reference_sum

    def project(
        self,
        actual_so_far: BucketedSeries,
        reference_series: BucketedSeries,
        projected_total: float,
        cutoff_bucket: int,
    ) -> BucketedSeries:
        """
        Continuous per-bucket projection.

        Args:
            actual_so_far: Live period series (zero-filled past the cutoff)
            reference_series: Completed comparable period on the same axis
            projected_total: Target total for the whole live period
            cutoff_bucket: Last elapsed bucket index

        Returns:
            Series equal to actual_so_far up to cutoff_bucket, then
            reference[bucket] * projected_total / sum(reference)
        """
        self._check_aligned(actual_so_far, reference_series)

        actual = _finite_array(actual_so_far.values())
        reference = _finite_array(reference_series.values())
        scale = self.scale_factor(reference_series, projected_total)
        if scale == 0.0:
            logger.debug("Projection tail is flat", reason="empty reference or zero target")

        buckets = np.asarray(actual_so_far.buckets())
        projected = np.where(buckets <= cutoff_bucket, actual, reference * scale)
        return _with_values(actual_so_far, projected)

    def project_cumulative(
        self,
        actual_so_far: BucketedSeries,
        reference_series: BucketedSeries,
        projected_total: float,
        cutoff_bucket: int,
    ) -> BucketedSeries:
        """
        Running-total projection used by the intraday chart.

        Takes per-bucket inputs and returns a cumulative series: running
        actual totals up to the cutoff, then the reference's running curve
        scaled to projected_total and shifted to continue from the actual
        running total at the cutoff (never below 0).
        """
        self._check_aligned(actual_so_far, reference_series)

        actual_cum = np.cumsum(_finite_array(actual_so_far.values()))
        scale = self.scale_factor(reference_series, projected_total)
        target_cum = np.cumsum(_finite_array(reference_series.values())) * scale

        buckets = np.asarray(actual_so_far.buckets())
        elapsed = buckets <= cutoff_bucket
        if elapsed.any():
            anchor = int(np.flatnonzero(elapsed)[-1])
            offset = actual_cum[anchor] - target_cum[anchor]
        else:
            offset = 0.0

        projected = np.where(elapsed, actual_cum, np.maximum(0.0, target_cum + offset))
        return _with_values(actual_so_far, projected)


def estimate_projected_total(
    reference_total: float,
    recent_actual: float,
    recent_reference: float,
) -> float:
    """
    Reference-period total grown by the most recent observed growth.

    Intraday: the same weekday last week, times yesterday's total over the
    total of the day one week before yesterday. Growth defaults to 1
    without a usable recent reference.
    """
    base = sanitize_amount(reference_total)
    recent = sanitize_amount(recent_actual)
    recent_base = sanitize_amount(recent_reference)
    growth = recent / recent_base if recent_base > 0 else 1.0
    # half up, like the dashboard figures
    return float(math.floor(base * growth + 0.5))


def elapsed_points(series: BucketedSeries, cutoff_bucket: int) -> List[SeriesPoint]:
    """Points of the buckets up to and including cutoff_bucket"""
    return [
        point for bucket, point in zip(series.buckets(), series.points)
        if bucket <= cutoff_bucket
    ]
