"""
Unit Tests - Projection Engine
"""
import pytest

from dashboard_engine.models import FactRow, Granularity
from dashboard_engine.series import (
    ProjectionEngine,
    build_daily_series,
    build_hourly_series,
    elapsed_points,
    estimate_projected_total,
)

TODAY = "2024-03-15"
LAST_WEEK = "2024-03-08"


@pytest.fixture
def engine() -> ProjectionEngine:
    return ProjectionEngine()


@pytest.fixture
def flat_reference():
    """Reference day with 100 in every hour (sum 2400)"""
    return build_hourly_series(
        [FactRow(period_key=LAST_WEEK, bucket=h, value=100.0) for h in range(24)],
        LAST_WEEK,
    )


@pytest.fixture
def today_so_far():
    return build_hourly_series(
        [
            FactRow(period_key=TODAY, bucket=0, value=100.0),
            FactRow(period_key=TODAY, bucket=1, value=200.0),
        ],
        TODAY,
    )


class TestProject:
    """Tests for ProjectionEngine.project"""

    def test_end_to_end_intraday(self, engine, today_so_far, flat_reference):
        """Test actual up to the cutoff, reference scaled to the target after"""
        projected = engine.project(today_so_far, flat_reference, 4800.0, cutoff_bucket=1)

        values = projected.values()
        assert len(values) == 24
        assert values[:2] == [100.0, 200.0]
        assert values[2] == pytest.approx(200.0)
        assert values[23] == pytest.approx(200.0)

    def test_continuity_up_to_cutoff(self, engine, today_so_far, flat_reference):
        """Test projected equals actual for every elapsed bucket"""
        cutoff = 5
        projected = engine.project(today_so_far, flat_reference, 1234.0, cutoff)
        for bucket in range(cutoff + 1):
            assert projected.value_at(bucket) == today_so_far.value_at(bucket)

    def test_empty_reference_gives_flat_tail(self, engine, today_so_far):
        """Test zero reference sum projects 0 past the cutoff"""
        empty = build_hourly_series([], LAST_WEEK)
        projected = engine.project(today_so_far, empty, 4800.0, cutoff_bucket=1)
        assert projected.values()[2:] == [0.0] * 22
        assert projected.values()[:2] == [100.0, 200.0]

    def test_zero_target_gives_flat_tail(self, engine, today_so_far, flat_reference):
        """Test zero projected total projects 0 past the cutoff"""
        projected = engine.project(today_so_far, flat_reference, 0.0, cutoff_bucket=1)
        assert projected.total() == 300.0

    def test_cutoff_at_last_bucket_is_actual(self, engine, today_so_far, flat_reference):
        """Test a completed period projects to itself"""
        projected = engine.project(today_so_far, flat_reference, 4800.0, cutoff_bucket=23)
        assert projected.values() == today_so_far.values()

    def test_cutoff_before_first_bucket_is_reference_shape(self, engine, today_so_far, flat_reference):
        """Test nothing elapsed projects the whole reference curve"""
        projected = engine.project(today_so_far, flat_reference, 2400.0, cutoff_bucket=-1)
        assert projected.values() == flat_reference.values()

    def test_non_finite_target(self, engine, today_so_far, flat_reference):
        """Test non-finite target is treated as 0"""
        projected = engine.project(today_so_far, flat_reference, float("nan"), cutoff_bucket=1)
        assert projected.values()[2] == 0.0

    def test_month_projection(self, engine):
        """Test daily projection follows the same rules"""
        actual = build_daily_series(
            [FactRow(period_key="2024-03", bucket=d, value=50.0) for d in range(1, 11)],
            "2024-03",
        )
        reference = build_daily_series(
            [FactRow(period_key="2024-02", bucket=d, value=10.0) for d in range(1, 30)],
            "2024-02",
            bucket_count=31,
        )
        projected = engine.project(actual, reference, 3100.0, cutoff_bucket=10)

        assert projected.value_at(10) == 50.0
        # 29 reference days of 10 sum to 290
        assert projected.value_at(11) == pytest.approx(10.0 * 3100.0 / 290.0)
        assert projected.value_at(31) == 0.0

    def test_misaligned_series_raise(self, engine, today_so_far):
        """Test series of different lengths raise"""
        month = build_daily_series([], "2024-03")
        with pytest.raises(ValueError):
            engine.project(today_so_far, month, 100.0, 1)

    def test_scale_factor(self, engine, flat_reference):
        """Test scale factor of target over reference sum"""
        assert engine.scale_factor(flat_reference, 4800.0) == 2.0
        assert engine.scale_factor(build_hourly_series([], LAST_WEEK), 4800.0) == 0.0


class TestProjectCumulative:
    """Tests for the running-total projection"""

    def test_cumulative_continues_from_actual(self, engine, today_so_far, flat_reference):
        """Test cumulative tail starts from the actual running total"""
        projected = engine.project_cumulative(today_so_far, flat_reference, 4800.0, cutoff_bucket=1)
        values = projected.values()

        assert values[:2] == [100.0, 300.0]
        # target running total at hour 1 is 400, offset -100
        assert values[2] == pytest.approx(600.0 - 100.0)
        assert values[23] == pytest.approx(4800.0 - 100.0)

    def test_cumulative_never_negative(self, engine, flat_reference):
        """Test shifted curve is clamped at 0"""
        quiet_day = build_hourly_series([FactRow(period_key=TODAY, bucket=0, value=0.0)], TODAY)
        projected = engine.project_cumulative(quiet_day, flat_reference, 4800.0, cutoff_bucket=5)
        assert min(projected.values()) >= 0.0


class TestEstimateProjectedTotal:
    """Tests for the growth heuristic"""

    def test_grows_with_recent_trend(self):
        """Test reference total scaled by recent growth"""
        assert estimate_projected_total(1000.0, 1100.0, 1000.0) == 1100.0

    def test_without_recent_reference(self):
        """Test growth defaults to 1"""
        assert estimate_projected_total(1000.0, 500.0, 0.0) == 1000.0

    def test_rounds(self):
        """Test result is rounded to whole units"""
        assert estimate_projected_total(1000.0, 1.0, 3.0) == 333.0

    def test_rounds_half_up(self):
        """Test halves round up, not to even"""
        assert estimate_projected_total(2.5, 1.0, 1.0) == 3.0
        assert estimate_projected_total(4.5, 1.0, 1.0) == 5.0


class TestElapsedPoints:
    """Tests for elapsed_points"""

    def test_elapsed(self, today_so_far):
        """Test points up to and including the cutoff"""
        points = elapsed_points(today_so_far, 1)
        assert [p.label for p in points] == ["00:00", "01:00"]

    def test_nothing_elapsed(self, today_so_far):
        """Test cutoff before the first bucket"""
        assert elapsed_points(today_so_far, -1) == []

    def test_granularity(self, today_so_far):
        """Test series keep their granularity"""
        assert today_so_far.granularity == Granularity.HOUR
