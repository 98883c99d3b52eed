"""
Unit Tests - View Assembly
"""
import pytest
from pydantic import ValidationError

from dashboard_engine.comparison import DeltaTone
from dashboard_engine.drilldown import DrillState
from dashboard_engine.models import FactRow, Granularity
from dashboard_engine.tables import SortDirection, SortState
from dashboard_engine.views import LatestRequestGuard, PeriodSnapshot, build_period_view


@pytest.fixture
def live_day_snapshot(sample_hourly_facts, sample_marketplaces, sample_marketplaces_previous):
    """Live day at 10h with last week's curve as reference"""
    return PeriodSnapshot(
        granularity=Granularity.HOUR,
        period_key="2024-03-15",
        is_live=True,
        cutoff_bucket=10,
        projected_total=2000.0,
        facts=sample_hourly_facts,
        dimensions={
            "marketplace": {
                "selected": sample_marketplaces,
                "d7": sample_marketplaces_previous,
            },
        },
        kpis={
            "selected": {"revenue": 200.0, "orders": 4},
            "d7": {"revenue": 100.0, "orders": 4},
            "d1": {"revenue": 400.0, "orders": 0},
        },
        drill=DrillState.initial().drill("Eletrônicos"),
    )


@pytest.fixture
def past_month_snapshot():
    """Completed month with one month-back baseline"""
    return PeriodSnapshot(
        granularity=Granularity.DAY,
        period_key="2024-02",
        facts=[
            FactRow(period_key="2024-02", bucket=1, value=100.0),
            FactRow(period_key="2024-02", bucket=29, value=50.0),
            FactRow(period_key="2024-01", bucket=1, value=75.0),
            FactRow(period_key="2024-01", bucket=31, value=25.0),
        ],
    )


class TestBuildPeriodView:
    """Tests for build_period_view"""

    def test_live_day_series(self, live_day_snapshot):
        """Test actual and elapsed series"""
        view = build_period_view(live_day_snapshot)

        assert len(view.actual) == 24
        assert view.cutoff_bucket == 10
        assert [p.label for p in view.elapsed][-1] == "10:00"
        assert view.actual.total() == 200.0

    def test_live_day_projection(self, live_day_snapshot):
        """Test projection shaped by the same weekday last week"""
        view = build_period_view(live_day_snapshot)

        # reference day sums to 1000, target 2000
        assert view.projection.value_at(9) == 120.0
        assert view.projection.value_at(10) == 80.0
        assert view.projection.value_at(12) == pytest.approx(600.0)
        assert view.projection.value_at(20) == pytest.approx(1200.0)

    def test_baseline_series_on_selected_axis(self, live_day_snapshot):
        """Test every baseline of the menu has a series"""
        view = build_period_view(live_day_snapshot)

        assert list(view.baseline_series) == ["d1", "d7", "d14", "d21", "d28"]
        assert view.compare_series.period_key == "2024-03-08"
        assert view.baseline_series["d1"].total() == 0.0

    def test_growth_over_elapsed_span(self, live_day_snapshot):
        """Test growth compares the same elapsed hours"""
        view = build_period_view(live_day_snapshot)
        growth = {row.key: row for row in view.growth}

        # last week up to 10h: only the 100 at 9h
        assert growth["d7"].delta == pytest.approx(1.0)
        assert growth["d7"].compare_period_key == "2024-03-08"
        assert growth["d1"].delta is None
        assert growth["d1"].tone == DeltaTone.UNAVAILABLE

    def test_kpis_follow_displayed_baseline(self, live_day_snapshot):
        """Test KPI deltas switch with the baseline"""
        view = build_period_view(live_day_snapshot)
        assert view.baseline_key == "d7"
        assert view.kpis[0].delta == pytest.approx(1.0)

        yesterday = view.with_baseline("d1")
        assert yesterday.baseline_key == "d1"
        assert yesterday.kpis[0].delta == pytest.approx(-0.5)
        assert yesterday.kpis[1].delta is None
        assert yesterday.actual is view.actual

    def test_unknown_baseline_raises(self, live_day_snapshot):
        """Test baseline keys outside the menu"""
        with pytest.raises(KeyError):
            build_period_view(live_day_snapshot, baseline="m1")
        with pytest.raises(KeyError):
            build_period_view(live_day_snapshot).with_baseline("m1")

    def test_tables_sorted(self, live_day_snapshot):
        """Test dimension tables sorted by revenue descending"""
        view = build_period_view(live_day_snapshot)

        rows = view.table("marketplace")
        assert [r.id for r in rows] == ["Mercado Livre", "Shopee", "Web"]
        assert rows[0].revenue_delta == 0.5

    def test_tables_for_every_baseline(self, live_day_snapshot):
        """Test baselines without aggregates give rows without deltas"""
        view = build_period_view(live_day_snapshot)

        rows = view.table("marketplace", baseline="d28")
        assert len(rows) == 3
        assert all(r.revenue_delta is None for r in rows)

    def test_table_sort_toggle(self, live_day_snapshot):
        """Test header click flips the table order"""
        view = build_period_view(live_day_snapshot).with_sort("marketplace", "revenue")

        assert view.sort_state("marketplace").direction == SortDirection.ASC
        assert [r.id for r in view.table("marketplace")] == ["Web", "Shopee", "Mercado Livre"]

    def test_initial_sort_states(self, live_day_snapshot):
        """Test sort states passed in are used"""
        view = build_period_view(live_day_snapshot, sort_states={"marketplace": SortState(key="id", direction=SortDirection.ASC)})
        assert [r.id for r in view.table("marketplace")] == ["Mercado Livre", "Shopee", "Web"]

    def test_unknown_dimension(self, live_day_snapshot):
        """Test missing dimension tables raise"""
        with pytest.raises(KeyError):
            build_period_view(live_day_snapshot).table("state")

    def test_breadcrumbs(self, live_day_snapshot):
        """Test breadcrumbs use the configured root label"""
        view = build_period_view(live_day_snapshot)
        assert [c.label for c in view.breadcrumbs] == ["Todas as Categorias", "Eletrônicos"]

    def test_past_month(self, past_month_snapshot):
        """Test completed periods are not projected"""
        view = build_period_view(past_month_snapshot)

        assert view.projection is None
        assert view.baseline_key == "m1"
        assert view.cutoff_bucket == 29
        assert len(view.actual) == 29
        assert len(view.compare_series) == 29
        # January's day 31 falls outside February's axis
        assert view.compare_series.total() == 75.0
        assert view.growth[0].delta == pytest.approx(1.0)
        assert view.tables == {}
        assert view.kpis == []


class TestPeriodSnapshot:
    """Tests for snapshot validation"""

    def test_live_requires_cutoff(self):
        """Test live periods need a cutoff"""
        with pytest.raises(ValidationError):
            PeriodSnapshot(granularity=Granularity.HOUR, period_key="2024-03-15", is_live=True)

    def test_projected_total_sanitized(self):
        """Test negative projected totals become 0"""
        snapshot = PeriodSnapshot(granularity=Granularity.DAY, period_key="2024-03", projected_total=-5)
        assert snapshot.projected_total == 0.0

    def test_aggregates_lookup(self, live_day_snapshot):
        """Test aggregate lookup with missing entries"""
        assert len(live_day_snapshot.aggregates("marketplace")) == 3
        assert live_day_snapshot.aggregates("marketplace", "d14") == []
        assert live_day_snapshot.aggregates("state") == []


class TestLatestRequestGuard:
    """Tests for LatestRequestGuard"""

    def test_latest_wins(self):
        """Test a stale result is discarded even if it resolves last"""
        guard = LatestRequestGuard()
        applied = []

        first = guard.issue({"period_key": "2024-02"})
        second = guard.issue({"period_key": "2024-03"})

        assert guard.accept(second, "march", applied.append)
        assert not guard.accept(first, "february", applied.append)
        assert applied == ["march"]
        assert guard.discarded == 1

    def test_tickets_increase(self):
        """Test ticket sequence is monotonic"""
        guard = LatestRequestGuard()
        tickets = [guard.issue() for _ in range(3)]
        assert [t.sequence for t in tickets] == [1, 2, 3]
        assert guard.is_current(tickets[-1])
        assert not guard.is_current(tickets[0])
