"""
Period View Assembly

Builds the complete view-model of an analytics view from one snapshot. The
live-day and month dashboards are the same pipeline, parameterized by
granularity:

1. Dense series for the selected period and every baseline of the menu,
   all on the selected period's bucket axis
2. Projection of the selected period when it is still live
3. Growth of the elapsed span against each baseline
4. KPI card deltas against the displayed baseline
5. One comparison table per dimension, against every baseline
6. Category breadcrumbs of the drill state
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

import structlog

from dashboard_engine.comparison import (
    SELECTED,
    ComparisonTable,
    GrowthRow,
    KpiDelta,
    baseline_menu,
    baseline_period_key,
    build_growth_rows,
    build_kpi_deltas,
    get_baseline,
)
from dashboard_engine.config import get_settings
from dashboard_engine.drilldown import Breadcrumb, DrillState
from dashboard_engine.models import BucketedSeries, ComparisonRow, Granularity, SeriesPoint
from dashboard_engine.series import (
    ProjectionEngine,
    bucket_count_for,
    builder_for,
    elapsed_points,
    facts_to_frame,
)
from dashboard_engine.tables import SortState, sort_rows
from .snapshots import PeriodSnapshot

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PeriodView:
    """
    View-model of one analytics view.

    Switching the displayed baseline or a table's sort never recomputes
    series or comparison rows.
    """
    granularity: Granularity
    period_key: str
    is_live: bool
    cutoff_bucket: int
    baseline_key: str
    actual: BucketedSeries
    elapsed: List[SeriesPoint]
    projection: Optional[BucketedSeries]
    baseline_series: Dict[str, BucketedSeries]
    growth: List[GrowthRow]
    kpis: List[KpiDelta]
    tables: Dict[str, ComparisonTable]
    drill: DrillState
    breadcrumbs: List[Breadcrumb]
    sort_states: Dict[str, SortState] = field(default_factory=dict)
    kpi_values: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def compare_series(self) -> BucketedSeries:
        """Series of the displayed baseline"""
        return self.baseline_series[self.baseline_key]

    def sort_state(self, dimension: str) -> SortState:
        return self.sort_states.get(dimension, SortState())

    def table(
        self,
        dimension: str,
        baseline: Optional[str] = None,
        sort: Optional[SortState] = None,
    ) -> List[ComparisonRow]:
        """Sorted comparison rows of a dimension (displayed baseline by default)"""
        if dimension not in self.tables:
            raise KeyError(f"No table for dimension '{dimension}', available: {list(self.tables)}")
        rows = self.tables[dimension].rows(baseline or self.baseline_key)
        return sort_rows(rows, sort or self.sort_state(dimension))

    def with_baseline(self, baseline_key: str) -> "PeriodView":
        """Same view displayed against another baseline of the menu"""
        get_baseline(self.granularity, baseline_key)
        return replace(
            self,
            baseline_key=baseline_key,
            kpis=build_kpi_deltas(self.kpi_values.get(SELECTED, {}), self.kpi_values.get(baseline_key)),
        )

    def with_sort(self, dimension: str, key: str) -> "PeriodView":
        """Header click on a dimension table"""
        states = dict(self.sort_states)
        states[dimension] = self.sort_state(dimension).toggled(key)
        return replace(self, sort_states=states)


def _elapsed_total(series: BucketedSeries, cutoff_bucket: int) -> float:
    return float(sum(point.value for point in elapsed_points(series, cutoff_bucket)))


def build_period_view(
    snapshot: PeriodSnapshot,
    baseline: Optional[str] = None,
    sort_states: Optional[Mapping[str, SortState]] = None,
) -> PeriodView:
    """
    Build the view-model of a live-day or month view.

    Args:
        snapshot: Inputs for the current filter context
        baseline: Displayed baseline key; defaults to the configured one
        sort_states: Sort state per dimension table

    Returns:
        PeriodView ready for rendering
    """
    settings = get_settings()
    granularity = snapshot.granularity
    is_hourly = granularity is Granularity.HOUR

    baseline_key = baseline or (settings.engine.day_baseline if is_hourly else settings.engine.month_baseline)
    get_baseline(granularity, baseline_key)
    menu = baseline_menu(granularity)

    bucket_count = bucket_count_for(granularity, snapshot.period_key)
    first = granularity.first_bucket
    cutoff = snapshot.cutoff_bucket if snapshot.is_live else first + bucket_count - 1

    builder = builder_for(granularity)
    frame = facts_to_frame(snapshot.facts)
    actual = builder.build(frame, snapshot.period_key, bucket_count)
    baseline_series = {
        b.key: builder.build(frame, baseline_period_key(granularity, b, snapshot.period_key), bucket_count)
        for b in menu
    }

    projection = None
    if snapshot.is_live:
        reference_key = (
            settings.engine.day_projection_reference if is_hourly
            else settings.engine.month_projection_reference
        )
        projection = ProjectionEngine().project(
            actual,
            baseline_series[get_baseline(granularity, reference_key).key],
            snapshot.projected_total,
            cutoff,
        )

    growth = build_growth_rows(
        _elapsed_total(actual, cutoff),
        {key: _elapsed_total(series, cutoff) for key, series in baseline_series.items()},
        menu,
        snapshot.period_key,
        granularity,
    )

    tables = {
        dimension: ComparisonTable.build(
            periods.get(SELECTED, []),
            {b.key: periods.get(b.key, []) for b in menu},
        )
        for dimension, periods in snapshot.dimensions.items()
    }

    kpi_values = {period: dict(values) for period, values in snapshot.kpis.items()}

    logger.info(
        "Period view built",
        granularity=granularity.value,
        period_key=snapshot.period_key,
        is_live=snapshot.is_live,
        baseline=baseline_key,
        dimensions=list(tables),
    )

    return PeriodView(
        granularity=granularity,
        period_key=snapshot.period_key,
        is_live=snapshot.is_live,
        cutoff_bucket=cutoff,
        baseline_key=baseline_key,
        actual=actual,
        elapsed=elapsed_points(actual, cutoff),
        projection=projection,
        baseline_series=baseline_series,
        growth=growth,
        kpis=build_kpi_deltas(kpi_values.get(SELECTED, {}), kpi_values.get(baseline_key)),
        tables=tables,
        drill=snapshot.drill,
        breadcrumbs=snapshot.drill.breadcrumbs(settings.engine.drill_root_label),
        sort_states=dict(sort_states or {}),
        kpi_values=kpi_values,
    )
