"""
Marketplace Dashboard Engine

Time-series aggregation, projection and comparison for the merchant
sales dashboard: live-day and month series, period-over-period deltas,
category drill-down, table sorting and map colouring.
"""

__version__ = "1.0.0"

from dashboard_engine.comparison import (
    ComparisonTable,
    DeltaTone,
    build_comparison_rows,
    pct_change,
)
from dashboard_engine.drilldown import DrillLevel, DrillState
from dashboard_engine.models import (
    BucketedSeries,
    ComparisonRow,
    DimensionAggregate,
    FactRow,
    Granularity,
    SeriesPoint,
)
from dashboard_engine.palette import ColorQuantizer
from dashboard_engine.series import BucketedSeriesBuilder, ProjectionEngine
from dashboard_engine.tables import SortDirection, SortState, sort_rows
from dashboard_engine.views import LatestRequestGuard, PeriodSnapshot, PeriodView, build_period_view

__all__ = [
    "__version__",
    "BucketedSeries",
    "BucketedSeriesBuilder",
    "ColorQuantizer",
    "ComparisonRow",
    "ComparisonTable",
    "DeltaTone",
    "DimensionAggregate",
    "DrillLevel",
    "DrillState",
    "FactRow",
    "Granularity",
    "LatestRequestGuard",
    "PeriodSnapshot",
    "PeriodView",
    "ProjectionEngine",
    "SeriesPoint",
    "SortDirection",
    "SortState",
    "build_comparison_rows",
    "build_period_view",
    "pct_change",
    "sort_rows",
]
