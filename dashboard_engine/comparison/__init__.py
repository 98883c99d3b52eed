"""
Comparison Module
"""
from .baselines import (
    DAY_BASELINES,
    MONTH_BASELINES,
    SELECTED,
    Baseline,
    baseline_menu,
    baseline_period_key,
    get_baseline,
)
from .deltas import (
    DeltaTone,
    GrowthRow,
    KpiDelta,
    build_growth_rows,
    build_kpi_deltas,
    delta_tone,
    pct_change,
)
from .rows import ComparisonTable, build_comparison_rows

__all__ = [
    "DAY_BASELINES",
    "MONTH_BASELINES",
    "SELECTED",
    "Baseline",
    "baseline_menu",
    "baseline_period_key",
    "get_baseline",
    "DeltaTone",
    "GrowthRow",
    "KpiDelta",
    "build_growth_rows",
    "build_kpi_deltas",
    "delta_tone",
    "pct_change",
    "ComparisonTable",
    "build_comparison_rows",
]
