"""
Baseline Menus

Fixed menus of historical periods a view compares against. The live-day
view compares with yesterday and the same weekday 1-4 weeks back; the
month view compares with 1, 2, 6 and 12 months back.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from dashboard_engine.models import Granularity
from dashboard_engine.series.periods import shift_period

SELECTED = "selected"


@dataclass(frozen=True)
class Baseline:
    """One entry of a baseline menu"""
    key: str
    label: str
    offset: int  # whole periods back from the selected period


DAY_BASELINES: Tuple[Baseline, ...] = (
    Baseline(key="d1", label="Ontem", offset=1),
    Baseline(key="d7", label="D-7", offset=7),
    Baseline(key="d14", label="D-14", offset=14),
    Baseline(key="d21", label="D-21", offset=21),
    Baseline(key="d28", label="D-28", offset=28),
)

MONTH_BASELINES: Tuple[Baseline, ...] = (
    Baseline(key="m1", label="M-1", offset=1),
    Baseline(key="m2", label="M-2", offset=2),
    Baseline(key="m6", label="M-6", offset=6),
    Baseline(key="m12", label="M-12", offset=12),
)


def baseline_menu(granularity: Granularity) -> Tuple[Baseline, ...]:
    return DAY_BASELINES if granularity is Granularity.HOUR else MONTH_BASELINES


def baselines_by_key(granularity: Granularity) -> Dict[str, Baseline]:
    return {b.key: b for b in baseline_menu(granularity)}


def get_baseline(granularity: Granularity, key: str) -> Baseline:
    """Look up a menu entry; unknown keys raise KeyError"""
    menu = baselines_by_key(granularity)
    if key not in menu:
        raise KeyError(f"Unknown {granularity.value} baseline '{key}', expected one of {list(menu)}")
    return menu[key]


def baseline_period_key(granularity: Granularity, baseline: Baseline, period_key: str) -> str:
    """Period key of a baseline relative to the selected period"""
    return shift_period(granularity, period_key, -baseline.offset)
