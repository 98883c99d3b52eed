"""
Null-Safe Deltas

Relative change between a current value and a baseline. A baseline that is
missing, zero or negative yields None ("no comparison available"), which is
a different statement than a 0.0 change and must be rendered differently.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Sequence

from dashboard_engine.models import Granularity, is_defined
from .baselines import Baseline, baseline_period_key


class DeltaTone(str, Enum):
    """Presentation tone of a delta"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    UNAVAILABLE = "unavailable"  # no baseline: neutral placeholder, never "0%"


def _as_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def pct_change(current: Optional[float], baseline: Optional[float]) -> Optional[float]:
    """
    Signed relative change (current - baseline) / baseline.

    Returns None when the baseline is missing, non-finite or <= 0. The
    ratio is not multiplied by 100: pct_change(150, 100) == 0.5.
    """
    base = _as_number(baseline)
    if base is None or base <= 0:
        return None
    cur = _as_number(current) or 0.0
    return (cur - base) / base


def delta_tone(delta: Optional[float]) -> DeltaTone:
    if not is_defined(delta):
        return DeltaTone.UNAVAILABLE
    if delta > 0:
        return DeltaTone.UP
    if delta < 0:
        return DeltaTone.DOWN
    return DeltaTone.FLAT


@dataclass(frozen=True)
class KpiDelta:
    """A KPI card value with its comparison"""
    name: str
    current: float
    previous: Optional[float]
    delta: Optional[float]

    @property
    def tone(self) -> DeltaTone:
        return delta_tone(self.delta)


@dataclass(frozen=True)
class GrowthRow:
    """Growth of the selected period against one baseline of the menu"""
    key: str
    label: str
    delta: Optional[float]
    compare_total: float
    compare_period_key: str

    @property
    def tone(self) -> DeltaTone:
        return delta_tone(self.delta)


def build_kpi_deltas(
    current: Mapping[str, float],
    previous: Optional[Mapping[str, float]],
) -> List[KpiDelta]:
    """One KpiDelta per KPI of the current period, in its insertion order"""
    previous = previous or {}
    deltas = []
    for name, value in current.items():
        prev = _as_number(previous.get(name))
        deltas.append(KpiDelta(
            name=name,
            current=_as_number(value) or 0.0,
            previous=prev,
            delta=pct_change(value, prev),
        ))
    return deltas


def build_growth_rows(
    current_total: float,
    baseline_totals: Mapping[str, float],
    menu: Sequence[Baseline],
    period_key: str,
    granularity: Granularity = Granularity.DAY,
) -> List[GrowthRow]:
    """
    Growth of current_total against every baseline of a menu.

    Baselines absent from baseline_totals compare against 0 and so report
    no delta.
    """
    rows = []
    for baseline in menu:
        compare_total = _as_number(baseline_totals.get(baseline.key)) or 0.0
        rows.append(GrowthRow(
            key=baseline.key,
            label=baseline.label,
            delta=pct_change(current_total, compare_total),
            compare_total=compare_total,
            compare_period_key=baseline_period_key(granularity, baseline, period_key) if period_key else "",
        ))
    return rows
