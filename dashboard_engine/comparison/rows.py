"""
Comparison Rows

Left join of a current-period aggregate list with a baseline-period list on
the dimension id (marketplace name, state code, category label, SKU). The
table is driven by the current period: ids that only exist in the baseline
are dropped, ids missing from the baseline compare against 0.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Union

import structlog

from dashboard_engine.models import ComparisonRow, DimensionAggregate
from .deltas import pct_change

logger = structlog.get_logger(__name__)

AggregateInput = Iterable[Union[DimensionAggregate, Mapping]]


def _aggregates(rows: Optional[AggregateInput]) -> List[DimensionAggregate]:
    return [
        row if isinstance(row, DimensionAggregate) else DimensionAggregate.model_validate(row)
        for row in (rows or [])
    ]


def build_comparison_rows(
    current: Optional[AggregateInput],
    baseline: Optional[AggregateInput],
) -> List[ComparisonRow]:
    """
    Merge current and baseline aggregates keyed by id.

    Returns exactly one row per current aggregate, in current order.
    Revenue and ticket deltas are computed independently.
    """
    previous_by_id: Dict[str, DimensionAggregate] = {row.id: row for row in _aggregates(baseline)}

    rows = []
    for row in _aggregates(current):
        previous = previous_by_id.get(row.id)
        prev_revenue = previous.revenue if previous is not None else 0.0
        prev_avg_ticket = previous.avg_ticket if previous is not None else 0.0
        rows.append(ComparisonRow(
            id=row.id,
            revenue=row.revenue,
            prev_revenue=prev_revenue,
            revenue_delta=pct_change(row.revenue, prev_revenue),
            avg_ticket=row.avg_ticket,
            prev_avg_ticket=prev_avg_ticket,
            ticket_delta=pct_change(row.avg_ticket, prev_avg_ticket),
        ))
    return rows


class ComparisonTable:
    """
    Comparison rows of one dimension against every baseline of a menu.

    Rows are computed once per baseline when the table is built; switching
    the displayed baseline is a lookup.

    Example:
        table = ComparisonTable.build(selected, {"m1": m1_rows, "m12": m12_rows})
        rows = table.rows("m12")
    """

    def __init__(self, rows_by_baseline: Dict[str, List[ComparisonRow]]):
        self._rows_by_baseline = rows_by_baseline

    @classmethod
    def build(
        cls,
        current: Optional[AggregateInput],
        baselines: Mapping[str, Optional[AggregateInput]],
    ) -> "ComparisonTable":
        current_rows = _aggregates(current)
        rows_by_baseline = {
            key: build_comparison_rows(current_rows, baseline_rows)
            for key, baseline_rows in baselines.items()
        }
        logger.debug(
            "Comparison table built",
            rows=len(current_rows),
            baselines=list(rows_by_baseline),
        )
        return cls(rows_by_baseline)

    @property
    def baseline_keys(self) -> List[str]:
        return list(self._rows_by_baseline)

    def rows(self, baseline_key: str) -> List[ComparisonRow]:
        """Rows against one baseline; unknown keys raise KeyError"""
        if baseline_key not in self._rows_by_baseline:
            raise KeyError(
                f"No comparison for baseline '{baseline_key}', available: {self.baseline_keys}"
            )
        return list(self._rows_by_baseline[baseline_key])
