"""
View Input Snapshots

An immutable snapshot of everything one analytics view needs, as delivered
by the data-fetching collaborator for one filter context. Views are
recomputed from a new snapshot whenever the context changes.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dashboard_engine.comparison import SELECTED
from dashboard_engine.drilldown import DrillState
from dashboard_engine.models import DimensionAggregate, FactRow, Granularity, sanitize_amount


class PeriodSnapshot(BaseModel):
    """
    Inputs of a live-day (hour buckets) or month (day buckets) view.

    facts hold rows for the selected period and for any baseline periods.
    dimensions maps a dimension name ("marketplace", "state", "category",
    "product") to aggregate lists keyed by "selected" or a baseline key
    ("d7", "m1", ...). kpis uses the same period keys.
    """

    model_config = ConfigDict(frozen=True)

    granularity: Granularity
    period_key: str
    is_live: bool = False
    cutoff_bucket: Optional[int] = None
    projected_total: float = 0.0
    facts: List[FactRow] = Field(default_factory=list)
    dimensions: Dict[str, Dict[str, List[DimensionAggregate]]] = Field(default_factory=dict)
    kpis: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    drill: DrillState = Field(default_factory=DrillState)

    @field_validator("projected_total", mode="before")
    @classmethod
    def sanitize_projected_total(cls, v) -> float:
        return sanitize_amount(v)

    @model_validator(mode="after")
    def require_cutoff_when_live(self) -> "PeriodSnapshot":
        if self.is_live and self.cutoff_bucket is None:
            raise ValueError("A live period needs cutoff_bucket (current hour or day)")
        return self

    def aggregates(self, dimension: str, period: str = SELECTED) -> List[DimensionAggregate]:
        return list(self.dimensions.get(dimension, {}).get(period, []))
