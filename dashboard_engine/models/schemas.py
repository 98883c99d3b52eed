"""
Engine Data Models

Inputs received from the data-fetching collaborator and the view-model
values handed to rendering:

Inputs:
- FactRow: one (period, bucket, value) fact
- DimensionAggregate: per-dimension totals for one period

Outputs:
- SeriesPoint / BucketedSeries: dense, zero-filled series over one period
- ComparisonRow: current period joined with a baseline period

Every model serializes with camelCase aliases (``model_dump(by_alias=True)``)
and accepts either spelling on input. Monetary and count inputs are
sanitized on construction: missing, unparsable, non-finite and negative
values become 0 so nothing downstream ever sees NaN or Infinity.
"""

import math
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Granularity(str, Enum):
    """Bucket granularity of a period"""
    HOUR = "hour"  # one calendar day split in hours 0..23
    DAY = "day"  # one calendar month split in days 1..N

    @property
    def first_bucket(self) -> int:
        return 0 if self is Granularity.HOUR else 1

    def label(self, bucket: int) -> str:
        """Render a bucket index as its axis label"""
        if self is Granularity.HOUR:
            return f"{bucket:02d}:00"
        return f"{bucket:02d}"


# =============================================================================
# SANITIZATION
# =============================================================================

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def sanitize_amount(value: Any) -> float:
    """Coerce a raw amount to a finite, non-negative float (0 otherwise)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def is_defined(value: Optional[float]) -> bool:
    """True when value is a real, finite number"""
    return value is not None and not isinstance(value, bool) and math.isfinite(value)


class EngineModel(BaseModel):
    """Base model: camelCase aliases, immutable instances"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# INPUTS
# =============================================================================

class FactRow(EngineModel):
    """
    A single (period, bucket, value) fact.

    period_key identifies a calendar day ("2026-10-19") for hourly buckets or
    a calendar month ("2026-10") for daily buckets. Rows with a missing or
    empty period key are kept but never match a period.
    """
    period_key: Optional[str] = None
    bucket: Optional[int] = None
    value: float = 0.0

    @field_validator("period_key", mode="before")
    @classmethod
    def normalize_period_key(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        key = str(v).strip()
        return key or None

    @field_validator("bucket", mode="before")
    @classmethod
    def normalize_bucket(cls, v: Any) -> Optional[int]:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int):
            bucket = v
        else:
            try:
                number = float(v)
            except (TypeError, ValueError):
                return None
            if not math.isfinite(number) or number != int(number):
                return None
            bucket = int(number)
        # Buckets outside the Int64 column range can never match a period
        if not INT64_MIN <= bucket <= INT64_MAX:
            return None
        return bucket

    @field_validator("value", mode="before")
    @classmethod
    def sanitize_value(cls, v: Any) -> float:
        return sanitize_amount(v)


class DimensionAggregate(EngineModel):
    """
    Totals of one dimension value (marketplace, state, category, SKU) for
    one period.

    avg_ticket is derived as revenue / orders_count when not supplied.
    """
    id: str
    revenue: float = 0.0
    orders_count: int = 0
    avg_ticket: Optional[float] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("revenue", mode="before")
    @classmethod
    def sanitize_revenue(cls, v: Any) -> float:
        return sanitize_amount(v)

    @field_validator("orders_count", mode="before")
    @classmethod
    def sanitize_orders_count(cls, v: Any) -> int:
        return int(sanitize_amount(v))

    @field_validator("avg_ticket", mode="before")
    @classmethod
    def sanitize_avg_ticket(cls, v: Any) -> Optional[float]:
        return None if v is None else sanitize_amount(v)

    @model_validator(mode="after")
    def derive_avg_ticket(self) -> "DimensionAggregate":
        if self.avg_ticket is None:
            ticket = self.revenue / self.orders_count if self.orders_count > 0 else 0.0
            object.__setattr__(self, "avg_ticket", ticket)
        return self


# =============================================================================
# OUTPUTS
# =============================================================================

class SeriesPoint(EngineModel):
    """One labelled bucket of a series"""
    label: str
    value: float


class BucketedSeries(EngineModel):
    """
    Dense series over every bucket of one period.

    Length is fixed by the period alone; buckets without facts hold 0.
    """
    period_key: Optional[str] = None
    granularity: Granularity
    points: List[SeriesPoint] = Field(default_factory=list)

    @property
    def first_bucket(self) -> int:
        return self.granularity.first_bucket

    def __len__(self) -> int:
        return len(self.points)

    def buckets(self) -> List[int]:
        """Bucket indices covered by the series, in order"""
        return list(range(self.first_bucket, self.first_bucket + len(self.points)))

    def values(self) -> List[float]:
        return [p.value for p in self.points]

    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    def total(self) -> float:
        return float(sum(self.values()))

    def value_at(self, bucket: int) -> float:
        """Value of a bucket index; out-of-range buckets raise IndexError"""
        position = bucket - self.first_bucket
        if position < 0 or position >= len(self.points):
            last = self.first_bucket + len(self.points) - 1
            raise IndexError(f"Bucket {bucket} outside series range {self.first_bucket}..{last}")
        return self.points[position].value


class ComparisonRow(EngineModel):
    """
    Current-period aggregate joined with the same id in a baseline period.

    Deltas are signed ratios, or None when the baseline value is not
    positive ("no comparison available", never 0%).
    """
    id: str
    revenue: float
    prev_revenue: float
    revenue_delta: Optional[float] = None
    avg_ticket: float
    prev_avg_ticket: float
    ticket_delta: Optional[float] = None
