"""
Period Helpers

Calendar arithmetic on period keys:
- "YYYY-MM-DD" keys identify a day, bucketed by hour (0..23)
- "YYYY-MM" keys identify a month, bucketed by day-of-month (1..N)

Invalid keys never raise: shifts return "" and day counts fall back to 30,
which is what the dashboard renders while the month input is being edited.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from dashboard_engine.models import Granularity

HOURS_PER_DAY = 24
FALLBACK_DAYS_IN_MONTH = 30

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_MONTH = re.compile(r"^\d{4}-\d{2}$")


@dataclass(frozen=True)
class PeriodStatus:
    """Whether a period is still in progress and the last elapsed bucket"""
    is_live: bool
    cutoff_bucket: int


def _parse_day(day_key: str) -> Optional[date]:
    key = str(day_key or "").strip()
    if not _ISO_DAY.match(key):
        return None
    try:
        return datetime.strptime(key, "%Y-%m-%d").date()
    except ValueError:
        return None


def _parse_month(month_key: str) -> Optional[tuple]:
    key = str(month_key or "").strip()
    if not _ISO_MONTH.match(key):
        return None
    year, month = (int(part) for part in key.split("-"))
    if month < 1 or month > 12 or year < 1:
        return None
    return year, month


def is_iso_day(value: str) -> bool:
    return _parse_day(value) is not None


def is_iso_month(value: str) -> bool:
    return _parse_month(value) is not None


def days_in_month(month_key: str) -> int:
    """Number of days of a "YYYY-MM" month (30 when the key is invalid)"""
    parsed = _parse_month(month_key)
    if parsed is None:
        return FALLBACK_DAYS_IN_MONTH
    return calendar.monthrange(*parsed)[1]


def shift_month(month_key: str, delta_months: int) -> str:
    """Move a "YYYY-MM" key by delta_months; "" for invalid keys"""
    parsed = _parse_month(month_key)
    if parsed is None:
        return ""
    year, month = parsed
    index = year * 12 + (month - 1) + delta_months
    if index < 12:
        return ""
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def shift_day(day_key: str, delta_days: int) -> str:
    """Move a "YYYY-MM-DD" key by delta_days; "" for invalid keys"""
    parsed = _parse_day(day_key)
    if parsed is None:
        return ""
    try:
        return (parsed + timedelta(days=delta_days)).isoformat()
    except OverflowError:
        return ""


def shift_period(granularity: Granularity, period_key: str, delta: int) -> str:
    """Shift a period key by delta whole periods of its own kind"""
    if granularity is Granularity.HOUR:
        return shift_day(period_key, delta)
    return shift_month(period_key, delta)


def bucket_count_for(granularity: Granularity, period_key: str) -> int:
    """Bucket cardinality of a period: 24 hours, or the days in the month"""
    if granularity is Granularity.HOUR:
        return HOURS_PER_DAY
    return days_in_month(period_key)


def period_key_for(granularity: Granularity, moment: Union[date, datetime]) -> str:
    """Key of the period containing moment"""
    if granularity is Granularity.HOUR:
        return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
    return f"{moment.year:04d}-{moment.month:02d}"


def resolve_cutoff(
    granularity: Granularity,
    period_key: str,
    now: Optional[datetime] = None,
) -> PeriodStatus:
    """
    Resolve whether period_key is live at `now` and its last elapsed bucket.

    Live periods report the current hour (day view) or the current
    day-of-month (month view). Completed periods report their last bucket,
    periods in the future report first_bucket - 1 (nothing elapsed).
    """
    now = now or datetime.now()
    first = granularity.first_bucket
    last = first + bucket_count_for(granularity, period_key) - 1

    if granularity is Granularity.HOUR:
        if not is_iso_day(period_key):
            return PeriodStatus(is_live=False, cutoff_bucket=first - 1)
        current = now.hour
    else:
        if not is_iso_month(period_key):
            return PeriodStatus(is_live=False, cutoff_bucket=first - 1)
        current = now.day

    now_key = period_key_for(granularity, now)
    if period_key == now_key:
        return PeriodStatus(is_live=True, cutoff_bucket=current)
    if period_key < now_key:
        return PeriodStatus(is_live=False, cutoff_bucket=last)
    return PeriodStatus(is_live=False, cutoff_bucket=first - 1)
