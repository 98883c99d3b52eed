"""
Analytics Views Module

Assembles live-day and month view-models from fetched snapshots.
"""
from .dashboards import PeriodView, build_period_view
from .guard import LatestRequestGuard, RequestTicket
from .snapshots import PeriodSnapshot

__all__ = [
    "PeriodSnapshot",
    "PeriodView",
    "build_period_view",
    "LatestRequestGuard",
    "RequestTicket",
]
