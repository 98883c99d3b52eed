"""
Category Drill-Down Module
"""
from .state import Breadcrumb, DrillLevel, DrillState

__all__ = ["Breadcrumb", "DrillLevel", "DrillState"]
