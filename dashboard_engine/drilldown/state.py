"""
Category Drill-Down State

Three-level narrowing of the category dimension:

    category  --select v-->  subcategory (category=v)
    subcategory --select v--> final (subcategory=v)
    final --select--> final (terminal, no-op)

Breadcrumb navigation targets the clicked level directly rather than
popping one level. The state only carries the filter context; every
transition is followed by a re-fetch done by the data collaborator using
query_params().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger(__name__)


class DrillLevel(str, Enum):
    """Depth of the category drill-down"""
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    FINAL = "final"


@dataclass(frozen=True)
class Breadcrumb:
    """One breadcrumb entry; clicking it navigates to `level`"""
    label: str
    level: DrillLevel
    clickable: bool


class DrillState(BaseModel):
    """
    Immutable drill-down filter context.

    Transitions return new states. Data reloads never reset the state;
    only reset() or a click on the root crumb does.
    """

    model_config = ConfigDict(frozen=True)

    level: DrillLevel = DrillLevel.CATEGORY
    category: str = ""
    subcategory: str = ""

    @classmethod
    def initial(cls) -> "DrillState":
        return cls()

    @property
    def is_terminal(self) -> bool:
        return self.level is DrillLevel.FINAL

    def drill(self, value: str) -> "DrillState":
        """Select a value at the current level and move one level deeper"""
        selected = str(value or "").strip()
        if not selected or self.is_terminal:
            return self

        if self.level is DrillLevel.CATEGORY:
            next_state = DrillState(level=DrillLevel.SUBCATEGORY, category=selected, subcategory="")
        else:
            next_state = DrillState(level=DrillLevel.FINAL, category=self.category, subcategory=selected)

        logger.debug("Category drill", from_level=self.level.value, to_level=next_state.level.value)
        return next_state

    def reset(self) -> "DrillState":
        return DrillState.initial()

    def navigate_to(self, level: Union[DrillLevel, str]) -> "DrillState":
        """
        Breadcrumb click.

        The root crumb resets. The category crumb returns to the subcategory
        listing of the current category with the subcategory cleared. The
        leaf crumb is not navigable.
        """
        level = DrillLevel(level)
        if level is DrillLevel.CATEGORY:
            return self.reset()
        if level is DrillLevel.SUBCATEGORY and self.level is not DrillLevel.CATEGORY and self.category:
            return DrillState(level=DrillLevel.SUBCATEGORY, category=self.category, subcategory="")
        return self

    def breadcrumbs(self, root_label: str) -> List[Breadcrumb]:
        crumbs = [Breadcrumb(label=root_label, level=DrillLevel.CATEGORY, clickable=True)]
        if self.level is not DrillLevel.CATEGORY and self.category:
            crumbs.append(Breadcrumb(label=self.category, level=DrillLevel.SUBCATEGORY, clickable=True))
        if self.level is DrillLevel.FINAL and self.subcategory:
            crumbs.append(Breadcrumb(label=self.subcategory, level=DrillLevel.FINAL, clickable=False))
        return crumbs

    def query_params(self) -> Dict[str, str]:
        """Filter context for re-fetching aggregates scoped to this state"""
        params = {"category_level": self.level.value}
        if self.category:
            params["drill_category"] = self.category
        if self.subcategory:
            params["drill_subcategory"] = self.subcategory
        return params
