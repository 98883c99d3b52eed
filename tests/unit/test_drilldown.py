"""
Unit Tests - Category Drill-Down
"""
import pytest
from pydantic import ValidationError

from dashboard_engine.drilldown import DrillLevel, DrillState

ROOT = "Todas as Categorias"


class TestDrillState:
    """Tests for DrillState transitions"""

    def test_initial_state(self):
        """Test initial state is the category listing"""
        state = DrillState.initial()
        assert state.level == DrillLevel.CATEGORY
        assert state.category == ""
        assert state.subcategory == ""

    def test_full_scenario(self):
        """Test drill, breadcrumb navigation and reset"""
        state = DrillState.initial()

        state = state.drill("Eletrônicos")
        assert (state.level, state.category, state.subcategory) == (
            DrillLevel.SUBCATEGORY, "Eletrônicos", "",
        )

        state = state.drill("Acessórios")
        assert (state.level, state.category, state.subcategory) == (
            DrillLevel.FINAL, "Eletrônicos", "Acessórios",
        )

        back = state.navigate_to(DrillLevel.SUBCATEGORY)
        assert (back.level, back.category, back.subcategory) == (
            DrillLevel.SUBCATEGORY, "Eletrônicos", "",
        )

        assert state.reset() == DrillState.initial()
        assert back.reset() == DrillState.initial()

    def test_terminal_drill_is_noop(self):
        """Test selecting at the final level changes nothing"""
        state = DrillState.initial().drill("Eletrônicos").drill("Acessórios")
        assert state.is_terminal
        assert state.drill("Cabos") == state

    def test_blank_selection_is_noop(self):
        """Test blank values do not drill"""
        state = DrillState.initial()
        assert state.drill("   ") == state
        assert state.drill(None) == state

    def test_selection_trimmed(self):
        """Test selected labels are trimmed"""
        assert DrillState.initial().drill("  Móveis ").category == "Móveis"

    def test_root_crumb_resets(self):
        """Test root navigation from any level"""
        state = DrillState.initial().drill("Eletrônicos").drill("Acessórios")
        assert state.navigate_to(DrillLevel.CATEGORY) == DrillState.initial()

    def test_navigate_with_level_name(self):
        """Test breadcrumb levels given as plain strings"""
        state = DrillState.initial().drill("Eletrônicos").drill("Acessórios")

        back = state.navigate_to("subcategory")
        assert (back.level, back.category, back.subcategory) == (
            DrillLevel.SUBCATEGORY, "Eletrônicos", "",
        )
        assert state.navigate_to("category") == DrillState.initial()

    def test_category_crumb_at_root_is_noop(self):
        """Test subcategory navigation without a category"""
        state = DrillState.initial()
        assert state.navigate_to(DrillLevel.SUBCATEGORY) == state

    def test_leaf_crumb_is_noop(self):
        """Test the final crumb is not navigable"""
        state = DrillState.initial().drill("Eletrônicos").drill("Acessórios")
        assert state.navigate_to(DrillLevel.FINAL) == state

    def test_immutable(self):
        """Test states cannot be mutated in place"""
        state = DrillState.initial()
        with pytest.raises(ValidationError):
            state.category = "Eletrônicos"


class TestBreadcrumbs:
    """Tests for breadcrumbs and query params"""

    def test_root_only(self):
        """Test breadcrumbs at the root"""
        crumbs = DrillState.initial().breadcrumbs(ROOT)
        assert [c.label for c in crumbs] == [ROOT]
        assert crumbs[0].clickable

    def test_final_level(self):
        """Test breadcrumbs at the final level"""
        crumbs = DrillState.initial().drill("Eletrônicos").drill("Acessórios").breadcrumbs(ROOT)

        assert [c.label for c in crumbs] == [ROOT, "Eletrônicos", "Acessórios"]
        assert [c.level for c in crumbs] == [DrillLevel.CATEGORY, DrillLevel.SUBCATEGORY, DrillLevel.FINAL]
        assert [c.clickable for c in crumbs] == [True, True, False]

    def test_query_params(self):
        """Test filter context for re-fetching"""
        assert DrillState.initial().query_params() == {"category_level": "category"}
        assert DrillState.initial().drill("Eletrônicos").drill("Acessórios").query_params() == {
            "category_level": "final",
            "drill_category": "Eletrônicos",
            "drill_subcategory": "Acessórios",
        }
