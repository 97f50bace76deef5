from datetime import date
from decimal import Decimal as D

from profitlens.services.guards import ingredient_deletable, outlet_deletable
from profitlens.services.scope import scope_to_outlet
from profitlens.services.snapshot import (
    CostRow, IngredientRow, MenuItemRow, OutletRow, RecipeRow, SaleRow, Snapshot, SupplierRow, WasteRow,
)


def ingredient(id, outlet):
    return IngredientRow(id=id, outlet_id=outlet, name=id, unit="kg", price=D("1"), stock_level=D("1"), reorder_point=D("0"))


SNAP = Snapshot(
    outlets=(OutletRow("o1", "Main"), OutletRow("o2", "Branch"), OutletRow("o3", "Empty")),
    ingredients=(ingredient("i1", "o1"), ingredient("i2", "o2"), ingredient("i3", "o1")),
    menu_items=(MenuItemRow(id="m1", name="Pizza", selling_price=D("10"), target_margin=D("60")),),
    recipes=(RecipeRow("m1", "i1", D("1")),),
    sales=(SaleRow("o1", "m1", date(2026, 1, 1), 1, D("10")), SaleRow("o2", "m1", date(2026, 1, 1), 2, D("20"))),
    costs=(CostRow("c1", "o2", "Rent", D("100"), "monthly"),),
    waste=(WasteRow("w1", "o1", "i1", date(2026, 1, 1), D("1"), "expired", D("1")),),
    suppliers=(SupplierRow("s1", "Acme"),),
)


def test_scope_keeps_one_outlet_and_the_global_catalog():
    v = scope_to_outlet(SNAP, "o1")
    assert [i.id for i in v.ingredients] == ["i1", "i3"]
    assert [s.outlet_id for s in v.sales] == ["o1"]
    assert v.costs == ()
    assert len(v.waste) == 1
    assert v.menu_items == SNAP.menu_items
    assert v.recipes == SNAP.recipes
    assert v.suppliers == SNAP.suppliers
    assert len(v.all_sales) == 2


def test_ingredient_in_a_recipe_cannot_be_deleted():
    verdict = ingredient_deletable(SNAP, "i1")
    assert verdict.success is False
    assert "recipe" in verdict.message
    assert ingredient_deletable(SNAP, "i3").success is True


class TestOutletGuard:
    def test_last_outlet(self):
        only = Snapshot(outlets=(OutletRow("o1", "Main"),))
        assert outlet_deletable(only, "o1", None).success is False

    def test_selected_outlet(self):
        verdict = outlet_deletable(SNAP, "o3", "o3")
        assert verdict.success is False
        assert "selected" in verdict.message

    def test_outlet_with_ingredients(self):
        assert outlet_deletable(SNAP, "o1", "o3").success is False

    def test_outlet_with_costs_and_sales(self):
        assert outlet_deletable(SNAP, "o2", "o1").success is False

    def test_empty_unselected_outlet(self):
        assert outlet_deletable(SNAP, "o3", "o1").success is True
