from datetime import date, timedelta
from decimal import Decimal as D

from profitlens.services import dashboard
from profitlens.services.costing import cost_menu_items
from profitlens.services.scope import scope_to_outlet
from profitlens.services.snapshot import (
    IngredientRow, MenuItemRow, OutletRow, RecipeRow, SaleRow, Snapshot, WasteRow,
)

TODAY = date(2026, 5, 20)

INGREDIENTS = (
    IngredientRow(id="flour", outlet_id="o1", name="Flour", unit="kg", price=D("2"), stock_level=D("10"), reorder_point=D("2")),
    IngredientRow(id="cheese", outlet_id="o1", name="Cheese", unit="kg", price=D("10"), stock_level=D("1"), reorder_point=D("2")),
)
ITEMS = tuple(
    MenuItemRow(id=f"m{n}", name=name, selling_price=D(price), target_margin=D("50"))
    for n, (name, price) in enumerate([("Pizza", "10"), ("Bread", "4"), ("Calzone", "12"), ("Water", "1")], start=1)
)
RECIPES = (
    RecipeRow("m1", "flour", D("1")), RecipeRow("m1", "cheese", D("0.2")),
    RecipeRow("m2", "flour", D("1")),
    RecipeRow("m3", "flour", D("1")), RecipeRow("m3", "cheese", D("0.5")),
)
COSTED = cost_menu_items(ITEMS, RECIPES, INGREDIENTS)


def sale(item, qty, days_ago=0):
    price = next(m.selling_price for m in ITEMS if m.id == item)
    return SaleRow("o1", item, TODAY - timedelta(days=days_ago), qty, price * qty)


def waste(id, reason, cost, days_ago=0, ingredient="flour"):
    return WasteRow(id, "o1", ingredient, TODAY - timedelta(days=days_ago), D("1"), reason, D(cost))


def test_dashboard_stats_over_the_window():
    snap = Snapshot(outlets=(OutletRow("o1", "Main"),), ingredients=INGREDIENTS, menu_items=ITEMS, recipes=RECIPES,
                    sales=(sale("m1", 3), sale("m2", 2, days_ago=6), sale("m1", 9, days_ago=8)))
    s = dashboard.dashboard_stats(scope_to_outlet(snap, "o1"), COSTED, 7, TODAY)
    assert s.total_revenue == D("38")
    assert s.total_items_sold == 5
    assert s.low_stock_count == 1
    assert s.average_margin == sum(m.actual_margin for m in COSTED) / 4


def test_inventory_overview():
    o = dashboard.inventory_overview(INGREDIENTS, [waste("w1", "expired", "3"), waste("w2", "expired", "7", days_ago=40)], TODAY)
    assert o.total_items == 2
    assert o.low_stock_count == 1
    assert o.total_stock_value == D("30")
    assert o.total_waste_cost_last_30_days == D("3")


def test_ingredients_with_waste_cost_defaults_to_zero():
    rows = dashboard.ingredients_with_waste_cost(INGREDIENTS, [waste("w1", "spoiled", "4")], TODAY)
    assert [(i.id, c) for i, c in rows] == [("flour", D("4")), ("cheese", 0)]


def test_waste_summary_lists_every_reason():
    summary = dashboard.waste_summary([waste("w1", "expired", "3"), waste("w2", "expired", "2"), waste("w3", "other", "1")])
    assert summary == {"expired": D("5"), "spoiled": 0, "damaged": 0, "overproduction": 0, "other": D("1")}


def test_rankings_take_top_three():
    r = dashboard.performance_rankings(COSTED, [sale("m1", 5), sale("m2", 8), sale("m3", 1), sale("m4", 2)])
    assert [i.id for i in r.best_sellers_by_unit] == ["m2", "m1", "m4"]
    assert [i.id for i in r.highest_revenue_items] == ["m1", "m2", "m3"]
    assert r.most_profitable_items[0].id == "m4"  # no recipe, 100% margin
    assert len(r.least_profitable_items) == 3
    assert r.least_profitable_items[0].metric <= r.least_profitable_items[-1].metric
