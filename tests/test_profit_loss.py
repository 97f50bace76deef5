from datetime import date, timedelta
from decimal import Decimal as D

from profitlens.services.costing import cost_menu_items
from profitlens.services.profit_loss import calculate_profit_loss, daily_cost
from profitlens.services.snapshot import CostRow, IngredientRow, MenuItemRow, RecipeRow, SaleRow, WasteRow

TODAY = date(2026, 3, 15)

MENU = cost_menu_items(
    [MenuItemRow(id="m1", name="Pizza", selling_price=D("10"), target_margin=D("60"))],
    [RecipeRow("m1", "i1", D("2"))],
    [IngredientRow(id="i1", outlet_id="o1", name="Flour", unit="kg", price=D("2"),
                   stock_level=D("100"), reorder_point=D("1"))],
)


def sale(days_ago, qty, item="m1"):
    return SaleRow(outlet_id="o1", menu_item_id=item, date=TODAY - timedelta(days=days_ago),
                   quantity_sold=qty, total_revenue=D(10 * qty))


COSTS = [
    CostRow(id="c1", outlet_id="o1", name="Rent", amount=D("300"), interval="monthly"),
    CostRow(id="c2", outlet_id="o1", name="Gas", amount=D("5"), interval="daily"),
]


def test_daily_cost_normalises_monthly_to_thirty_days():
    assert daily_cost(COSTS[0]) == D("10")
    assert daily_cost(COSTS[1]) == D("5")


def test_statement():
    waste = [WasteRow(id="w1", outlet_id="o1", ingredient_id="i1", date=TODAY, quantity=D("1"),
                      reason="spoiled", cost=D("5"))]
    p = calculate_profit_loss(7, [sale(0, 6), sale(7, 4), sale(8, 50)], MENU, COSTS, waste, TODAY)

    assert p.period_days == 7
    assert p.total_revenue == D("100")
    assert p.total_cogs == D("40")
    assert p.gross_profit == D("60")
    assert p.total_operational_cost == D("105")
    assert p.total_waste_cost == D("5")
    assert p.net_profit == D("-50")
    assert p.gross_profit_margin == D("60")
    assert p.net_profit_margin == D("-50")


def test_margins_are_zero_without_revenue():
    p = calculate_profit_loss(30, [], MENU, COSTS, [], TODAY)
    assert p.total_revenue == 0
    assert p.gross_profit_margin == 0
    assert p.net_profit_margin == 0
    assert p.net_profit == -p.total_operational_cost


def test_sales_of_deleted_items_are_skipped():
    p = calculate_profit_loss(30, [sale(0, 1), sale(0, 5, item="deleted")], MENU, [], [], TODAY)
    assert p.total_revenue == D("10")
    assert p.total_cogs == D("4")
