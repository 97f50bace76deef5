from decimal import Decimal as D

from profitlens.services import inventory
from profitlens.services.costing import cost_menu_items
from profitlens.services.snapshot import IngredientRow, MenuItemRow, RecipeRow

INGREDIENTS = (
    IngredientRow(id="flour", outlet_id="o1", name="Flour", unit="kg", price=D("2"), stock_level=D("10"), reorder_point=D("2")),
    IngredientRow(id="cheese", outlet_id="o1", name="Cheese", unit="kg", price=D("10"), stock_level=D("1"), reorder_point=D("2")),
)
ITEMS = tuple(
    MenuItemRow(id=f"m{n}", name=name, selling_price=D(price), target_margin=D("50"))
    for n, (name, price) in enumerate([("Pizza", "10"), ("Bread", "4"), ("Calzone", "12"), ("Focaccia", "6")], start=1)
)
RECIPES = (
    RecipeRow("m1", "flour", D("1")), RecipeRow("m1", "cheese", D("0.2")),
    RecipeRow("m2", "flour", D("1")),
    RecipeRow("m3", "flour", D("1")), RecipeRow("m3", "cheese", D("0.5")),
    RecipeRow("m4", "rosemary", D("0.1")), RecipeRow("m4", "cheese", D("2")),
)
COSTED = cost_menu_items(ITEMS, RECIPES, INGREDIENTS)


def test_consumption_sums_across_items():
    used = inventory.consumption({"m1": 3, "m2": 2, "m3": 0}, COSTED, {"flour", "cheese"})
    assert used == {"flour": D("5"), "cheese": D("0.6")}


def test_consumption_skips_ingredients_outside_the_outlet():
    assert inventory.consumption({"m4": 1}, COSTED, {"flour", "cheese"}) == {"cheese": D("2")}


def test_stock_check_warns_on_aggregate_need():
    # 3 pizzas need 0.6 cheese, 1 calzone 0.5: together more than the 1 kg in stock
    warnings = inventory.check_stock_availability({"m1": 3, "m3": 1}, COSTED, INGREDIENTS)
    assert set(warnings) == {"m1", "m3"}
    assert warnings["m1"] == "Stock of Cheese may not cover these sales."
    assert inventory.check_stock_availability({"m1": 1}, COSTED, INGREDIENTS) == {}


def test_stock_check_ignores_unsold_and_unknown_items():
    assert inventory.check_stock_availability({"m3": 0, "m2": -4, "nope": 9}, COSTED, INGREDIENTS) == {}


def test_stock_check_stops_at_an_ingredient_it_cannot_name():
    # rosemary is not stocked here and comes first, so nothing is reported
    assert inventory.check_stock_availability({"m4": 1}, COSTED, INGREDIENTS) == {}


def test_clamp_never_goes_negative():
    assert inventory.clamp(D("-0.5")) == 0
    assert inventory.clamp(D("1.25")) == D("1.25")
