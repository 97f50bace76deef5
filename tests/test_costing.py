from decimal import Decimal as D

from profitlens.services.costing import (
    MarginStatus, RecipeComponent, actual_margin, classify_margin, compute_cogs,
    cost_menu_items, menu_item_detail,
)
from profitlens.services.snapshot import IngredientRow, MenuItemRow, RecipeRow


def ing(id, price, stock="10", reorder="1", outlet="o1", previous=None):
    return IngredientRow(id=id, outlet_id=outlet, name=id.title(), unit="kg", price=D(price),
                         stock_level=D(stock), reorder_point=D(reorder),
                         previous_price=D(previous) if previous is not None else None)


def test_cogs_sums_price_times_quantity():
    ings = {"flour": ing("flour", "2.00"), "cheese": ing("cheese", "12.50")}
    recipe = [RecipeComponent("flour", D("0.3")), RecipeComponent("cheese", D("0.2"))]
    assert compute_cogs(recipe, ings) == D("3.100")


def test_missing_ingredient_costs_nothing():
    recipe = [RecipeComponent("gone", D("5")), RecipeComponent("flour", D("1"))]
    assert compute_cogs(recipe, {"flour": ing("flour", "2")}) == D("2")


def test_margin_is_zero_without_selling_price():
    assert actual_margin(D("0"), D("5")) == 0


def test_margin_percent():
    assert actual_margin(D("10"), D("4")) == D("60")


class TestClassification:
    def test_on_target_is_safe(self):
        assert classify_margin(D("70"), D("70")) is MarginStatus.SAFE

    def test_ten_points_under_is_warning(self):
        assert classify_margin(D("60"), D("70")) is MarginStatus.WARNING

    def test_just_past_ten_points_is_danger(self):
        assert classify_margin(D("60"), D("70.01")) is MarginStatus.DANGER

    def test_above_target_is_safe(self):
        assert classify_margin(D("80"), D("70")) is MarginStatus.SAFE


def test_cost_menu_items_joins_recipes():
    items = [
        MenuItemRow(id="m1", name="Pizza", selling_price=D("10"), target_margin=D("65")),
        MenuItemRow(id="m2", name="Water", selling_price=D("2"), target_margin=D("50")),
    ]
    recipes = [RecipeRow("m1", "flour", D("2"))]
    costed = {m.id: m for m in cost_menu_items(items, recipes, [ing("flour", "2")])}

    assert costed["m1"].cogs == D("4")
    assert costed["m1"].actual_margin == D("60")
    assert costed["m1"].margin_status is MarginStatus.WARNING
    assert costed["m2"].recipe == ()
    assert costed["m2"].actual_margin == D("100")
    assert costed["m2"].margin_status is MarginStatus.SAFE


def test_recipe_cost_follows_the_given_outlet_prices():
    items = [MenuItemRow(id="m1", name="Pizza", selling_price=D("10"), target_margin=D("0"))]
    recipes = [RecipeRow("m1", "flour", D("1"))]
    # flour belongs to another outlet: not in the priced set
    assert cost_menu_items(items, recipes, [])[0].cogs == 0


def test_menu_item_detail_drops_unknown_ingredients():
    items = [MenuItemRow(id="m1", name="Pizza", selling_price=D("10"), target_margin=D("0"))]
    recipes = [RecipeRow("m1", "flour", D("1")), RecipeRow("m1", "gone", D("1"))]
    ings = [ing("flour", "2")]
    costed = cost_menu_items(items, recipes, ings)

    item, populated = menu_item_detail("m1", costed, ings)
    assert item.id == "m1"
    assert [(r.ingredient.id, r.quantity) for r in populated] == [("flour", D("1"))]
    assert menu_item_detail("nope", costed, ings) is None
