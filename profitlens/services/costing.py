from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Mapping

from profitlens.services.snapshot import ZERO, IngredientRow, MenuItemRow, RecipeRow

HUNDRED = Decimal("100")
WARNING_BAND = Decimal("-10")


class MarginStatus(str, Enum):
    SAFE = "Safe"
    WARNING = "Warning"
    DANGER = "Danger"


@dataclass(frozen=True)
class RecipeComponent:
    ingredient_id: str
    quantity: Decimal


@dataclass(frozen=True)
class CostedMenuItem:
    id: str
    name: str
    image_url: str
    selling_price: Decimal
    target_margin: Decimal
    recipe: tuple[RecipeComponent, ...]
    cogs: Decimal
    actual_margin: Decimal
    margin_status: MarginStatus


def compute_cogs(recipe: Iterable[RecipeComponent], ingredients: Mapping[str, IngredientRow]) -> Decimal:
    total = ZERO
    for c in recipe:
        ing = ingredients.get(c.ingredient_id)
        if ing is not None:  # deleted / other outlet's ingredient costs nothing
            total += ing.price * c.quantity
    return total


def actual_margin(selling_price: Decimal, cogs: Decimal) -> Decimal:
    if selling_price <= 0:
        return ZERO
    return (selling_price - cogs) / selling_price * HUNDRED


def classify_margin(actual: Decimal, target: Decimal) -> MarginStatus:
    diff = actual - target
    if diff >= 0:
        return MarginStatus.SAFE
    if diff >= WARNING_BAND:
        return MarginStatus.WARNING
    return MarginStatus.DANGER


def recipes_by_item(recipes: Iterable[RecipeRow]) -> dict[str, tuple[RecipeComponent, ...]]:
    out: dict[str, list[RecipeComponent]] = defaultdict(list)
    for r in recipes:
        out[r.menu_item_id].append(RecipeComponent(ingredient_id=r.ingredient_id, quantity=r.quantity))
    return {k: tuple(v) for k, v in out.items()}


def cost_menu_items(
    menu_items: Iterable[MenuItemRow],
    recipes: Iterable[RecipeRow],
    ingredients: Iterable[IngredientRow],
) -> list[CostedMenuItem]:
    """Join each menu item with its recipe and price it against the given ingredients."""
    ing_map = {i.id: i for i in ingredients}
    by_item = recipes_by_item(recipes)
    out = []
    for m in menu_items:
        recipe = by_item.get(m.id, ())
        cogs = compute_cogs(recipe, ing_map)
        margin = actual_margin(m.selling_price, cogs)
        out.append(CostedMenuItem(
            id=m.id,
            name=m.name,
            image_url=m.image_url,
            selling_price=m.selling_price,
            target_margin=m.target_margin,
            recipe=recipe,
            cogs=cogs,
            actual_margin=margin,
            margin_status=classify_margin(margin, m.target_margin),
        ))
    return out


@dataclass(frozen=True)
class RecipeIngredient:
    ingredient: IngredientRow
    quantity: Decimal


def menu_item_detail(
    item_id: str,
    menu_items: Iterable[CostedMenuItem],
    ingredients: Iterable[IngredientRow],
) -> tuple[CostedMenuItem, list[RecipeIngredient]] | None:
    item = next((m for m in menu_items if m.id == item_id), None)
    if item is None:
        return None
    ing_map = {i.id: i for i in ingredients}
    populated = [
        RecipeIngredient(ingredient=ing_map[c.ingredient_id], quantity=c.quantity)
        for c in item.recipe
        if c.ingredient_id in ing_map
    ]
    return item, populated
