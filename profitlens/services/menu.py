import logging
from decimal import Decimal
from typing import Iterable

from profitlens.models.core import MenuItem, Recipe
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)


def _write_recipe(store: EntityStore, menu_item_id: str, recipe: Iterable[dict]) -> int:
    # a recipe is replaced as a whole, never patched
    store.delete_where(Recipe, menu_item_id=menu_item_id)
    n = 0
    for line in recipe:
        store.insert(Recipe, {
            "menu_item_id": menu_item_id,
            "ingredient_id": line["ingredient_id"],
            "quantity": line["quantity"],
        })
        n += 1
    return n


def add_menu_item(store: EntityStore, fields: dict, recipe: Iterable[dict] = ()) -> MenuItem:
    item = store.insert(MenuItem, fields)
    n = _write_recipe(store, item.id, recipe)
    logger.info("menu item %r added with %d recipe lines", item.name, n)
    return item


def update_menu_item(
    store: EntityStore,
    menu_item_id: str,
    fields: dict,
    recipe: Iterable[dict] | None = None,
) -> MenuItem | None:
    """Patch the item's own fields; a given recipe replaces the stored one entirely."""
    item = store.update(MenuItem, menu_item_id, fields)
    if item is None:
        return None
    if recipe is not None:
        _write_recipe(store, menu_item_id, recipe)
    return item


def set_selling_price(store: EntityStore, menu_item_id: str, price: Decimal) -> MenuItem | None:
    return store.update(MenuItem, menu_item_id, {"selling_price": price})


def delete_menu_item(store: EntityStore, menu_item_id: str) -> bool:
    store.delete_where(Recipe, menu_item_id=menu_item_id)
    found = store.delete(MenuItem, menu_item_id)
    if found:
        logger.info("menu item %s deleted", menu_item_id)
    return found
