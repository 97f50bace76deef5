"""
Commands that move ingredient stock.

Each command only writes through the store; the workspace commits once and
reloads, so a sale or a waste entry and its stock change land together.
"""
import logging
import time
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from profitlens.models.core import Ingredient, PendingOrder, SalesHistory, WasteRecord
from profitlens.services.costing import CostedMenuItem
from profitlens.services.guards import GuardResult, ingredient_deletable
from profitlens.services.scope import OutletView
from profitlens.services.snapshot import ZERO, IngredientRow, OrderRow, Snapshot, dec
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)


def clamp(x: Decimal) -> Decimal:
    return x if x > 0 else ZERO


# ── ingredients ─────────────────────────────────────────────────────────────

def set_price(store: EntityStore, ingredient_id: str, price: Decimal) -> Ingredient | None:
    """Change the unit price, keeping the old one as previous_price."""
    ing = store.get(Ingredient, ingredient_id)
    if ing is None:
        return None
    old = dec(ing.price)
    if old != price:
        store.update(Ingredient, ingredient_id, {"previous_price": old, "price": price})
    return ing


def set_prices(store: EntityStore, view: OutletView, prices: Mapping[str, Decimal]) -> int:
    """Bulk price update; ids outside the outlet are ignored."""
    mine = {i.id for i in view.ingredients}
    n = 0
    for ingredient_id, price in prices.items():
        if ingredient_id in mine:
            set_price(store, ingredient_id, price)
            n += 1
    logger.info("updated %d ingredient prices for outlet %s", n, view.outlet_id)
    return n


def delete_ingredient(store: EntityStore, snap: Snapshot, ingredient_id: str) -> GuardResult:
    verdict = ingredient_deletable(snap, ingredient_id)
    if verdict.success:
        store.delete(Ingredient, ingredient_id)
        logger.info("ingredient %s deleted", ingredient_id)
    return verdict


def _adjust_stock(store: EntityStore, ingredient_id: str, delta: Decimal) -> None:
    ing = store.get(Ingredient, ingredient_id)
    if ing is None:
        logger.debug("stock change for missing ingredient %s skipped", ingredient_id)
        return
    store.update(Ingredient, ingredient_id, {"stock_level": clamp(dec(ing.stock_level) + delta)})


# ── daily sales ─────────────────────────────────────────────────────────────

def consumption(
    sales: Mapping[str, int],
    menu_items: Iterable[CostedMenuItem],
    ingredient_ids: set[str],
) -> dict[str, Decimal]:
    """Ingredient usage for a batch of units sold, limited to the given ingredients."""
    used: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for m in menu_items:
        sold = sales.get(m.id, 0)
        if sold <= 0:
            continue
        for c in m.recipe:
            if c.ingredient_id in ingredient_ids:
                used[c.ingredient_id] += c.quantity * sold
    return dict(used)


def check_stock_availability(
    sales: Mapping[str, int],
    menu_items: Sequence[CostedMenuItem],
    ingredients: Sequence[IngredientRow],
) -> dict[str, str]:
    """
    Warn, per menu item, when the whole batch needs more of one of its
    ingredients than is in stock. Only a warning: the sale still goes through.
    """
    stock = {i.id: i for i in ingredients}
    needed = consumption(sales, menu_items, set(stock))
    warnings = {}
    for m in menu_items:
        if sales.get(m.id, 0) <= 0:
            continue
        # an ingredient outside the outlet counts as short but has no name to report
        short = next(
            (c.ingredient_id for c in m.recipe
             if c.ingredient_id not in stock or needed[c.ingredient_id] > stock[c.ingredient_id].stock_level),
            None,
        )
        if short in stock:
            warnings[m.id] = f"Stock of {stock[short].name} may not cover these sales."
    return warnings


def process_daily_sales(
    store: EntityStore,
    view: OutletView,
    menu_items: list[CostedMenuItem],
    sales: Mapping[str, int],
    today: date,
) -> list[SalesHistory]:
    """Book one sales line per item sold today and draw its recipe from stock."""
    lines = []
    for m in menu_items:
        sold = sales.get(m.id, 0)
        if sold <= 0:
            continue
        lines.append(store.insert(SalesHistory, {
            "outlet_id": view.outlet_id,
            "menu_item_id": m.id,
            "date": today,
            "quantity_sold": sold,
            "total_revenue": m.selling_price * sold,
        }))
    used = consumption(sales, menu_items, {i.id for i in view.ingredients})
    for ingredient_id, qty in used.items():
        _adjust_stock(store, ingredient_id, -qty)
    logger.info("booked %d sales lines for outlet %s, %d ingredients drawn", len(lines), view.outlet_id, len(used))
    return lines


# ── waste ───────────────────────────────────────────────────────────────────

def record_waste(store: EntityStore, view: OutletView, body: dict) -> WasteRecord | None:
    """Log waste at today's price and take it out of stock. None if the ingredient is not this outlet's."""
    ing = next((i for i in view.ingredients if i.id == body["ingredient_id"]), None)
    if ing is None:
        return None
    qty = dec(body["quantity"])
    row = store.insert(WasteRecord, {**body, "outlet_id": view.outlet_id, "quantity": qty, "cost": ing.price * qty})
    _adjust_stock(store, ing.id, -qty)
    logger.info("waste %s x%s (%s) recorded for outlet %s", ing.name, qty, body.get("reason"), view.outlet_id)
    return row


# ── purchase orders ─────────────────────────────────────────────────────────

def po_number() -> str:
    return f"PO-{int(time.time() * 1000)}"


def add_pending_order(store: EntityStore, outlet_id: str, body: dict) -> PendingOrder:
    return store.insert(PendingOrder, {**body, "outlet_id": outlet_id, "po_number": po_number()})


def receive_order(store: EntityStore, view: OutletView, order_id: str) -> OrderRow | None:
    """Add every ordered quantity to stock, then drop the order."""
    order = next((o for o in view.orders if o.id == order_id), None)
    if order is None:
        return None
    incoming: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for line in order.items:
        incoming[line.ingredient_id] += line.quantity_to_order
    for ingredient_id, qty in incoming.items():
        _adjust_stock(store, ingredient_id, qty)
    store.delete(PendingOrder, order_id)
    logger.info("order %s received into outlet %s", order.po_number, view.outlet_id)
    return order
