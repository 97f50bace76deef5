from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import AbstractSet, Iterable

from profitlens.services.costing import HUNDRED, CostedMenuItem
from profitlens.services.snapshot import IngredientRow

SPIKE_THRESHOLD_PCT = Decimal("10")

LOW_STOCK = "low_stock"
MARGIN_ALERT = "margin_alert"


@dataclass(frozen=True)
class MarginAlert:
    ingredient_id: str
    ingredient_name: str
    price_increase_percent: int
    affected_menus: tuple[str, ...]


@dataclass(frozen=True)
class Notification:
    id: str
    type: str
    message: str
    timestamp: datetime
    related_view: str
    related_view_props: dict = field(default_factory=dict, compare=False, hash=False)
    is_read: bool = False


def is_low_stock(ing: IngredientRow) -> bool:
    return ing.stock_level <= ing.reorder_point


def low_stock(ingredients: Iterable[IngredientRow]) -> list[IngredientRow]:
    return [i for i in ingredients if is_low_stock(i)]


def price_increase_pct(ing: IngredientRow) -> Decimal | None:
    """Percent rise over the previous price, or None when the price did not go up."""
    if not ing.previous_price or ing.price <= ing.previous_price:
        return None
    return (ing.price - ing.previous_price) / ing.previous_price * HUNDRED


def margin_alerts(ingredients: Iterable[IngredientRow], menu_items: Iterable[CostedMenuItem]) -> list[MarginAlert]:
    menu_items = list(menu_items)
    alerts = []
    for ing in ingredients:
        pct = price_increase_pct(ing)
        if pct is None or pct <= SPIKE_THRESHOLD_PCT:
            continue
        affected = tuple(
            m.name for m in menu_items
            if any(c.ingredient_id == ing.id for c in m.recipe)
        )
        if not affected:
            continue
        alerts.append(MarginAlert(
            ingredient_id=ing.id,
            ingredient_name=ing.name,
            price_increase_percent=int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
            affected_menus=affected,
        ))
    return alerts


def _qty(x: Decimal) -> str:
    # 12.500 -> 12.5, 3.000 -> 3
    return format(x.normalize(), "f")


def build_notifications(
    ingredients: Iterable[IngredientRow],
    alerts: Iterable[MarginAlert],
    now: datetime,
) -> list[Notification]:
    out = []
    for ing in low_stock(ingredients):
        out.append(Notification(
            id=f"lowstock-{ing.id}",
            type=LOW_STOCK,
            message=f"Stock for {ing.name} is running low ({_qty(ing.stock_level)} {ing.unit}). Reorder soon.",
            timestamp=now,
            related_view="inventory",
            related_view_props={"filter": "low_stock"},
        ))
    for a in alerts:
        out.append(Notification(
            id=f"margin-{a.ingredient_id}",
            type=MARGIN_ALERT,
            message=(
                f"{a.ingredient_name} price rose {a.price_increase_percent}%, "
                f"affecting the margin of {', '.join(a.affected_menus)}."
            ),
            timestamp=now,
            related_view="dashboard",
        ))
    # newest first; stable for equal timestamps
    out.sort(key=lambda n: n.timestamp, reverse=True)
    return out


def apply_read_state(notifications: Iterable[Notification], read_ids: AbstractSet[str]) -> list[Notification]:
    return [replace(n, is_read=n.id in read_ids) for n in notifications]
