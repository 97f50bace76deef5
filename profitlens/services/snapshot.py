"""
In-memory snapshot of every raw entity.

The metrics engine never touches the session: it works on these frozen rows,
loaded in one pass by `load_snapshot`. A new snapshot object is built after
every mutation, so identity is enough to tell two snapshots apart.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from profitlens.models.core import (
    ActiveCampaign, Ingredient, MenuItem, OperationalCost, Outlet, PendingOrder,
    Recipe, SalesHistory, Supplier, SupplierPrice, WasteRecord,
)
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def dec(x) -> Decimal:
    if x is None:
        return ZERO
    if isinstance(x, Decimal):
        return x
    # go through str to avoid float binary artifacts
    return Decimal(str(x))


def aware(dt: datetime) -> datetime:
    # sqlite hands timestamps back naive; they were written in UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class OutletRow:
    id: str
    name: str


@dataclass(frozen=True)
class IngredientRow:
    id: str
    outlet_id: str
    name: str
    unit: str
    price: Decimal
    stock_level: Decimal
    reorder_point: Decimal
    previous_price: Decimal | None = None


@dataclass(frozen=True)
class MenuItemRow:
    id: str
    name: str
    selling_price: Decimal
    target_margin: Decimal
    image_url: str = ""


@dataclass(frozen=True)
class RecipeRow:
    menu_item_id: str
    ingredient_id: str
    quantity: Decimal


@dataclass(frozen=True)
class SaleRow:
    outlet_id: str
    menu_item_id: str
    date: date
    quantity_sold: int
    total_revenue: Decimal


@dataclass(frozen=True)
class CostRow:
    id: str
    outlet_id: str
    name: str
    amount: Decimal
    interval: str  # "daily" | "monthly"


@dataclass(frozen=True)
class WasteRow:
    id: str
    outlet_id: str
    ingredient_id: str
    date: date
    quantity: Decimal
    reason: str
    cost: Decimal


@dataclass(frozen=True)
class SupplierRow:
    id: str
    name: str
    contact_person: str = ""
    phone: str = ""


@dataclass(frozen=True)
class SupplierPriceRow:
    id: str
    supplier_id: str
    ingredient_id: str
    price: Decimal


@dataclass(frozen=True)
class OrderLine:
    ingredient_id: str
    quantity_to_order: Decimal
    name: str | None = None
    unit: str | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class OrderRow:
    id: str
    outlet_id: str
    po_number: str
    supplier_id: str
    supplier_name: str
    order_date: datetime
    total_amount: Decimal
    items: tuple[OrderLine, ...] = ()


@dataclass(frozen=True)
class CampaignRow:
    campaign_name: str
    item1_name: str
    item2_name: str
    start_date: datetime
    marketing_copy: str = ""
    promo_mechanic: str = ""
    justification: str = ""


@dataclass(frozen=True)
class Snapshot:
    outlets: tuple[OutletRow, ...] = ()
    ingredients: tuple[IngredientRow, ...] = ()
    menu_items: tuple[MenuItemRow, ...] = ()
    recipes: tuple[RecipeRow, ...] = ()
    sales: tuple[SaleRow, ...] = ()
    costs: tuple[CostRow, ...] = ()
    waste: tuple[WasteRow, ...] = ()
    suppliers: tuple[SupplierRow, ...] = ()
    supplier_prices: tuple[SupplierPriceRow, ...] = ()
    orders: tuple[OrderRow, ...] = ()
    campaign: CampaignRow | None = None
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc), compare=False)


# ── ORM → row converters ────────────────────────────────────────────────────

def _order_line(raw: dict) -> OrderLine:
    return OrderLine(
        ingredient_id=raw.get("ingredientId") or raw.get("ingredient_id") or "",
        quantity_to_order=dec(raw.get("quantityToOrder", raw.get("quantity_to_order"))),
        name=raw.get("name"),
        unit=raw.get("unit"),
        price=dec(raw["price"]) if raw.get("price") is not None else None,
    )


def _enum_value(v) -> str:
    return getattr(v, "value", v)


def load_snapshot(store: EntityStore) -> Snapshot:
    """Read every table once and freeze the result."""
    outlets = store.list(Outlet, order_by="created_at")
    suppliers = store.list(Supplier, order_by="name")
    supplier_names = {s.id: s.name for s in suppliers}

    campaigns = store.list(ActiveCampaign, order_by="start_date")
    campaign = None
    if campaigns:
        c = campaigns[-1]  # latest start wins if more than one row slipped in
        if len(campaigns) > 1:
            logger.warning("found %d active campaigns, using the latest", len(campaigns))
        campaign = CampaignRow(
            campaign_name=c.campaign_name,
            item1_name=c.item1_name,
            item2_name=c.item2_name,
            start_date=aware(c.start_date),
            marketing_copy=c.marketing_copy,
            promo_mechanic=c.promo_mechanic,
            justification=c.justification,
        )

    snap = Snapshot(
        outlets=tuple(OutletRow(id=o.id, name=o.name) for o in outlets),
        ingredients=tuple(
            IngredientRow(
                id=i.id, outlet_id=i.outlet_id, name=i.name, unit=i.unit,
                price=dec(i.price),
                previous_price=dec(i.previous_price) if i.previous_price is not None else None,
                stock_level=dec(i.stock_level), reorder_point=dec(i.reorder_point),
            )
            for i in store.list(Ingredient, order_by="name")
        ),
        menu_items=tuple(
            MenuItemRow(
                id=m.id, name=m.name, image_url=m.image_url or "",
                selling_price=dec(m.selling_price), target_margin=dec(m.target_margin),
            )
            for m in store.list(MenuItem, order_by="name")
        ),
        recipes=tuple(
            RecipeRow(menu_item_id=r.menu_item_id, ingredient_id=r.ingredient_id, quantity=dec(r.quantity))
            for r in store.list(Recipe, order_by="created_at")
        ),
        sales=tuple(
            SaleRow(
                outlet_id=s.outlet_id, menu_item_id=s.menu_item_id, date=s.date,
                quantity_sold=int(s.quantity_sold or 0), total_revenue=dec(s.total_revenue),
            )
            for s in store.list(SalesHistory, order_by="date")
        ),
        costs=tuple(
            CostRow(id=c.id, outlet_id=c.outlet_id, name=c.name, amount=dec(c.amount), interval=_enum_value(c.interval))
            for c in store.list(OperationalCost, order_by="name")
        ),
        waste=tuple(
            WasteRow(
                id=w.id, outlet_id=w.outlet_id, ingredient_id=w.ingredient_id, date=w.date,
                quantity=dec(w.quantity), reason=_enum_value(w.reason), cost=dec(w.cost),
            )
            for w in store.list(WasteRecord, order_by="date")
        ),
        suppliers=tuple(
            SupplierRow(id=s.id, name=s.name, contact_person=s.contact_person or "", phone=s.phone or "")
            for s in suppliers
        ),
        supplier_prices=tuple(
            SupplierPriceRow(id=p.id, supplier_id=p.supplier_id, ingredient_id=p.ingredient_id, price=dec(p.price))
            for p in store.list(SupplierPrice, order_by="created_at")
        ),
        orders=tuple(
            OrderRow(
                id=o.id, outlet_id=o.outlet_id, po_number=o.po_number, supplier_id=o.supplier_id,
                supplier_name=supplier_names.get(o.supplier_id, ""),
                order_date=aware(o.order_date), total_amount=dec(o.total_amount),
                items=tuple(_order_line(raw) for raw in (o.items or [])),
            )
            for o in store.list(PendingOrder, order_by="order_date")
        ),
        campaign=campaign,
    )
    logger.debug(
        "snapshot loaded: %d outlets, %d ingredients, %d menu items, %d sales",
        len(snap.outlets), len(snap.ingredients), len(snap.menu_items), len(snap.sales),
    )
    return snap
