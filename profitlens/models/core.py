from sqlalchemy import (
    String, ForeignKey, Numeric, Enum, Text, DateTime, Date, Integer, JSON, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum as PyEnum
import datetime as dt
from datetime import datetime, timezone
from decimal import Decimal
from profitlens.db import Base
from profitlens.models.common import IdMixin, CreatedMixin, TSMixin

# ── Enums ───────────────────────────────────────────────────────────────────
class CostInterval(PyEnum):
    DAILY = "daily"
    MONTHLY = "monthly"

class WasteReason(PyEnum):
    EXPIRED = "expired"
    SPOILED = "spoiled"
    DAMAGED = "damaged"
    OVERPRODUCTION = "overproduction"
    OTHER = "other"

def _values(enum_cls):
    # persist the lowercase values, not the member names
    return [m.value for m in enum_cls]

# ── Outlets ─────────────────────────────────────────────────────────────────
class Outlet(Base, IdMixin, TSMixin):
    __tablename__ = "outlets"
    name: Mapped[str] = mapped_column(String(160))

# ── Inventory ───────────────────────────────────────────────────────────────
class Ingredient(Base, IdMixin, TSMixin):
    __tablename__ = "ingredients"
    outlet_id: Mapped[str] = mapped_column(String(36), ForeignKey("outlets.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(160))
    unit: Mapped[str] = mapped_column(String(20))  # gram, ml, pcs ...
    price: Mapped[Decimal] = mapped_column(Numeric(18, 6), default=0)
    previous_price: Mapped[Decimal | None] = mapped_column(Numeric(18, 6))
    stock_level: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=0)
    reorder_point: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=0)

# ── Menu ────────────────────────────────────────────────────────────────────
class MenuItem(Base, IdMixin, TSMixin):
    __tablename__ = "menu_items"
    name: Mapped[str] = mapped_column(String(160))
    image_url: Mapped[str] = mapped_column(String(400), default="")
    selling_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    target_margin: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0)  # percent

class Recipe(Base, IdMixin, CreatedMixin):
    __tablename__ = "recipes"
    menu_item_id: Mapped[str] = mapped_column(String(36), ForeignKey("menu_items.id", ondelete="CASCADE"), index=True)
    ingredient_id: Mapped[str] = mapped_column(String(36), ForeignKey("ingredients.id", ondelete="CASCADE"), index=True)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=0)
    __table_args__ = (
        UniqueConstraint("menu_item_id", "ingredient_id", name="uq_recipe_item_ingredient"),
    )

# ── Sales & costs ───────────────────────────────────────────────────────────
class SalesHistory(Base, IdMixin, CreatedMixin):
    __tablename__ = "sales_history"
    # one line per menu item per processed batch
    outlet_id: Mapped[str] = mapped_column(String(36), ForeignKey("outlets.id", ondelete="CASCADE"), index=True)
    # no FK: sales outlive a deleted menu item and are skipped by the P&L
    menu_item_id: Mapped[str] = mapped_column(String(36), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    quantity_sold: Mapped[int] = mapped_column(Integer, default=0)
    total_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)

class OperationalCost(Base, IdMixin, TSMixin):
    __tablename__ = "operational_costs"
    outlet_id: Mapped[str] = mapped_column(String(36), ForeignKey("outlets.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(160))  # rent, salary ...
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    interval: Mapped[CostInterval] = mapped_column(Enum(CostInterval, values_callable=_values))

class WasteRecord(Base, IdMixin, CreatedMixin):
    __tablename__ = "waste_records"
    outlet_id: Mapped[str] = mapped_column(String(36), ForeignKey("outlets.id", ondelete="CASCADE"), index=True)
    ingredient_id: Mapped[str] = mapped_column(String(36), ForeignKey("ingredients.id", ondelete="CASCADE"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    quantity: Mapped[Decimal] = mapped_column(Numeric(12, 3), default=0)
    reason: Mapped[WasteReason] = mapped_column(Enum(WasteReason, values_callable=_values))
    cost: Mapped[Decimal] = mapped_column(Numeric(18, 6), default=0)  # price frozen at recording time

# ── Suppliers & purchasing ──────────────────────────────────────────────────
class Supplier(Base, IdMixin, TSMixin):
    __tablename__ = "suppliers"
    name: Mapped[str] = mapped_column(String(160))
    contact_person: Mapped[str] = mapped_column(String(160), default="")
    phone: Mapped[str] = mapped_column(String(40), default="")

class SupplierPrice(Base, IdMixin, TSMixin):
    __tablename__ = "supplier_prices"
    supplier_id: Mapped[str] = mapped_column(String(36), ForeignKey("suppliers.id", ondelete="CASCADE"), index=True)
    ingredient_id: Mapped[str] = mapped_column(String(36), ForeignKey("ingredients.id", ondelete="CASCADE"), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 6), default=0)
    __table_args__ = (
        UniqueConstraint("supplier_id", "ingredient_id", name="uq_supplier_price_key"),
    )

class PendingOrder(Base, IdMixin, CreatedMixin):
    __tablename__ = "pending_orders"
    outlet_id: Mapped[str] = mapped_column(String(36), ForeignKey("outlets.id", ondelete="CASCADE"), index=True)
    supplier_id: Mapped[str] = mapped_column(String(36), ForeignKey("suppliers.id", ondelete="CASCADE"), index=True)
    po_number: Mapped[str] = mapped_column(String(40), unique=True)
    order_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    items: Mapped[list] = mapped_column(JSON, default=list)  # [{"ingredientId", "quantityToOrder", ...}]

# ── Marketing ───────────────────────────────────────────────────────────────
class ActiveCampaign(Base, IdMixin, CreatedMixin):
    __tablename__ = "active_campaigns"
    # at most one row; see services.campaigns.launch_campaign
    campaign_name: Mapped[str] = mapped_column(String(200))
    marketing_copy: Mapped[str] = mapped_column(Text)
    promo_mechanic: Mapped[str] = mapped_column(Text)
    justification: Mapped[str] = mapped_column(Text)
    item1_name: Mapped[str] = mapped_column(String(160))
    item2_name: Mapped[str] = mapped_column(String(160))
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

# ── Users ───────────────────────────────────────────────────────────────────
class UserProfile(Base, TSMixin):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)  # identity provider subject
    name: Mapped[str] = mapped_column(String(160))
    role: Mapped[str] = mapped_column(String(40), default="user")
    avatar_url: Mapped[str | None] = mapped_column(String(400))
