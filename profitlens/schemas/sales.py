import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

from profitlens.models.core import CostInterval, WasteReason

class DailySalesIn(BaseModel):
    sales: dict[str, int]  # menu item id -> units sold today

class StockCheckOut(BaseModel):
    warnings: dict[str, str]

class SaleOut(BaseModel):
    menu_item_id: str
    date: dt.date
    quantity_sold: int
    total_revenue: float

class OperationalCostIn(BaseModel):
    name: str
    amount: Decimal = Field(ge=0)
    interval: CostInterval

class OperationalCostPatch(BaseModel):
    name: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    interval: Optional[CostInterval] = None

class OperationalCostOut(BaseModel):
    id: str
    name: str
    amount: float
    interval: str
    per_day: float

class WasteIn(BaseModel):
    ingredient_id: str
    quantity: Decimal = Field(gt=0)
    reason: WasteReason
    date: Optional[dt.date] = None  # defaults to today

class WasteOut(BaseModel):
    id: str
    ingredient_id: str
    date: dt.date
    quantity: float
    reason: str
    cost: float
