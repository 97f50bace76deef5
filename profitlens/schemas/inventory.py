from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

class IngredientIn(BaseModel):
    name: str
    unit: str
    price: Decimal = Field(ge=0)
    stock_level: Decimal = Field(default=Decimal("0"), ge=0)
    reorder_point: Decimal = Field(default=Decimal("0"), ge=0)

class IngredientOut(BaseModel):
    id: str
    outlet_id: str
    name: str
    unit: str
    price: float
    previous_price: Optional[float] = None
    stock_level: float
    reorder_point: float

class IngredientWasteOut(IngredientOut):
    waste_cost_last_30_days: float

class PriceIn(BaseModel):
    price: Decimal = Field(ge=0)

class BulkPricesIn(BaseModel):
    prices: dict[str, Decimal]  # ingredient id -> new price

class StockIn(BaseModel):
    stock_level: Decimal = Field(ge=0)

class UnitIn(BaseModel):
    unit: str = Field(min_length=1)

class InventoryOverviewOut(BaseModel):
    total_items: int
    low_stock_count: int
    total_stock_value: float
    total_waste_cost_last_30_days: float
