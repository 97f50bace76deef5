import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class SupplierIn(BaseModel):
    name: str
    contact_person: str = ""
    phone: str = ""

class SupplierPatch(BaseModel):
    name: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None

class SupplierOut(SupplierIn):
    id: str

class SupplierPriceIn(BaseModel):
    supplier_id: str
    ingredient_id: str
    price: Decimal = Field(ge=0)

class SupplierPriceOut(BaseModel):
    id: str
    supplier_id: str
    ingredient_id: str
    price: float

class OrderLineIn(BaseModel):
    # camelCase keys are what the purchase-order UI sends and stores
    model_config = ConfigDict(populate_by_name=True)
    ingredient_id: str = Field(alias="ingredientId")
    quantity_to_order: Decimal = Field(alias="quantityToOrder", gt=0)
    name: Optional[str] = None
    unit: Optional[str] = None
    price: Optional[Decimal] = None

class PendingOrderIn(BaseModel):
    supplier_id: str
    items: list[OrderLineIn] = Field(min_length=1)
    total_amount: Optional[Decimal] = None  # computed from line prices when absent

class OrderLineOut(BaseModel):
    ingredient_id: str
    quantity_to_order: float
    name: Optional[str] = None
    unit: Optional[str] = None
    price: Optional[float] = None

class PendingOrderOut(BaseModel):
    id: str
    po_number: str
    supplier_id: str
    supplier_name: str
    order_date: dt.datetime
    total_amount: float
    items: list[OrderLineOut]
