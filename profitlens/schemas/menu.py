from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional

class RecipeLineIn(BaseModel):
    ingredient_id: str
    quantity: Decimal = Field(gt=0)

class MenuItemIn(BaseModel):
    name: str
    image_url: str = ""
    selling_price: Decimal = Field(ge=0)
    target_margin: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    recipe: list[RecipeLineIn] = []

class MenuItemPatch(BaseModel):
    name: Optional[str] = None
    image_url: Optional[str] = None
    selling_price: Optional[Decimal] = Field(default=None, ge=0)
    target_margin: Optional[Decimal] = Field(default=None, ge=0, le=100)
    recipe: Optional[list[RecipeLineIn]] = None  # given -> replaces the whole recipe

class SellingPriceIn(BaseModel):
    selling_price: Decimal = Field(ge=0)

class RecipeLineOut(BaseModel):
    ingredient_id: str
    quantity: float

class MenuItemOut(BaseModel):
    id: str
    name: str
    image_url: str
    selling_price: float
    target_margin: float
    recipe: list[RecipeLineOut]
    cogs: float
    actual_margin: float
    margin_status: str

class RecipeIngredientOut(BaseModel):
    ingredient_id: str
    name: str
    unit: str
    price: float
    quantity: float

class MenuItemDetailOut(BaseModel):
    item: MenuItemOut
    ingredients: list[RecipeIngredientOut]
