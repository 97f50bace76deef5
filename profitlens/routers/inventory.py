from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime

from profitlens.deps import current_time, get_store, get_workspace, guard_response, require_auth, require_view
from profitlens.models.core import Ingredient
from profitlens.schemas.common import GuardOut
from profitlens.schemas.inventory import (
    BulkPricesIn, IngredientIn, IngredientOut, IngredientWasteOut, InventoryOverviewOut, PriceIn, StockIn, UnitIn,
)
from profitlens.services import alerts, dashboard, inventory
from profitlens.services.scope import OutletView
from profitlens.services.snapshot import IngredientRow
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money, qty, unit_price

router = APIRouter(prefix="/inventory", tags=["inventory"])


def _out(i: IngredientRow) -> dict:
    return {
        "id": i.id,
        "outlet_id": i.outlet_id,
        "name": i.name,
        "unit": i.unit,
        "price": unit_price(i.price),
        "previous_price": unit_price(i.previous_price) if i.previous_price is not None else None,
        "stock_level": qty(i.stock_level),
        "reorder_point": qty(i.reorder_point),
    }


def _own(view: OutletView, ingredient_id: str) -> IngredientRow:
    ing = next((i for i in view.ingredients if i.id == ingredient_id), None)
    if ing is None:
        raise HTTPException(404, detail="Ingredient not found in this outlet")
    return ing


@router.get("/ingredients", response_model=list[IngredientOut])
def list_ingredients(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return [_out(i) for i in view.ingredients]


@router.post("/ingredients")
def add_ingredient(body: IngredientIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                   view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    i = ws.mutate(store, EntityStore.insert, Ingredient, {**body.model_dump(), "outlet_id": view.outlet_id})
    return {"id": i.id}


@router.get("/ingredients/with_waste_cost", response_model=list[IngredientWasteOut])
def ingredients_with_waste_cost(view: OutletView = Depends(require_view), now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    rows = dashboard.ingredients_with_waste_cost(view.ingredients, view.waste, now.date())
    return [{**_out(i), "waste_cost_last_30_days": money(cost)} for i, cost in rows]


@router.get("/low_stock", response_model=list[IngredientOut])
def low_stock(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return [_out(i) for i in alerts.low_stock(view.ingredients)]


@router.get("/overview", response_model=InventoryOverviewOut)
def overview(view: OutletView = Depends(require_view), now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    o = dashboard.inventory_overview(view.ingredients, view.waste, now.date())
    return {
        "total_items": o.total_items,
        "low_stock_count": o.low_stock_count,
        "total_stock_value": money(o.total_stock_value),
        "total_waste_cost_last_30_days": money(o.total_waste_cost_last_30_days),
    }


@router.put("/prices")
def update_prices(body: BulkPricesIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                  view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    n = ws.mutate(store, inventory.set_prices, view, body.prices)
    return {"updated": n}


@router.put("/ingredients/{ingredient_id}/price", response_model=IngredientOut)
def update_price(ingredient_id: str, body: PriceIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                 view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, ingredient_id)
    ws.mutate(store, inventory.set_price, ingredient_id, body.price)
    return _out(_own(ws.view(store), ingredient_id))


@router.put("/ingredients/{ingredient_id}/stock", response_model=IngredientOut)
def update_stock(ingredient_id: str, body: StockIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                 view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, ingredient_id)
    ws.mutate(store, EntityStore.update, Ingredient, ingredient_id, {"stock_level": body.stock_level})
    return _out(_own(ws.view(store), ingredient_id))


@router.put("/ingredients/{ingredient_id}/unit", response_model=IngredientOut)
def update_unit(ingredient_id: str, body: UnitIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, ingredient_id)
    ws.mutate(store, EntityStore.update, Ingredient, ingredient_id, {"unit": body.unit.strip()})
    return _out(_own(ws.view(store), ingredient_id))


@router.delete("/ingredients/{ingredient_id}", response_model=GuardOut)
def delete_ingredient(ingredient_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                      view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, ingredient_id)
    verdict = ws.mutate(store, inventory.delete_ingredient, ws.current(store), ingredient_id)
    return guard_response(verdict)
