from fastapi import APIRouter, Depends, HTTPException

from profitlens.deps import get_store, get_workspace, require_auth, require_view
from profitlens.schemas.menu import MenuItemDetailOut, MenuItemIn, MenuItemOut, MenuItemPatch, RecipeLineIn, SellingPriceIn
from profitlens.services import menu
from profitlens.services.costing import CostedMenuItem, menu_item_detail
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money, pct, qty, unit_price

router = APIRouter(prefix="/menu", tags=["menu"])


def item_out(m: CostedMenuItem) -> dict:
    return {
        "id": m.id,
        "name": m.name,
        "image_url": m.image_url,
        "selling_price": money(m.selling_price),
        "target_margin": pct(m.target_margin),
        "recipe": [{"ingredient_id": c.ingredient_id, "quantity": qty(c.quantity)} for c in m.recipe],
        "cogs": money(m.cogs),
        "actual_margin": pct(m.actual_margin),
        "margin_status": m.margin_status.value,
    }


def _recipe(ws: Workspace, store: EntityStore, lines: list[RecipeLineIn]) -> list[dict]:
    known = {i.id for i in ws.current(store).ingredients}
    unknown = [l.ingredient_id for l in lines if l.ingredient_id not in known]
    if unknown:
        raise HTTPException(422, detail=f"Unknown ingredient(s): {', '.join(unknown)}")
    if len({l.ingredient_id for l in lines}) != len(lines):
        raise HTTPException(422, detail="An ingredient appears twice in the recipe")
    return [l.model_dump() for l in lines]


@router.get("/items", response_model=list[MenuItemOut])
def list_items(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    return [item_out(m) for m in ws.costed(store)]


@router.get("/items/{item_id}", response_model=MenuItemDetailOut)
def item_detail(item_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    found = menu_item_detail(item_id, ws.costed(store), view.ingredients)
    if not found:
        raise HTTPException(404, detail="Menu item not found")
    item, ingredients = found
    return {
        "item": item_out(item),
        "ingredients": [
            {"ingredient_id": r.ingredient.id, "name": r.ingredient.name, "unit": r.ingredient.unit,
             "price": unit_price(r.ingredient.price), "quantity": qty(r.quantity)}
            for r in ingredients
        ],
    }


@router.post("/items")
def add_item(body: MenuItemIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    recipe = _recipe(ws, store, body.recipe)
    m = ws.mutate(store, menu.add_menu_item, body.model_dump(exclude={"recipe"}), recipe)
    return {"id": m.id}


@router.patch("/items/{item_id}")
def update_item(item_id: str, body: MenuItemPatch, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    recipe = _recipe(ws, store, body.recipe) if body.recipe is not None else None
    fields = body.model_dump(exclude={"recipe"}, exclude_none=True)
    m = ws.mutate(store, menu.update_menu_item, item_id, fields, recipe)
    if not m:
        raise HTTPException(404, detail="Menu item not found")
    return {"id": m.id}


@router.put("/items/{item_id}/price")
def update_selling_price(item_id: str, body: SellingPriceIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    m = ws.mutate(store, menu.set_selling_price, item_id, body.selling_price)
    if not m:
        raise HTTPException(404, detail="Menu item not found")
    return {"id": m.id, "selling_price": money(m.selling_price)}


@router.delete("/items/{item_id}")
def delete_item(item_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    if not ws.mutate(store, menu.delete_menu_item, item_id):
        raise HTTPException(404, detail="Menu item not found")
    return {"ok": True}
