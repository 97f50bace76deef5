from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime

from profitlens.deps import current_time, get_store, get_workspace, require_auth, require_view
from profitlens.models.core import WasteRecord
from profitlens.schemas.sales import WasteIn, WasteOut
from profitlens.services import inventory
from profitlens.services.dashboard import waste_summary
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money, qty

router = APIRouter(prefix="/waste", tags=["waste"])


@router.get("", response_model=list[WasteOut])
def list_waste(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return [
        {"id": w.id, "ingredient_id": w.ingredient_id, "date": w.date.isoformat(), "quantity": qty(w.quantity),
         "reason": w.reason, "cost": money(w.cost)}
        for w in reversed(view.waste)
    ]


@router.post("")
def record_waste(body: WasteIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                 view: OutletView = Depends(require_view), now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    data = {**body.model_dump(), "date": body.date or now.date()}
    w = ws.mutate(store, inventory.record_waste, view, data)
    if not w:
        raise HTTPException(404, detail="Ingredient not found in this outlet")
    return {"id": w.id, "cost": money(w.cost)}


@router.delete("/{waste_id}")
def delete_waste(waste_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                 view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    # stock is not given back: the goods are gone either way
    if not any(w.id == waste_id for w in view.waste):
        raise HTTPException(404, detail="Waste record not found in this outlet")
    ws.mutate(store, EntityStore.delete, WasteRecord, waste_id)
    return {"ok": True}


@router.get("/summary")
def summary(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return {reason: money(cost) for reason, cost in waste_summary(view.waste).items()}
