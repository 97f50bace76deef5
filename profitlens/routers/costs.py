from fastapi import APIRouter, Depends, HTTPException

from profitlens.deps import get_store, get_workspace, require_auth, require_view
from profitlens.models.core import OperationalCost
from profitlens.schemas.sales import OperationalCostIn, OperationalCostOut, OperationalCostPatch
from profitlens.services.profit_loss import daily_cost
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money

router = APIRouter(prefix="/costs", tags=["costs"])


def _own(view: OutletView, cost_id: str) -> None:
    if not any(c.id == cost_id for c in view.costs):
        raise HTTPException(404, detail="Operational cost not found in this outlet")


@router.get("", response_model=list[OperationalCostOut])
def list_costs(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return [
        {"id": c.id, "name": c.name, "amount": money(c.amount), "interval": c.interval, "per_day": money(daily_cost(c))}
        for c in view.costs
    ]


@router.post("")
def add_cost(body: OperationalCostIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
             view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    c = ws.mutate(store, EntityStore.insert, OperationalCost, {**body.model_dump(), "outlet_id": view.outlet_id})
    return {"id": c.id}


@router.patch("/{cost_id}")
def update_cost(cost_id: str, body: OperationalCostPatch, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, cost_id)
    ws.mutate(store, EntityStore.update, OperationalCost, cost_id, body.model_dump(exclude_none=True))
    return {"id": cost_id}


@router.delete("/{cost_id}")
def delete_cost(cost_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    _own(view, cost_id)
    ws.mutate(store, EntityStore.delete, OperationalCost, cost_id)
    return {"ok": True}
