from fastapi import APIRouter, Depends, HTTPException
from decimal import Decimal

from profitlens.deps import get_store, get_workspace, require_auth, require_view
from profitlens.schemas.purchasing import PendingOrderIn, PendingOrderOut
from profitlens.services import inventory
from profitlens.services.scope import OutletView
from profitlens.services.snapshot import OrderRow
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money, qty, unit_price

router = APIRouter(prefix="/orders", tags=["purchasing"])


def _out(o: OrderRow) -> dict:
    return {
        "id": o.id,
        "po_number": o.po_number,
        "supplier_id": o.supplier_id,
        "supplier_name": o.supplier_name,
        "order_date": o.order_date.isoformat(),
        "total_amount": money(o.total_amount),
        "items": [
            {"ingredient_id": l.ingredient_id, "quantity_to_order": qty(l.quantity_to_order), "name": l.name,
             "unit": l.unit, "price": unit_price(l.price) if l.price is not None else None}
            for l in o.items
        ],
    }


@router.get("/pending", response_model=list[PendingOrderOut])
def list_pending(view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return [_out(o) for o in reversed(view.orders)]


@router.post("/pending")
def add_pending(body: PendingOrderIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    if not any(s.id == body.supplier_id for s in view.suppliers):
        raise HTTPException(404, detail="Supplier not found")
    total = body.total_amount
    if total is None:
        total = sum((l.price * l.quantity_to_order for l in body.items if l.price is not None), Decimal("0"))
    o = ws.mutate(store, inventory.add_pending_order, view.outlet_id, {
        "supplier_id": body.supplier_id,
        "total_amount": total,
        # stored as the UI sends it: camelCase keys, decimals as strings
        "items": [l.model_dump(mode="json", by_alias=True) for l in body.items],
    })
    return {"id": o.id, "po_number": o.po_number}


@router.post("/pending/{order_id}/receive")
def receive(order_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
            view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    o = ws.mutate(store, inventory.receive_order, view, order_id)
    if not o:
        raise HTTPException(404, detail="Pending order not found in this outlet")
    return {"received": o.po_number, "items": len(o.items)}
