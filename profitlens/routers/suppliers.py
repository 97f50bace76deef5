from fastapi import APIRouter, Depends, HTTPException

from profitlens.deps import get_store, get_workspace, require_auth
from profitlens.models.core import Supplier, SupplierPrice
from profitlens.schemas.inventory import PriceIn
from profitlens.schemas.purchasing import SupplierIn, SupplierOut, SupplierPatch, SupplierPriceIn, SupplierPriceOut
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import unit_price

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


# ── Suppliers ───────────────────────────────────────────────────────────────

@router.get("", response_model=list[SupplierOut])
def list_suppliers(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    return [{"id": s.id, "name": s.name, "contact_person": s.contact_person, "phone": s.phone} for s in ws.current(store).suppliers]


@router.post("")
def add_supplier(body: SupplierIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    s = ws.mutate(store, EntityStore.insert, Supplier, body.model_dump())
    return {"id": s.id}


@router.patch("/{supplier_id}")
def update_supplier(supplier_id: str, body: SupplierPatch, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    if not ws.mutate(store, EntityStore.update, Supplier, supplier_id, body.model_dump(exclude_none=True)):
        raise HTTPException(404, detail="Supplier not found")
    return {"id": supplier_id}


@router.delete("/{supplier_id}")
def delete_supplier(supplier_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    # price list entries and pending orders of the supplier go with it (FK cascade)
    if not ws.mutate(store, EntityStore.delete, Supplier, supplier_id):
        raise HTTPException(404, detail="Supplier not found")
    return {"ok": True}


# ── Price list ──────────────────────────────────────────────────────────────

@router.get("/prices", response_model=list[SupplierPriceOut])
def list_prices(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    return [
        {"id": p.id, "supplier_id": p.supplier_id, "ingredient_id": p.ingredient_id, "price": unit_price(p.price)}
        for p in ws.current(store).supplier_prices
    ]


@router.post("/prices")
def link_price(body: SupplierPriceIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    snap = ws.current(store)
    if not any(s.id == body.supplier_id for s in snap.suppliers):
        raise HTTPException(404, detail="Supplier not found")
    if not any(i.id == body.ingredient_id for i in snap.ingredients):
        raise HTTPException(404, detail="Ingredient not found")
    if any(p.supplier_id == body.supplier_id and p.ingredient_id == body.ingredient_id for p in snap.supplier_prices):
        raise HTTPException(409, detail="Supplier already prices this ingredient")
    p = ws.mutate(store, EntityStore.insert, SupplierPrice, body.model_dump())
    return {"id": p.id}


@router.put("/prices/{price_id}")
def update_price(price_id: str, body: PriceIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    if not ws.mutate(store, EntityStore.update, SupplierPrice, price_id, {"price": body.price}):
        raise HTTPException(404, detail="Price list entry not found")
    return {"id": price_id}


@router.delete("/prices/{price_id}")
def unlink_price(price_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    if not ws.mutate(store, EntityStore.delete, SupplierPrice, price_id):
        raise HTTPException(404, detail="Price list entry not found")
    return {"ok": True}
