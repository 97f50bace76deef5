from fastapi import APIRouter, Depends, HTTPException

from profitlens.deps import get_store, get_workspace, guard_response, require_auth
from profitlens.schemas.common import GuardOut
from profitlens.schemas.outlets import OutletIn, OutletOut
from profitlens.services import outlets
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore

router = APIRouter(prefix="/outlets", tags=["outlets"])


@router.get("", response_model=list[OutletOut])
def list_outlets(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    snap = ws.current(store)
    return [{"id": o.id, "name": o.name, "selected": o.id == ws.selected_outlet_id} for o in snap.outlets]


@router.post("", response_model=OutletOut)
def add_outlet(body: OutletIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    try:
        o = ws.mutate(store, outlets.add_outlet, body.name)
    except ValueError as e:
        raise HTTPException(422, detail=str(e))
    return {"id": o.id, "name": o.name, "selected": o.id == ws.selected_outlet_id}


@router.patch("/{outlet_id}")
def rename_outlet(outlet_id: str, body: OutletIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    try:
        o = ws.mutate(store, outlets.rename_outlet, outlet_id, body.name)
    except ValueError as e:
        raise HTTPException(422, detail=str(e))
    if not o:
        raise HTTPException(404, detail="Outlet not found")
    return {"id": o.id, "name": o.name}


@router.delete("/{outlet_id}", response_model=GuardOut)
def delete_outlet(outlet_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    snap = ws.current(store)
    if not any(o.id == outlet_id for o in snap.outlets):
        raise HTTPException(404, detail="Outlet not found")
    verdict = ws.mutate(store, outlets.delete_outlet, snap, outlet_id, ws.selected_outlet_id)
    return guard_response(verdict)


@router.post("/{outlet_id}/select")
def select_outlet(outlet_id: str, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    if not ws.select_outlet(store, outlet_id):
        raise HTTPException(404, detail="Outlet not found")
    return {"selected_outlet_id": outlet_id}
