from fastapi import APIRouter, Depends, HTTPException

from profitlens.deps import get_store, get_workspace, require_auth
from profitlens.schemas.workspace import WorkspaceOut, WorkspaceSettingsIn
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore

router = APIRouter(prefix="/workspace", tags=["workspace"])


def _out(ws: Workspace) -> dict:
    return {"selected_outlet_id": ws.selected_outlet_id, "window_days": ws.window_days, "comparing": ws.comparing}


@router.get("", response_model=WorkspaceOut)
def get_settings(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    ws.current(store)  # resolves the default outlet on first use
    return _out(ws)


@router.put("", response_model=WorkspaceOut)
def update_settings(body: WorkspaceSettingsIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    try:
        ws.configure(window_days=body.window_days, comparing=body.comparing)
    except ValueError as e:
        raise HTTPException(422, detail=str(e))
    ws.current(store)
    return _out(ws)
