from fastapi import APIRouter, Depends
from datetime import datetime

from profitlens.deps import current_time, get_store, get_workspace, require_auth, require_view
from profitlens.schemas.common import IdsIn
from profitlens.schemas.reports import NotificationOut
from profitlens.services import alerts
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                       now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    found = alerts.build_notifications(view.ingredients, alerts.margin_alerts(view.ingredients, ws.costed(store)), now)
    return [
        {"id": n.id, "type": n.type, "message": n.message, "timestamp": n.timestamp.isoformat(),
         "related_view": n.related_view, "related_view_props": n.related_view_props, "is_read": n.is_read}
        for n in alerts.apply_read_state(found, ws.read_ids)
    ]


@router.post("/read")
def mark_read(body: IdsIn, ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    ws.mark_read(body.ids)
    return {"ok": True, "read": len(body.ids)}
