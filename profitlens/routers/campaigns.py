from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from profitlens.deps import current_time, get_store, get_workspace, require_auth
from profitlens.schemas.campaigns import ActiveCampaignOut, CampaignIn
from profitlens.services import campaigns
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import pct, qty

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@router.get("/active", response_model=ActiveCampaignOut)
def active_campaign(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                    now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    snap = ws.current(store)
    c = snap.campaign
    if c is None:
        return {"campaign": None, "performance": None}
    perf = campaigns.evaluate_campaign(c, snap.sales, ws.costed(store), now)
    return {
        "campaign": {
            "campaign_name": c.campaign_name,
            "marketing_copy": c.marketing_copy,
            "promo_mechanic": c.promo_mechanic,
            "justification": c.justification,
            "item1_name": c.item1_name,
            "item2_name": c.item2_name,
            "start_date": c.start_date.isoformat(),
        },
        "performance": {
            "days_running": perf.days_running,
            "percentage_change": pct(perf.percentage_change),
            "avg_daily_units_before": qty(perf.avg_daily_units_before),
            "avg_daily_units_during": qty(perf.avg_daily_units_during),
        },
    }


@router.post("/launch")
def launch(body: CampaignIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
           now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    c = ws.mutate(store, campaigns.launch_campaign, {**body.model_dump(), "start_date": now.astimezone(timezone.utc)})
    return {"id": c.id, "campaign_name": c.campaign_name}


@router.delete("/active")
def end(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), sub: str = Depends(require_auth)):
    n = ws.mutate(store, campaigns.end_campaign)
    return {"ended": n > 0}
