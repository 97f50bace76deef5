from fastapi import APIRouter, Depends
from datetime import datetime

from profitlens.deps import current_time, get_store, get_workspace, require_auth, require_view
from profitlens.schemas.sales import DailySalesIn, SaleOut, StockCheckOut
from profitlens.services import aggregation, inventory
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money

router = APIRouter(prefix="/sales", tags=["sales"])


@router.post("/check", response_model=StockCheckOut)
def check_stock(body: DailySalesIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                view: OutletView = Depends(require_view), sub: str = Depends(require_auth)):
    return {"warnings": inventory.check_stock_availability(body.sales, ws.costed(store), view.ingredients)}


@router.post("/daily")
def process_daily_sales(body: DailySalesIn, store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace),
                        view: OutletView = Depends(require_view), now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    """
    body: {"sales": {menu_item_id: units_sold, ...}}
    Zero or negative counts are ignored; unknown menu item ids too.
    """
    costed = ws.costed(store)
    warnings = inventory.check_stock_availability(body.sales, costed, view.ingredients)
    lines = ws.mutate(store, inventory.process_daily_sales, view, costed, body.sales, now.date())
    return {"recorded": len(lines), "warnings": warnings}


@router.get("/history", response_model=list[SaleOut])
def sales_history(view: OutletView = Depends(require_view), ws: Workspace = Depends(get_workspace),
                  now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    rows = aggregation.since(view.sales, now.date(), ws.window_days)
    return [
        {"menu_item_id": s.menu_item_id, "date": s.date.isoformat(), "quantity_sold": s.quantity_sold,
         "total_revenue": money(s.total_revenue)}
        for s in reversed(rows)
    ]
