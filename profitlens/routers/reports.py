from fastapi import APIRouter, Depends, Query
from datetime import datetime

from profitlens.deps import current_time, get_store, get_workspace, require_auth, require_view
from profitlens.schemas.reports import (
    DashboardStatsOut, MarginAlertOut, PerformanceOut, ProfitLossOut, SalesChartOut,
)
from profitlens.services import aggregation, alerts, dashboard
from profitlens.services.aggregation import DailySeries
from profitlens.services.profit_loss import calculate_profit_loss
from profitlens.services.scope import OutletView
from profitlens.services.workspace import Workspace
from profitlens.store import EntityStore
from profitlens.util.numbers import money, pct

router = APIRouter(prefix="/reports", tags=["reports"])


def _series(s: DailySeries) -> dict:
    return {"labels": s.labels, "values": [money(v) for v in s.values], "total": money(s.total)}


@router.get("/dashboard", response_model=DashboardStatsOut)
def dashboard_stats(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                    now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    s = dashboard.dashboard_stats(view, ws.costed(store), ws.window_days, now.date())
    return {
        "window_days": ws.window_days,
        "total_revenue": money(s.total_revenue),
        "net_profit": money(s.net_profit),
        "low_stock_count": s.low_stock_count,
        "total_items_sold": s.total_items_sold,
        "average_margin": pct(s.average_margin),
    }


@router.get("/sales_chart", response_model=SalesChartOut)
def sales_chart(ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    today = now.date()
    current = aggregation.daily_revenue_series(view.sales, ws.window_days, today)
    previous = aggregation.comparison_series(view.sales, ws.window_days, today) if ws.comparing else None
    return {
        "window_days": ws.window_days,
        "current": _series(current),
        "previous": _series(previous) if previous is not None else None,
    }


@router.get("/profit_loss", response_model=ProfitLossOut)
def profit_loss(period_days: int | None = Query(default=None, gt=0), store: EntityStore = Depends(get_store),
                ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    p = calculate_profit_loss(period_days or ws.window_days, view.sales, ws.costed(store), view.costs, view.waste, now.date())
    return {
        "period_days": p.period_days,
        "total_revenue": money(p.total_revenue),
        "total_cogs": money(p.total_cogs),
        "gross_profit": money(p.gross_profit),
        "total_operational_cost": money(p.total_operational_cost),
        "total_waste_cost": money(p.total_waste_cost),
        "net_profit": money(p.net_profit),
        "gross_profit_margin": pct(p.gross_profit_margin),
        "net_profit_margin": pct(p.net_profit_margin),
    }


@router.get("/performance", response_model=PerformanceOut)
def performance(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                now: datetime = Depends(current_time), sub: str = Depends(require_auth)):
    window = aggregation.since(view.sales, now.date(), ws.window_days)
    r = dashboard.performance_rankings(ws.costed(store), window)

    def rows(items, fmt):
        return [{"id": i.id, "name": i.name, "image_url": i.image_url, "metric": fmt(i.metric)} for i in items]

    return {
        "best_sellers_by_unit": rows(r.best_sellers_by_unit, int),
        "highest_revenue_items": rows(r.highest_revenue_items, money),
        "most_profitable_items": rows(r.most_profitable_items, pct),
        "least_profitable_items": rows(r.least_profitable_items, pct),
    }


@router.get("/margin_alerts", response_model=list[MarginAlertOut])
def margin_alerts(store: EntityStore = Depends(get_store), ws: Workspace = Depends(get_workspace), view: OutletView = Depends(require_view),
                  sub: str = Depends(require_auth)):
    return [
        {"ingredient_id": a.ingredient_id, "ingredient_name": a.ingredient_name,
         "price_increase_percent": a.price_increase_percent, "affected_menus": list(a.affected_menus)}
        for a in alerts.margin_alerts(view.ingredients, ws.costed(store))
    ]
