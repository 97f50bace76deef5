from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from profitlens.models.core import WasteReason
from profitlens.services import aggregation
from profitlens.services.alerts import low_stock
from profitlens.services.costing import CostedMenuItem
from profitlens.services.profit_loss import calculate_profit_loss
from profitlens.services.scope import OutletView
from profitlens.services.snapshot import ZERO, IngredientRow, WasteRow

RANKING_SIZE = 3


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: Decimal
    net_profit: Decimal
    low_stock_count: int
    total_items_sold: int
    average_margin: Decimal


def dashboard_stats(view: OutletView, menu_items: Sequence[CostedMenuItem], window_days: int, today: date) -> DashboardStats:
    in_window = aggregation.since(view.sales, today, window_days)
    pnl = calculate_profit_loss(window_days, view.sales, menu_items, view.costs, view.waste, today)
    avg = sum((m.actual_margin for m in menu_items), ZERO) / len(menu_items) if menu_items else ZERO
    return DashboardStats(
        total_revenue=aggregation.total_revenue(in_window),
        net_profit=pnl.net_profit,
        low_stock_count=len(low_stock(view.ingredients)),
        total_items_sold=aggregation.total_units(in_window),
        average_margin=avg,
    )


@dataclass(frozen=True)
class InventoryOverview:
    total_items: int
    low_stock_count: int
    total_stock_value: Decimal
    total_waste_cost_last_30_days: Decimal


def inventory_overview(ingredients: Sequence[IngredientRow], waste: Sequence[WasteRow], today: date) -> InventoryOverview:
    return InventoryOverview(
        total_items=len(ingredients),
        low_stock_count=len(low_stock(ingredients)),
        total_stock_value=sum((i.price * i.stock_level for i in ingredients), ZERO),
        total_waste_cost_last_30_days=aggregation.waste_cost_since(waste, today),
    )


def ingredients_with_waste_cost(
    ingredients: Sequence[IngredientRow], waste: Sequence[WasteRow], today: date
) -> list[tuple[IngredientRow, Decimal]]:
    costs = aggregation.waste_cost_by_ingredient(waste, today)
    return [(i, costs.get(i.id, ZERO)) for i in ingredients]


@dataclass(frozen=True)
class RankedItem:
    id: str
    name: str
    image_url: str
    metric: Decimal


@dataclass(frozen=True)
class PerformanceRankings:
    best_sellers_by_unit: list[RankedItem]
    highest_revenue_items: list[RankedItem]
    most_profitable_items: list[RankedItem]
    least_profitable_items: list[RankedItem]


def performance_rankings(menu_items: Sequence[CostedMenuItem], window_sales: Iterable) -> PerformanceRankings:
    """Top three menu items by units, revenue and margin over the window's sales."""
    per_item = aggregation.units_and_revenue_by_item(window_sales)
    rows = []
    for m in menu_items:
        units, revenue = per_item.get(m.id, (0, ZERO))
        rows.append((m, {"units": Decimal(units), "revenue": revenue, "margin": m.actual_margin}))

    def top(key: str, descending: bool = True) -> list[RankedItem]:
        ranked = sorted(rows, key=lambda r: r[1][key], reverse=descending)[:RANKING_SIZE]
        return [RankedItem(id=m.id, name=m.name, image_url=m.image_url, metric=v[key]) for m, v in ranked]

    return PerformanceRankings(
        best_sellers_by_unit=top("units"),
        highest_revenue_items=top("revenue"),
        most_profitable_items=top("margin"),
        least_profitable_items=top("margin", descending=False),
    )


def waste_summary(waste: Iterable[WasteRow]) -> dict[str, Decimal]:
    """Waste cost per reason, every reason present even when zero."""
    out: dict[str, Decimal] = {r.value: ZERO for r in WasteReason}
    for w in waste:
        out[w.reason] = out.get(w.reason, ZERO) + w.cost
    return out
