import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from profitlens.services.aggregation import since
from profitlens.services.costing import HUNDRED, CostedMenuItem
from profitlens.services.snapshot import ZERO, CostRow, SaleRow, WasteRow

logger = logging.getLogger(__name__)

# fixed month, not calendar accurate
DAYS_PER_MONTH = Decimal("30")


@dataclass(frozen=True)
class ProfitLossStatement:
    period_days: int
    total_revenue: Decimal
    total_cogs: Decimal
    gross_profit: Decimal
    total_operational_cost: Decimal
    total_waste_cost: Decimal
    net_profit: Decimal
    gross_profit_margin: Decimal
    net_profit_margin: Decimal


def daily_cost(cost: CostRow) -> Decimal:
    if cost.interval == "monthly":
        return cost.amount / DAYS_PER_MONTH
    return cost.amount


def _ratio(part: Decimal, whole: Decimal) -> Decimal:
    return part / whole * HUNDRED if whole > 0 else ZERO


def calculate_profit_loss(
    period_days: int,
    sales: Sequence[SaleRow],
    menu_items: Iterable[CostedMenuItem],
    costs: Iterable[CostRow],
    waste: Sequence[WasteRow],
    today: date,
) -> ProfitLossStatement:
    """
    P&L for the last `period_days` days of one outlet.

    COGS uses today's recipe cost for every past sale. Sales whose menu item
    no longer exists are left out of both revenue and COGS.
    """
    items = {m.id: m for m in menu_items}

    revenue = ZERO
    cogs = ZERO
    skipped = 0
    for sale in since(sales, today, period_days):
        item = items.get(sale.menu_item_id)
        if item is None:
            skipped += 1
            continue
        revenue += sale.total_revenue
        cogs += item.cogs * sale.quantity_sold
    if skipped:
        logger.debug("P&L skipped %d sales lines for deleted menu items", skipped)

    op_cost = sum((daily_cost(c) * period_days for c in costs), ZERO)
    waste_cost = sum((w.cost for w in since(waste, today, period_days)), ZERO)

    gross = revenue - cogs
    net = gross - op_cost - waste_cost
    return ProfitLossStatement(
        period_days=period_days,
        total_revenue=revenue,
        total_cogs=cogs,
        gross_profit=gross,
        total_operational_cost=op_cost,
        total_waste_cost=waste_cost,
        net_profit=net,
        gross_profit_margin=_ratio(gross, revenue),
        net_profit_margin=_ratio(net, revenue),
    )
