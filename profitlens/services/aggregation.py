"""
Time-window helpers over dated records.

All windows are calendar-day based: `today` is the business day in the
configured timezone, and a record belongs to a window by its `date` alone.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Protocol, Sequence, TypeVar

from profitlens.services.snapshot import ZERO, SaleRow, WasteRow

# low-stock and rolling waste figures ignore the configurable window
LOOKBACK_DAYS = 30


class Dated(Protocol):
    date: date


D = TypeVar("D", bound=Dated)


def cutoff(today: date, days: int) -> date:
    return today - timedelta(days=days)


def since(records: Iterable[D], today: date, days: int) -> list[D]:
    """Records dated on or after `today - days`."""
    start = cutoff(today, days)
    return [r for r in records if r.date >= start]


def between(records: Iterable[D], start: date, end: date) -> list[D]:
    """Records in the half-open day range [start, end)."""
    return [r for r in records if start <= r.date < end]


@dataclass
class DailySeries:
    labels: list[str] = field(default_factory=list)
    values: list[Decimal] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum(self.values, ZERO)


def day_range(end: date, days: int) -> list[date]:
    """`days` consecutive days ending at `end`, oldest first."""
    return [end - timedelta(days=i) for i in range(days - 1, -1, -1)]


def daily_revenue_series(sales: Iterable[SaleRow], days: int, end: date) -> DailySeries:
    buckets: dict[date, Decimal] = {d: ZERO for d in day_range(end, days)}
    for s in sales:
        if s.date in buckets:
            buckets[s.date] += s.total_revenue
    return DailySeries(
        labels=[d.isoformat() for d in buckets],
        values=list(buckets.values()),
    )


def comparison_series(sales: Iterable[SaleRow], days: int, today: date) -> DailySeries:
    """The `days`-long period right before the primary window: [today-2W, today-W)."""
    return daily_revenue_series(sales, days, end=cutoff(today, days) - timedelta(days=1))


def total_revenue(sales: Iterable[SaleRow]) -> Decimal:
    return sum((s.total_revenue for s in sales), ZERO)


def total_units(sales: Iterable[SaleRow]) -> int:
    return sum(s.quantity_sold for s in sales)


def units_and_revenue_by_item(sales: Iterable[SaleRow]) -> dict[str, tuple[int, Decimal]]:
    units: dict[str, int] = defaultdict(int)
    revenue: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for s in sales:
        units[s.menu_item_id] += s.quantity_sold
        revenue[s.menu_item_id] += s.total_revenue
    return {k: (units[k], revenue[k]) for k in units}


def waste_cost_by_ingredient(waste: Sequence[WasteRow], today: date, days: int = LOOKBACK_DAYS) -> dict[str, Decimal]:
    out: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for w in since(waste, today, days):
        out[w.ingredient_id] += w.cost
    return dict(out)


def waste_cost_since(waste: Sequence[WasteRow], today: date, days: int = LOOKBACK_DAYS) -> Decimal:
    return sum((w.cost for w in since(waste, today, days)), ZERO)
