import logging
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Iterable

from profitlens.models.core import ActiveCampaign
from profitlens.services.costing import HUNDRED, CostedMenuItem
from profitlens.services.snapshot import ZERO, CampaignRow, SaleRow, aware
from profitlens.store import EntityStore

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class CampaignPerformance:
    days_running: int
    percentage_change: Decimal
    avg_daily_units_before: Decimal
    avg_daily_units_during: Decimal


def days_running(start: datetime, now: datetime) -> int:
    return math.ceil((now - start).total_seconds() / SECONDS_PER_DAY)


def involved_item_ids(campaign: CampaignRow, menu_items: Iterable[CostedMenuItem]) -> set[str]:
    # matched by name: renaming a menu item detaches it from the campaign
    names = {campaign.item1_name, campaign.item2_name}
    return {m.id for m in menu_items if m.name in names}


def evaluate_campaign(
    campaign: CampaignRow | None,
    sales: Iterable[SaleRow],
    menu_items: Iterable[CostedMenuItem],
    now: datetime,
) -> CampaignPerformance | None:
    """
    Compare average daily units of the campaign's items while it runs
    against an equally long stretch right before it started.

    `sales` is the unscoped history: a campaign runs across all outlets.
    """
    if campaign is None:
        return None
    now = aware(now)
    start = aware(campaign.start_date)
    days = days_running(start, now)
    divisor = Decimal(days or 1)
    ids = involved_item_ids(campaign, menu_items)
    before_start = start - timedelta(days=days)

    units_during = 0
    units_before = 0
    for s in sales:
        if s.menu_item_id not in ids:
            continue
        at = datetime.combine(s.date, time.min, tzinfo=now.tzinfo)
        if start <= at < now:
            units_during += s.quantity_sold
        elif before_start <= at < start:
            units_before += s.quantity_sold

    during = Decimal(units_during) / divisor
    before = Decimal(units_before) / divisor
    if before > 0:
        change = (during - before) / before * HUNDRED
    elif during > 0:
        change = HUNDRED
    else:
        change = ZERO
    return CampaignPerformance(
        days_running=days,
        percentage_change=change,
        avg_daily_units_before=before,
        avg_daily_units_during=during,
    )


# ── write boundary ──────────────────────────────────────────────────────────

def launch_campaign(store: EntityStore, suggestion: dict) -> ActiveCampaign:
    """Replace whatever campaign is running; at most one exists afterwards."""
    dropped = store.delete_where(ActiveCampaign)
    row = store.insert(ActiveCampaign, suggestion)
    logger.info("campaign %r launched (replaced %d)", row.campaign_name, dropped)
    return row


def end_campaign(store: EntityStore) -> int:
    n = store.delete_where(ActiveCampaign)
    logger.info("campaign ended (%d removed)", n)
    return n
