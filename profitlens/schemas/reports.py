import datetime as dt
from pydantic import BaseModel
from typing import Optional

class DashboardStatsOut(BaseModel):
    window_days: int
    total_revenue: float
    net_profit: float
    low_stock_count: int
    total_items_sold: int
    average_margin: float

class SeriesOut(BaseModel):
    labels: list[str]
    values: list[float]
    total: float

class SalesChartOut(BaseModel):
    window_days: int
    current: SeriesOut
    previous: Optional[SeriesOut] = None  # only while comparing

class ProfitLossOut(BaseModel):
    period_days: int
    total_revenue: float
    total_cogs: float
    gross_profit: float
    total_operational_cost: float
    total_waste_cost: float
    net_profit: float
    gross_profit_margin: float
    net_profit_margin: float

class RankedItemOut(BaseModel):
    id: str
    name: str
    image_url: str
    metric: float

class PerformanceOut(BaseModel):
    best_sellers_by_unit: list[RankedItemOut]
    highest_revenue_items: list[RankedItemOut]
    most_profitable_items: list[RankedItemOut]
    least_profitable_items: list[RankedItemOut]

class NotificationOut(BaseModel):
    id: str
    type: str
    message: str
    timestamp: dt.datetime
    related_view: str
    related_view_props: dict = {}
    is_read: bool

class MarginAlertOut(BaseModel):
    ingredient_id: str
    ingredient_name: str
    price_increase_percent: int
    affected_menus: list[str]
