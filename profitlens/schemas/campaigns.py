import datetime as dt
from pydantic import BaseModel
from typing import Optional

class CampaignIn(BaseModel):
    """A campaign suggestion as produced by the (external) copywriting step."""
    campaign_name: str
    marketing_copy: str = ""
    promo_mechanic: str = ""
    justification: str = ""
    item1_name: str
    item2_name: str

class CampaignOut(CampaignIn):
    start_date: dt.datetime

class CampaignPerformanceOut(BaseModel):
    days_running: int
    percentage_change: float
    avg_daily_units_before: float
    avg_daily_units_during: float

class ActiveCampaignOut(BaseModel):
    campaign: Optional[CampaignOut] = None
    performance: Optional[CampaignPerformanceOut] = None
