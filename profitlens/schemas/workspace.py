from pydantic import BaseModel, Field
from typing import Optional

class WorkspaceSettingsIn(BaseModel):
    window_days: Optional[int] = Field(default=None, gt=0)
    comparing: Optional[bool] = None

class WorkspaceOut(BaseModel):
    selected_outlet_id: Optional[str] = None
    window_days: int
    comparing: bool
