from pydantic import BaseModel
from typing import Optional

class GuardOut(BaseModel):
    success: bool
    message: Optional[str] = None

class IdsIn(BaseModel):
    ids: list[str]
