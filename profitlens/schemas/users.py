from pydantic import BaseModel
from typing import Optional

class UserProfileIn(BaseModel):
    name: str

class UserProfileOut(BaseModel):
    id: str
    name: str
    role: str
    avatar_url: Optional[str] = None
