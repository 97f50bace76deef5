from pydantic import BaseModel, Field

class OutletIn(BaseModel):
    name: str = Field(min_length=1, max_length=160)

class OutletOut(OutletIn):
    id: str
    selected: bool = False
