"""
Restaurant Schemas
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class RestaurantRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    business_name: Optional[str] = None
    gstin: Optional[str] = None
    is_online: bool = False


class OnlineStatusUpdate(BaseModel):
    is_online: bool
