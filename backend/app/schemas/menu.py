"""
Menu Item Schemas
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    category: str = Field(..., min_length=1, max_length=60)
    price: float = Field(..., ge=0)
    is_veg: bool = True
    in_stock: bool = True


class MenuItemCreate(MenuItemBase):
    pass


class MenuItemRecord(MenuItemBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str


class StockUpdate(BaseModel):
    in_stock: bool
