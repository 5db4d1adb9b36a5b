"""
Order Schemas
"""
import math
from typing import Any, Optional, List, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.order import OrderStatus


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """Best-effort numeric parse; None for anything that is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


class LineItem(BaseModel):
    """
    One line of an order. Quantity defaults to 1 and price to 0 when absent.

    Rows written by other clients are not trusted: numbers may arrive as
    strings or fractions, and anything unparseable is treated as missing.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    quantity: Optional[Union[int, float]] = None
    price: Optional[Union[int, float]] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value):
        if value is None or isinstance(value, str):
            return value or None
        return str(value)

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def _lenient_number(cls, value):
        return parse_number(value)


class OrderBase(BaseModel):
    customer_name: Optional[str] = None
    items: List[LineItem] = []
    total: float = Field(0, ge=0)


class OrderCreate(OrderBase):
    """Create order. Codes are generated when omitted."""
    order_id: Optional[str] = Field(None, min_length=1, max_length=32)
    status: OrderStatus = OrderStatus.NEW
    verification_code: Optional[str] = Field(None, min_length=4, max_length=8)


class OrderRecord(BaseModel):
    """Order as read from either store"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    order_id: str
    customer_name: Optional[str] = None
    items: List[LineItem] = []
    total: Optional[float] = 0
    status: OrderStatus
    verification_code: Optional[str] = None
    prep_time: Optional[int] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    accepted_at: Optional[datetime] = None

    @field_validator("items", mode="before")
    @classmethod
    def _items_or_empty(cls, value):
        # Only lists of objects are line items; anything else counts as no items.
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, (dict, LineItem))]

    @field_validator("total", mode="before")
    @classmethod
    def _total_or_zero(cls, value):
        number = parse_number(value)
        return 0 if number is None else number


class AcceptOrder(BaseModel):
    prep_time: int = Field(..., ge=1, le=180, description="Preparation estimate in minutes")


class RejectOrder(BaseModel):
    reason: Optional[str] = Field(None, max_length=200)
