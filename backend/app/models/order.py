"""
Order Model
"""
from sqlalchemy import Column, String, DateTime, Integer, Numeric, ForeignKey, Index, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
import uuid

from app.database import Base


class OrderStatus(str, enum.Enum):
    NEW = "new"
    PREPARING = "preparing"
    READY = "ready"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    DELIVERED = "delivered"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    order_id = Column(String, unique=True, nullable=False)  # customer-facing code, e.g. ORD001
    customer_name = Column(String, nullable=True)

    # Array of {name, quantity, price}
    items = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    status = Column(String, nullable=False, default=OrderStatus.NEW.value)
    verification_code = Column(String, nullable=True)
    prep_time = Column(Integer, nullable=True)  # minutes, set on accept
    rejection_reason = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now().astimezone(), nullable=False)
    accepted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="orders")

    __table_args__ = (
        Index('idx_orders_restaurant_created', 'restaurant_id', 'created_at'),
        Index('idx_orders_status', 'status'),
    )

    def __repr__(self):
        return f"<Order {self.order_id} {self.status}>"
