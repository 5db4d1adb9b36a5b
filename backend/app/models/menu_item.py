"""
Menu Item Model
"""
from sqlalchemy import Column, String, Boolean, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(String, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_veg = Column(Boolean, default=True, nullable=False)
    in_stock = Column(Boolean, default=True, nullable=False)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="menu_items")

    __table_args__ = (
        Index('idx_menu_items_restaurant_category', 'restaurant_id', 'category'),
    )

    def __repr__(self):
        return f"<MenuItem {self.name}>"
