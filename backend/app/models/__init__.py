"""
Models package - Import all models to ensure SQLAlchemy relationships work
"""
# Import Base first
from app.database import Base

# Import models in dependency order to avoid relationship resolution issues
from app.models.restaurant import Restaurant
from app.models.order import Order, OrderStatus
from app.models.menu_item import MenuItem

__all__ = [
    "Base",
    "Restaurant",
    "Order",
    "OrderStatus",
    "MenuItem",
]
