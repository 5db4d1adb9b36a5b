"""
Demo data served when no store is configured.
"""
from datetime import datetime, timedelta
from typing import List

from app.models.order import OrderStatus
from app.schemas.menu import MenuItemRecord
from app.schemas.order import LineItem, OrderRecord
from app.schemas.restaurant import RestaurantRecord

DEMO_MENU = [
    # (name, category, price, is_veg)
    ("Paneer Tikka", "Starters", 180, True),
    ("Chicken 65", "Starters", 220, False),
    ("Veg Spring Rolls", "Starters", 150, True),
    ("Butter Chicken", "Mains", 320, False),
    ("Dal Makhani", "Mains", 240, True),
    ("Veggie Pizza (Large)", "Mains", 380, True),
    ("Chicken Biryani", "Mains", 280, False),
    ("Tandoori Roti", "Breads", 45, True),
    ("Butter Naan", "Breads", 55, True),
    ("Garlic Naan", "Breads", 65, True),
    ("Mango Lassi", "Beverages", 80, True),
    ("Masala Chai", "Beverages", 40, True),
]


def demo_restaurant(restaurant_id: str) -> RestaurantRecord:
    return RestaurantRecord(
        id=restaurant_id,
        name="MyEzz Demo Kitchen",
        business_name="MyEzz Foods Pvt Ltd",
        gstin="27AAPFU0939F1ZV",
        is_online=False,
    )


def demo_menu(restaurant_id: str) -> List[MenuItemRecord]:
    return [
        MenuItemRecord(
            id=str(n),
            restaurant_id=restaurant_id,
            name=name,
            category=category,
            price=price,
            is_veg=is_veg,
            in_stock=True,
        )
        for n, (name, category, price, is_veg) in enumerate(DEMO_MENU, 1)
    ]


def demo_orders(restaurant_id: str, now: datetime) -> List[OrderRecord]:
    """One order in each kanban column, all placed today."""
    return [
        OrderRecord(
            id="1",
            restaurant_id=restaurant_id,
            order_id="ORD001",
            customer_name="Yug Patel",
            items=[
                LineItem(name="Margherita Pizza", quantity=1, price=199.99),
                LineItem(name="Caesar Salad", quantity=1, price=50.00),
            ],
            total=249.99,
            status=OrderStatus.NEW,
            verification_code="A1B2",
            created_at=now,
        ),
        OrderRecord(
            id="2",
            restaurant_id=restaurant_id,
            order_id="ORD002",
            customer_name="Aksh Maheshwari",
            items=[
                LineItem(name="Chicken Burger", quantity=2, price=70.00),
                LineItem(name="French Fries", quantity=1, price=45.00),
            ],
            total=185.00,
            status=OrderStatus.PREPARING,
            verification_code="C3D4",
            prep_time=25,
            accepted_at=now - timedelta(minutes=5),
            created_at=now,
        ),
        OrderRecord(
            id="3",
            restaurant_id=restaurant_id,
            order_id="ORD003",
            customer_name="Nayan Chellani",
            items=[LineItem(name="Pasta Carbonara", quantity=1, price=157.50)],
            total=157.50,
            status=OrderStatus.READY,
            verification_code="E5F6",
            created_at=now,
        ),
    ]
