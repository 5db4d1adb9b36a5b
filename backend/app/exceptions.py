"""
Domain exceptions raised by repositories and services
"""


class StoreError(Exception):
    """The backing store could not be read or written."""


class OrderNotFound(Exception):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class MenuItemNotFound(Exception):
    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Menu item {item_id} not found")


class InvalidTransition(Exception):
    def __init__(self, order_id: str, current: str, target: str):
        self.order_id = order_id
        self.current = current
        self.target = target
        super().__init__(f"Order {order_id} cannot move from {current} to {target}")


class DuplicateOrder(Exception):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} already exists")
