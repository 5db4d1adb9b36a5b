"""
In-memory repositories backed by demo fixtures.

Used when the hosted store is not configured or unreachable. State lives for
the life of the process and is lost on restart.
"""
import itertools
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.exceptions import DuplicateOrder, MenuItemNotFound, OrderNotFound
from app.repositories import fixtures
from app.repositories.base import MenuRepository, OrderRepository, RestaurantRepository
from app.schemas.menu import MenuItemCreate, MenuItemRecord
from app.schemas.order import OrderCreate, OrderRecord
from app.schemas.restaurant import RestaurantRecord
from app.utils.timezone_helpers import local_now, to_local


class InMemoryOrderRepository(OrderRepository):

    def __init__(self, orders: Optional[List[OrderRecord]] = None):
        self._orders: Dict[str, List[OrderRecord]] = defaultdict(list)
        for order in orders or []:
            self._orders[order.restaurant_id].append(order)
        self._ids = itertools.count(len(orders or []) + 1)

    def _find(self, restaurant_id: str, order_id: str) -> int:
        for index, order in enumerate(self._orders[restaurant_id]):
            if order.order_id == order_id:
                return index
        raise OrderNotFound(order_id)

    def list_between(self, restaurant_id: str, start: datetime, end: datetime) -> List[OrderRecord]:
        matching = [
            o for o in self._orders[restaurant_id]
            if start <= to_local(o.created_at) <= end
        ]
        return sorted(matching, key=lambda o: to_local(o.created_at))

    def list_recent(self, restaurant_id: str, limit: int, status: Optional[str] = None) -> List[OrderRecord]:
        orders = self._orders[restaurant_id]
        if status:
            orders = [o for o in orders if o.status.value == status]
        return sorted(orders, key=lambda o: to_local(o.created_at), reverse=True)[:limit]

    def get(self, restaurant_id: str, order_id: str) -> OrderRecord:
        return self._orders[restaurant_id][self._find(restaurant_id, order_id)]

    def create(self, restaurant_id: str, data: OrderCreate) -> OrderRecord:
        if any(o.order_id == data.order_id for orders in self._orders.values() for o in orders):
            raise DuplicateOrder(data.order_id)

        order = OrderRecord(
            id=str(next(self._ids)),
            restaurant_id=restaurant_id,
            created_at=local_now(),
            **data.model_dump(),
        )
        self._orders[restaurant_id].append(order)
        return order

    def update(self, restaurant_id: str, order_id: str, changes: Dict[str, Any]) -> OrderRecord:
        index = self._find(restaurant_id, order_id)
        current = self._orders[restaurant_id][index]
        updated = OrderRecord.model_validate({**current.model_dump(), **changes})
        self._orders[restaurant_id][index] = updated
        return updated

    def delete(self, restaurant_id: str, order_id: str) -> None:
        index = self._find(restaurant_id, order_id)
        del self._orders[restaurant_id][index]


class InMemoryMenuRepository(MenuRepository):

    def __init__(self, items: Optional[List[MenuItemRecord]] = None):
        self._items: Dict[str, List[MenuItemRecord]] = defaultdict(list)
        for item in items or []:
            self._items[item.restaurant_id].append(item)
        self._ids = itertools.count(len(items or []) + 1)

    def _find(self, restaurant_id: str, item_id: str) -> int:
        for index, item in enumerate(self._items[restaurant_id]):
            if item.id == item_id:
                return index
        raise MenuItemNotFound(item_id)

    def list_items(self, restaurant_id: str) -> List[MenuItemRecord]:
        return sorted(self._items[restaurant_id], key=lambda i: (i.category, i.name))

    def list_categories(self, restaurant_id: str) -> List[str]:
        return sorted({i.category for i in self._items[restaurant_id]})

    def create(self, restaurant_id: str, data: MenuItemCreate) -> MenuItemRecord:
        item = MenuItemRecord(id=str(next(self._ids)), restaurant_id=restaurant_id, **data.model_dump())
        self._items[restaurant_id].append(item)
        return item

    def delete(self, restaurant_id: str, item_id: str) -> None:
        del self._items[restaurant_id][self._find(restaurant_id, item_id)]

    def set_stock(self, restaurant_id: str, item_id: str, in_stock: bool) -> MenuItemRecord:
        index = self._find(restaurant_id, item_id)
        item = self._items[restaurant_id][index].model_copy(update={"in_stock": in_stock})
        self._items[restaurant_id][index] = item
        return item


class InMemoryRestaurantRepository(RestaurantRepository):

    def __init__(self, restaurants: Optional[List[RestaurantRecord]] = None):
        self._restaurants = {r.id: r for r in restaurants or []}

    def get(self, restaurant_id: str) -> Optional[RestaurantRecord]:
        return self._restaurants.get(restaurant_id)

    def set_online(self, restaurant_id: str, is_online: bool) -> Optional[RestaurantRecord]:
        current = self._restaurants.get(restaurant_id)
        if current is None:
            return None
        updated = current.model_copy(update={"is_online": is_online})
        self._restaurants[restaurant_id] = updated
        return updated


def seeded_repositories(restaurant_id: str, now: Optional[datetime] = None):
    """Order, menu and restaurant repositories preloaded with the demo fixtures."""
    now = now or local_now()
    return (
        InMemoryOrderRepository(fixtures.demo_orders(restaurant_id, now)),
        InMemoryMenuRepository(fixtures.demo_menu(restaurant_id)),
        InMemoryRestaurantRepository([fixtures.demo_restaurant(restaurant_id)]),
    )
