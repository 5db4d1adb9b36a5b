"""
Repository interfaces.

Handlers and services only ever talk to these; whether the rows come from the
hosted store or from in-memory fixtures is decided once at startup.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.schemas.menu import MenuItemCreate, MenuItemRecord
from app.schemas.order import OrderCreate, OrderRecord
from app.schemas.restaurant import RestaurantRecord


class OrderRepository(ABC):

    @abstractmethod
    def list_between(self, restaurant_id: str, start: datetime, end: datetime) -> List[OrderRecord]:
        """Orders created in [start, end], oldest first."""

    @abstractmethod
    def list_recent(self, restaurant_id: str, limit: int, status: Optional[str] = None) -> List[OrderRecord]:
        """Newest orders first."""

    @abstractmethod
    def get(self, restaurant_id: str, order_id: str) -> OrderRecord:
        """Look up by order code. Raises OrderNotFound."""

    @abstractmethod
    def create(self, restaurant_id: str, data: OrderCreate) -> OrderRecord:
        ...

    @abstractmethod
    def update(self, restaurant_id: str, order_id: str, changes: Dict[str, Any]) -> OrderRecord:
        ...

    @abstractmethod
    def delete(self, restaurant_id: str, order_id: str) -> None:
        ...


class MenuRepository(ABC):

    @abstractmethod
    def list_items(self, restaurant_id: str) -> List[MenuItemRecord]:
        ...

    @abstractmethod
    def list_categories(self, restaurant_id: str) -> List[str]:
        ...

    @abstractmethod
    def create(self, restaurant_id: str, data: MenuItemCreate) -> MenuItemRecord:
        ...

    @abstractmethod
    def delete(self, restaurant_id: str, item_id: str) -> None:
        ...

    @abstractmethod
    def set_stock(self, restaurant_id: str, item_id: str, in_stock: bool) -> MenuItemRecord:
        ...


class RestaurantRepository(ABC):

    @abstractmethod
    def get(self, restaurant_id: str) -> Optional[RestaurantRecord]:
        ...

    @abstractmethod
    def set_online(self, restaurant_id: str, is_online: bool) -> Optional[RestaurantRecord]:
        ...
