"""
Repositories backed by the hosted relational store (SQLAlchemy).
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.exceptions import DuplicateOrder, MenuItemNotFound, OrderNotFound, StoreError
from app.models.menu_item import MenuItem
from app.models.order import Order
from app.models.restaurant import Restaurant
from app.repositories.base import MenuRepository, OrderRepository, RestaurantRepository
from app.schemas.menu import MenuItemCreate, MenuItemRecord
from app.schemas.order import OrderCreate, OrderRecord
from app.schemas.restaurant import RestaurantRecord
from app.utils.timezone_helpers import local_now, to_aware

logger = logging.getLogger(__name__)


def order_records(rows: Iterable[Order]) -> List[OrderRecord]:
    """Convert rows one at a time; an unreadable row (e.g. unknown status) is logged and skipped."""
    records = []
    for row in rows:
        try:
            records.append(OrderRecord.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping unreadable order %s: %s", row.order_id, exc.errors()[0]["msg"])
    return records


@contextmanager
def store_session(session_factory: sessionmaker, failure: str):
    """
    Yield a session; store errors and rows that cannot be read are rolled back,
    logged and re-raised as StoreError.
    """
    db: Session = session_factory()
    try:
        yield db
    except (SQLAlchemyError, ValidationError) as exc:
        db.rollback()
        logger.exception(failure)
        raise StoreError(failure) from exc
    finally:
        db.close()


class SqlOrderRepository(OrderRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _row(db: Session, restaurant_id: str, order_id: str) -> Order:
        order = db.query(Order).filter(
            Order.restaurant_id == restaurant_id,
            Order.order_id == order_id,
        ).first()
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def list_between(self, restaurant_id: str, start: datetime, end: datetime) -> List[OrderRecord]:
        with store_session(self._session_factory, "Failed to fetch orders") as db:
            rows = db.query(Order).filter(
                Order.restaurant_id == restaurant_id,
                Order.created_at >= to_aware(start),
                Order.created_at <= to_aware(end),
            ).order_by(Order.created_at).all()
            return order_records(rows)

    def list_recent(self, restaurant_id: str, limit: int, status: Optional[str] = None) -> List[OrderRecord]:
        with store_session(self._session_factory, "Failed to fetch orders") as db:
            query = db.query(Order).filter(Order.restaurant_id == restaurant_id)
            if status:
                query = query.filter(Order.status == status)
            rows = query.order_by(Order.created_at.desc()).limit(limit).all()
            return order_records(rows)

    def get(self, restaurant_id: str, order_id: str) -> OrderRecord:
        with store_session(self._session_factory, "Failed to fetch order") as db:
            return OrderRecord.model_validate(self._row(db, restaurant_id, order_id))

    def create(self, restaurant_id: str, data: OrderCreate) -> OrderRecord:
        with store_session(self._session_factory, "Failed to create order") as db:
            if db.query(Order.id).filter(Order.order_id == data.order_id).first():
                raise DuplicateOrder(data.order_id)

            order = Order(
                restaurant_id=restaurant_id,
                order_id=data.order_id,
                customer_name=data.customer_name,
                items=[item.model_dump(exclude_none=True) for item in data.items],
                total=data.total,
                status=data.status.value,
                verification_code=data.verification_code,
                created_at=to_aware(local_now()),
            )
            db.add(order)
            db.commit()
            db.refresh(order)
            return OrderRecord.model_validate(order)

    def update(self, restaurant_id: str, order_id: str, changes: Dict[str, Any]) -> OrderRecord:
        with store_session(self._session_factory, "Failed to update order") as db:
            order = self._row(db, restaurant_id, order_id)
            for field, value in changes.items():
                if isinstance(value, datetime):
                    value = to_aware(value)
                setattr(order, field, value)
            db.commit()
            db.refresh(order)
            return OrderRecord.model_validate(order)

    def delete(self, restaurant_id: str, order_id: str) -> None:
        with store_session(self._session_factory, "Failed to delete order") as db:
            db.delete(self._row(db, restaurant_id, order_id))
            db.commit()


class SqlMenuRepository(MenuRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def _row(db: Session, restaurant_id: str, item_id: str) -> MenuItem:
        item = db.query(MenuItem).filter(
            MenuItem.restaurant_id == restaurant_id,
            MenuItem.id == item_id,
        ).first()
        if item is None:
            raise MenuItemNotFound(item_id)
        return item

    def list_items(self, restaurant_id: str) -> List[MenuItemRecord]:
        with store_session(self._session_factory, "Failed to fetch menu items") as db:
            rows = db.query(MenuItem).filter(
                MenuItem.restaurant_id == restaurant_id
            ).order_by(MenuItem.category, MenuItem.name).all()
            return [MenuItemRecord.model_validate(r) for r in rows]

    def list_categories(self, restaurant_id: str) -> List[str]:
        with store_session(self._session_factory, "Failed to fetch categories") as db:
            rows = db.query(MenuItem.category).filter(
                MenuItem.restaurant_id == restaurant_id
            ).distinct().order_by(MenuItem.category).all()
            return [r[0] for r in rows]

    def create(self, restaurant_id: str, data: MenuItemCreate) -> MenuItemRecord:
        with store_session(self._session_factory, "Failed to add menu item") as db:
            item = MenuItem(restaurant_id=restaurant_id, **data.model_dump())
            db.add(item)
            db.commit()
            db.refresh(item)
            return MenuItemRecord.model_validate(item)

    def delete(self, restaurant_id: str, item_id: str) -> None:
        with store_session(self._session_factory, "Failed to delete menu item") as db:
            db.delete(self._row(db, restaurant_id, item_id))
            db.commit()

    def set_stock(self, restaurant_id: str, item_id: str, in_stock: bool) -> MenuItemRecord:
        with store_session(self._session_factory, "Failed to update stock") as db:
            item = self._row(db, restaurant_id, item_id)
            item.in_stock = in_stock
            db.commit()
            db.refresh(item)
            return MenuItemRecord.model_validate(item)


class SqlRestaurantRepository(RestaurantRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, restaurant_id: str) -> Optional[RestaurantRecord]:
        with store_session(self._session_factory, "Failed to fetch restaurant") as db:
            restaurant = db.get(Restaurant, restaurant_id)
            return RestaurantRecord.model_validate(restaurant) if restaurant else None

    def set_online(self, restaurant_id: str, is_online: bool) -> Optional[RestaurantRecord]:
        with store_session(self._session_factory, "Failed to update restaurant") as db:
            restaurant = db.get(Restaurant, restaurant_id)
            if restaurant is None:
                return None
            restaurant.is_online = is_online
            db.commit()
            db.refresh(restaurant)
            return RestaurantRecord.model_validate(restaurant)
