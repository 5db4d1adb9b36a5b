"""
Order status transitions driven from the kanban board.
"""
import logging
import secrets
import string
from typing import Any, Dict, Optional

from app.exceptions import InvalidTransition
from app.models.order import OrderStatus
from app.repositories.base import OrderRepository
from app.schemas.order import OrderCreate, OrderRecord
from app.utils.timezone_helpers import local_now

logger = logging.getLogger(__name__)

# Allowed moves; anything not listed (including every terminal state) is refused.
TRANSITIONS = {
    OrderStatus.NEW: {OrderStatus.PREPARING, OrderStatus.REJECTED, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.DELIVERED, OrderStatus.COMPLETED, OrderStatus.CANCELLED},
}

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def new_verification_code(length: int = 4) -> str:
    return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


def new_order_code() -> str:
    return f"ORD{secrets.token_hex(3).upper()}"


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in TRANSITIONS.get(current, set())


def place_order(repo: OrderRepository, restaurant_id: str, data: OrderCreate) -> OrderRecord:
    """Fill in generated codes and store a new order."""
    data = data.model_copy(update={
        "order_id": data.order_id or new_order_code(),
        "verification_code": data.verification_code or new_verification_code(),
    })
    order = repo.create(restaurant_id, data)
    logger.info("New order created: %s - %.2f", order.order_id, order.total or 0)
    return order


def transition(
    repo: OrderRepository,
    restaurant_id: str,
    order_id: str,
    target: OrderStatus,
    changes: Optional[Dict[str, Any]] = None,
) -> OrderRecord:
    order = repo.get(restaurant_id, order_id)
    if not can_transition(order.status, target):
        raise InvalidTransition(order_id, order.status.value, target.value)

    updated = repo.update(restaurant_id, order_id, {"status": target.value, **(changes or {})})
    logger.info("Order %s moved %s -> %s", order_id, order.status.value, target.value)
    return updated


def accept(repo: OrderRepository, restaurant_id: str, order_id: str, prep_time: int) -> OrderRecord:
    return transition(
        repo, restaurant_id, order_id, OrderStatus.PREPARING,
        {"prep_time": prep_time, "accepted_at": local_now()},
    )


def reject(repo: OrderRepository, restaurant_id: str, order_id: str, reason: Optional[str] = None) -> OrderRecord:
    return transition(repo, restaurant_id, order_id, OrderStatus.REJECTED, {"rejection_reason": reason})
