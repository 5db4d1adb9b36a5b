"""
Orders API Endpoints
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.config import Settings, get_settings
from app.dependencies import get_repositories, resolve_restaurant_id
from app.models.order import OrderStatus
from app.repositories import Repositories
from app.schemas.common import ApiResponse, ok
from app.schemas.order import AcceptOrder, OrderCreate, RejectOrder
from app.services import order_workflow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"])


@router.get("", response_model=ApiResponse)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Only orders in this status"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_settings),
):
    """Most recent orders, newest first."""
    orders = repos.orders.list_recent(
        restaurant_id, settings.RECENT_ORDERS_LIMIT, status.value if status else None
    )
    return ok(orders)


@router.post("", response_model=ApiResponse)
async def create_order(
    data: OrderCreate,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Place an order (used by the dashboard's test tooling)."""
    order = order_workflow.place_order(repos.orders, restaurant_id, data)
    return ok(order)


@router.get("/{order_id}", response_model=ApiResponse)
async def get_order(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    return ok(repos.orders.get(restaurant_id, order_id))


@router.delete("/{order_id}", response_model=ApiResponse)
async def delete_order(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Administrative removal by order code."""
    repos.orders.delete(restaurant_id, order_id)
    logger.info("Deleted order: %s", order_id)
    return ok(message="Order deleted")


# ─────────────────────────────────────────────────
# STATUS TRANSITIONS
# ─────────────────────────────────────────────────


@router.post("/{order_id}/accept", response_model=ApiResponse)
async def accept_order(
    order_id: str,
    data: AcceptOrder,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Accept a new order with a preparation estimate."""
    return ok(order_workflow.accept(repos.orders, restaurant_id, order_id, data.prep_time))


@router.post("/{order_id}/reject", response_model=ApiResponse)
async def reject_order(
    order_id: str,
    data: Optional[RejectOrder] = None,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    reason = data.reason if data else None
    return ok(order_workflow.reject(repos.orders, restaurant_id, order_id, reason))


@router.post("/{order_id}/ready", response_model=ApiResponse)
async def mark_ready(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    return ok(order_workflow.transition(repos.orders, restaurant_id, order_id, OrderStatus.READY))


@router.post("/{order_id}/handover", response_model=ApiResponse)
async def hand_to_rider(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Hand a ready order to the delivery rider."""
    return ok(order_workflow.transition(repos.orders, restaurant_id, order_id, OrderStatus.DELIVERED))


@router.post("/{order_id}/complete", response_model=ApiResponse)
async def complete_order(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Close a ready order picked up at the counter."""
    return ok(order_workflow.transition(repos.orders, restaurant_id, order_id, OrderStatus.COMPLETED))


@router.post("/{order_id}/cancel", response_model=ApiResponse)
async def cancel_order(
    order_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    return ok(order_workflow.transition(repos.orders, restaurant_id, order_id, OrderStatus.CANCELLED))
