"""
Menu API Endpoints
"""
import logging

from fastapi import APIRouter, Depends, status

from app.dependencies import get_repositories, resolve_restaurant_id
from app.repositories import Repositories
from app.schemas.common import ApiResponse, ok
from app.schemas.menu import MenuItemCreate, StockUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["menu"])


@router.get("/menu", response_model=ApiResponse)
async def list_menu_items(
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    return ok(repos.menu.list_items(restaurant_id))


@router.get("/categories", response_model=ApiResponse)
async def list_categories(
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    return ok(repos.menu.list_categories(restaurant_id))


@router.post("/menu", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def add_menu_item(
    data: MenuItemCreate,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    item = repos.menu.create(restaurant_id, data)
    logger.info("Added menu item %s (%s) for %s", item.name, item.id, restaurant_id)
    return ok(item)


@router.delete("/menu/{item_id}", response_model=ApiResponse)
async def delete_menu_item(
    item_id: str,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    repos.menu.delete(restaurant_id, item_id)
    return ok(message="Menu item deleted")


@router.patch("/menu/{item_id}/stock", response_model=ApiResponse)
async def update_stock(
    item_id: str,
    data: StockUpdate,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Mark an item in or out of stock."""
    return ok(repos.menu.set_stock(restaurant_id, item_id, data.in_stock))
