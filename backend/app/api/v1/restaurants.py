"""
Restaurant Profile API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_repositories, resolve_restaurant_id
from app.repositories import Repositories
from app.schemas.common import ApiResponse, ok
from app.schemas.restaurant import OnlineStatusUpdate, RestaurantRecord

router = APIRouter(tags=["restaurant"])

FALLBACK_NAME = "MyEzz Restaurant"


@router.get("", response_model=ApiResponse)
async def get_restaurant(
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Restaurant profile; unknown ids get a placeholder so the header still renders."""
    restaurant = repos.restaurants.get(restaurant_id)
    if restaurant is None:
        restaurant = RestaurantRecord(id=restaurant_id, name=FALLBACK_NAME)
    return ok(restaurant)


@router.patch("/status", response_model=ApiResponse)
async def set_online_status(
    data: OnlineStatusUpdate,
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Go online or offline for new orders."""
    restaurant = repos.restaurants.set_online(restaurant_id, data.is_online)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return ok(restaurant)
