"""
Common Dependencies for FastAPI Routes
"""
import logging
import re
from typing import Optional

from fastapi import Depends, HTTPException, Query, Request, status

from app.config import Settings, get_settings
from app.repositories import Repositories

logger = logging.getLogger(__name__)

RESTAURANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_repositories(request: Request) -> Repositories:
    """Repositories chosen at startup"""
    return request.app.state.repositories


async def resolve_restaurant_id(
    restaurant_id: Optional[str] = Query(None, alias="restaurantId", description="Restaurant (tenant) ID"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Resolve the tenant for this request.

    The id is taken from the query string as-is; nothing checks that the caller
    may act for that restaurant. A missing or malformed id falls back to
    DEFAULT_RESTAURANT_ID unless REQUIRE_RESTAURANT_ID is set.
    """
    candidate = (restaurant_id or "").strip()
    if candidate and RESTAURANT_ID_PATTERN.match(candidate):
        return candidate

    if settings.REQUIRE_RESTAURANT_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A valid restaurantId query parameter is required",
        )

    logger.warning(
        "restaurantId %r missing or invalid, using default %s",
        restaurant_id, settings.DEFAULT_RESTAURANT_ID,
    )
    return settings.DEFAULT_RESTAURANT_ID
