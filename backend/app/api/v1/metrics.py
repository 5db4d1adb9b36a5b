"""
Live Metrics API Endpoints
"""
import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_repositories, resolve_restaurant_id
from app.repositories import Repositories
from app.schemas.common import ApiResponse, ok
from app.services import report_service
from app.services.date_ranges import ReportRange, resolve_range

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


@router.get("/today", response_model=ApiResponse)
async def get_today_metrics(
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Today's GMV, order count and AOV with hourly trend and change vs yesterday."""
    today = resolve_range(ReportRange.TODAY)
    yesterday = resolve_range(ReportRange.YESTERDAY, now=today.start)
    today_orders = repos.orders.list_between(restaurant_id, today.start, today.end)
    yesterday_orders = repos.orders.list_between(restaurant_id, yesterday.start, yesterday.end)

    metrics = report_service.build_today_metrics(today_orders, today, yesterday_orders, yesterday)
    logger.info(
        "Metrics for %s: GMV=%.2f, Orders=%d, AOV=%.2f",
        restaurant_id, metrics["gmv"], metrics["totalOrders"], metrics["averageOrderValue"],
    )
    return ok(metrics)
