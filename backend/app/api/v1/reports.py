"""
Reports API Endpoints
"""
from fastapi import APIRouter, Depends, Query

from app.dependencies import get_repositories, resolve_restaurant_id
from app.repositories import Repositories
from app.schemas.common import ApiResponse, ok
from app.services import report_service
from app.services.date_ranges import ReportRange, previous_window, resolve_range

router = APIRouter(tags=["reports"])


@router.get("/sales", response_model=ApiResponse)
async def get_sales_report(
    report_range: ReportRange = Query(ReportRange.TODAY, alias="range", description="today, yesterday, 7days or 30days"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Sales trend bucketed by hour (single day) or by day, with change vs the previous period."""
    window = resolve_range(report_range)
    prior = previous_window(window)
    orders = repos.orders.list_between(restaurant_id, window.start, window.end)
    prior_orders = repos.orders.list_between(restaurant_id, prior.start, prior.end)

    report = report_service.build_sales_report(orders, window, prior_orders, prior)
    return ok({"range": report_range.value, **report})


@router.get("/orders", response_model=ApiResponse)
async def get_orders_report(
    report_range: ReportRange = Query(ReportRange.TODAY, alias="range", description="today, yesterday, 7days or 30days"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Received/accepted/rejected/cancelled counts, average prep time and completion rate."""
    window = resolve_range(report_range)
    orders = repos.orders.list_between(restaurant_id, window.start, window.end)
    return ok({"range": report_range.value, **report_service.build_orders_report(orders, window)})


@router.get("/menu", response_model=ApiResponse)
async def get_menu_report(
    report_range: ReportRange = Query(ReportRange.TODAY, alias="range", description="today, yesterday, 7days or 30days"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Top five and least five items by quantity sold."""
    window = resolve_range(report_range)
    orders = repos.orders.list_between(restaurant_id, window.start, window.end)
    return ok({"range": report_range.value, **report_service.build_menu_report(orders, window)})


@router.get("/heatmap", response_model=ApiResponse)
async def get_heatmap(
    report_range: ReportRange = Query(ReportRange.TODAY, alias="range", description="today, yesterday, 7days or 30days"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """Orders per hour of day across the range."""
    window = resolve_range(report_range)
    orders = repos.orders.list_between(restaurant_id, window.start, window.end)
    return ok({"range": report_range.value, **report_service.build_heatmap(orders, window)})


@router.get("/customers", response_model=ApiResponse)
async def get_customer_report(
    report_range: ReportRange = Query(ReportRange.TODAY, alias="range", description="today, yesterday, 7days or 30days"),
    restaurant_id: str = Depends(resolve_restaurant_id),
    repos: Repositories = Depends(get_repositories),
):
    """New vs returning customers, repeat rate and orders per customer."""
    window = resolve_range(report_range)
    orders = repos.orders.list_between(restaurant_id, window.start, window.end)
    return ok({"range": report_range.value, **report_service.build_customer_report(orders, window)})
