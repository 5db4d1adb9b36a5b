"""
Report aggregation service.
Pure functions that reduce a list of orders into the figures shown on the
reports and live-metrics pages. Nothing here touches a store; callers fetch
the rows for a window and pass them in.
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple
from collections import defaultdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from app.models.order import OrderStatus
from app.schemas.order import OrderRecord
from app.services.date_ranges import DateWindow, Granularity
from app.utils.timezone_helpers import to_local

RANKING_SIZE = 5

# Fixed English abbreviations; strftime("%b") follows LC_TIME.
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

ACCEPTED_STATUSES = {
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
    OrderStatus.DELIVERED,
}
FINISHED_STATUSES = {OrderStatus.COMPLETED, OrderStatus.DELIVERED}


def round_half_up(value: float, digits: int = 0):
    """Round like the dashboard does (halves away from zero), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def _total(order: OrderRecord) -> float:
    return float(order.total or 0)


def _local_created(order: OrderRecord) -> datetime:
    return to_local(order.created_at)


def hour_label(hour: int) -> str:
    return f"{hour}:00"


def day_label(moment) -> str:
    return f"{MONTH_ABBR[moment.month - 1]} {moment.day}"


# ─────────────────────────────────────────────────
# FILTERING AND TOTALS
# ─────────────────────────────────────────────────


def orders_in_window(orders: Iterable[OrderRecord], window: DateWindow) -> List[OrderRecord]:
    """Keep the orders whose local creation time falls inside the window."""
    return [o for o in orders if window.contains(_local_created(o))]


def summarize_orders(orders: List[OrderRecord]) -> Dict[str, Any]:
    """GMV, order count and average order value"""
    total_orders = len(orders)
    gmv = sum(_total(o) for o in orders)
    aov = gmv / total_orders if total_orders > 0 else 0
    return {
        "gmv": round_half_up(gmv, 2),
        "totalOrders": total_orders,
        "averageOrderValue": round_half_up(aov, 2),
    }


def percent_change(current: float, previous: float) -> float:
    """
    Signed change from previous to current, in percent, one decimal.

    Growth from nothing is reported as 100; no activity in either period is 0.
    """
    current = current or 0
    previous = previous or 0
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round_half_up((current - previous) / previous * 100, 1)


def compare_summaries(current: Dict[str, Any], previous: Dict[str, Any]) -> Dict[str, float]:
    return {
        "gmvChange": percent_change(current["gmv"], previous["gmv"]),
        "ordersChange": percent_change(current["totalOrders"], previous["totalOrders"]),
        "aovChange": percent_change(current["averageOrderValue"], previous["averageOrderValue"]),
    }


# ─────────────────────────────────────────────────
# TREND BUCKETS
# ─────────────────────────────────────────────────


def hourly_buckets(orders: Iterable[OrderRecord]) -> List[Dict[str, Any]]:
    """Dense 0-23 hour buckets of sales and order count."""
    stats = {h: {"sales": 0.0, "orderCount": 0} for h in range(24)}
    for order in orders:
        h = _local_created(order).hour
        stats[h]["sales"] += _total(order)
        stats[h]["orderCount"] += 1

    return [
        {"label": hour_label(h), "hour": h, "sales": round_half_up(s["sales"], 2), "orderCount": s["orderCount"]}
        for h, s in stats.items()
    ]


def daily_buckets(orders: Iterable[OrderRecord], window: DateWindow) -> List[Dict[str, Any]]:
    """One bucket per calendar day in the window, oldest first, zero-filled."""
    stats = {d: {"sales": 0.0, "orderCount": 0} for d in window.days()}
    for order in orders:
        day = _local_created(order).date()
        # Orders outside the window have no bucket and are not counted.
        if day not in stats:
            continue
        stats[day]["sales"] += _total(order)
        stats[day]["orderCount"] += 1

    return [
        {"label": day_label(d), "date": d.isoformat(), "sales": round_half_up(s["sales"], 2), "orderCount": s["orderCount"]}
        for d, s in stats.items()
    ]


def bucket_orders(orders: List[OrderRecord], window: DateWindow) -> List[Dict[str, Any]]:
    """Bucket by hour for single-day windows, by day otherwise."""
    in_window = orders_in_window(orders, window)
    if window.granularity == Granularity.HOURLY:
        return hourly_buckets(in_window)
    return daily_buckets(in_window, window)


def busy_hours(orders: Iterable[OrderRecord]) -> List[Dict[str, Any]]:
    """Hour-of-day histogram across every day in the range"""
    return [
        {"hour": b["hour"], "label": b["label"], "orders": b["orderCount"], "sales": b["sales"]}
        for b in hourly_buckets(orders)
    ]


# ─────────────────────────────────────────────────
# MENU ITEMS
# ─────────────────────────────────────────────────


def item_stats(orders: Iterable[OrderRecord]) -> Dict[str, Dict[str, float]]:
    """
    Quantity sold ("orders") and revenue per item name.
    Insertion order follows first appearance, which makes ranking ties stable.
    """
    stats: Dict[str, Dict[str, float]] = {}
    for order in orders:
        for item in order.items:
            if not item.name:
                continue
            quantity = item.quantity if item.quantity is not None else 1
            price = item.price or 0
            entry = stats.setdefault(item.name, {"orders": 0, "revenue": 0.0})
            entry["orders"] += quantity
            entry["revenue"] += price * quantity
    return stats


def rank_items(orders: Iterable[OrderRecord], limit: int = RANKING_SIZE) -> Tuple[List[dict], List[dict]]:
    """
    Return (top, least) selling items.
    top is sorted by quantity descending; least holds the tail of that same
    ordering reported least-sold first.
    """
    ranked = [
        {"name": name, "orders": s["orders"], "revenue": round_half_up(s["revenue"], 2)}
        for name, s in item_stats(orders).items()
    ]
    ranked.sort(key=lambda x: x["orders"], reverse=True)
    top = ranked[:limit]
    least = list(reversed(ranked[-limit:])) if ranked else []
    return top, least


# ─────────────────────────────────────────────────
# CUSTOMERS AND ORDER OUTCOMES
# ─────────────────────────────────────────────────


def customer_stats(orders: Iterable[OrderRecord]) -> Dict[str, Any]:
    """New vs returning customers. Names are matched exactly; unnamed orders are ignored."""
    per_customer: Dict[str, int] = defaultdict(int)
    for order in orders:
        if order.customer_name:
            per_customer[order.customer_name] += 1

    unique = len(per_customer)
    returning = sum(1 for count in per_customer.values() if count > 1)
    named_orders = sum(per_customer.values())

    return {
        "uniqueCustomers": unique,
        "newCustomers": unique - returning,
        "returningCustomers": returning,
        "repeatRate": round_half_up(returning / unique * 100) if unique else 0,
        "avgOrdersPerCustomer": round_half_up(named_orders / unique, 1) if unique else 0,
    }


def order_outcomes(orders: List[OrderRecord]) -> Dict[str, Any]:
    received = len(orders)
    by_status: Dict[str, int] = defaultdict(int)
    prep_times = []
    for order in orders:
        by_status[order.status.value] += 1
        if order.prep_time is not None:
            prep_times.append(order.prep_time)

    accepted = sum(by_status[s.value] for s in ACCEPTED_STATUSES)
    finished = sum(by_status[s.value] for s in FINISHED_STATUSES)

    return {
        "received": received,
        "accepted": accepted,
        "rejected": by_status[OrderStatus.REJECTED.value],
        "cancelled": by_status[OrderStatus.CANCELLED.value],
        "avgPrepTime": round_half_up(sum(prep_times) / len(prep_times), 1) if prep_times else 0,
        "completionRate": round_half_up(finished / received * 100, 1) if received else 0,
        "byStatus": {s.value: by_status[s.value] for s in OrderStatus},
    }


# ─────────────────────────────────────────────────
# RESPONSE SHAPING
# ─────────────────────────────────────────────────


def _window_meta(window: DateWindow) -> Dict[str, Any]:
    return {
        "start": window.start.isoformat(),
        "end": window.end.isoformat(),
        "granularity": window.granularity.value,
    }


def build_sales_report(
    orders: List[OrderRecord],
    window: DateWindow,
    previous_orders: Optional[List[OrderRecord]] = None,
    previous: Optional[DateWindow] = None,
) -> Dict[str, Any]:
    current = orders_in_window(orders, window)
    summary = summarize_orders(current)
    report = {
        **_window_meta(window),
        "buckets": bucket_orders(current, window),
        "summary": summary,
    }
    if previous is not None and previous_orders is not None:
        prior = summarize_orders(orders_in_window(previous_orders, previous))
        report["previous"] = prior
        report["comparison"] = compare_summaries(summary, prior)
    return report


def build_orders_report(orders: List[OrderRecord], window: DateWindow) -> Dict[str, Any]:
    return {**_window_meta(window), **order_outcomes(orders_in_window(orders, window))}


def build_menu_report(orders: List[OrderRecord], window: DateWindow) -> Dict[str, Any]:
    top, least = rank_items(orders_in_window(orders, window))
    return {**_window_meta(window), "topItems": top, "leastItems": least}


def build_heatmap(orders: List[OrderRecord], window: DateWindow) -> Dict[str, Any]:
    return {**_window_meta(window), "hours": busy_hours(orders_in_window(orders, window))}


def build_customer_report(orders: List[OrderRecord], window: DateWindow) -> Dict[str, Any]:
    return {**_window_meta(window), **customer_stats(orders_in_window(orders, window))}


def build_today_metrics(
    today_orders: List[OrderRecord],
    today: DateWindow,
    yesterday_orders: List[OrderRecord],
    yesterday: DateWindow,
) -> Dict[str, Any]:
    """Live metrics card: today's totals, hourly trend and change vs yesterday"""
    current = orders_in_window(today_orders, today)
    summary = summarize_orders(current)
    prior = summarize_orders(orders_in_window(yesterday_orders, yesterday))
    return {
        **summary,
        "date": today.start.date().isoformat(),
        "hourly": hourly_buckets(current),
        "yesterday": prior,
        "comparison": compare_summaries(summary, prior),
    }
