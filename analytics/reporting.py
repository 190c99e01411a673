"""
Purpose: Restaurant analytics, a reporting projection over Order records.
What it does:
For one restaurant and an inclusive [start, end] window:
- orders per day (ISO date) and per hour of day (peak hours)
- item popularity
- average order value
- customer retention rate (share of customers with more than one order)
- delivery performance (average minutes to delivery, late / on-time counts)

Recomputed on demand; nothing here is updated incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Optional

import pandas as pd

from orders.models import Delivery, DeliveryStatus, Order

from .policy import AnalyticsPolicy, default_analytics_policy

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class DeliveryPerformance:
    average_time_minutes: float = 0.0
    late_deliveries: int = 0
    on_time_deliveries: int = 0


@dataclass(frozen=True)
class RestaurantAnalytics:
    restaurant_id: str
    window_start: datetime
    window_end: datetime
    order_count: int = 0
    daily_orders: Dict[str, int] = field(default_factory=dict)
    peak_hours: Dict[int, int] = field(default_factory=dict)
    popular_items: Dict[str, int] = field(default_factory=dict)
    average_order_value: Decimal = Decimal("0.00")
    customer_retention_rate: float = 0.0
    delivery_performance: DeliveryPerformance = field(default_factory=DeliveryPerformance)
    last_updated: datetime = field(default_factory=datetime.utcnow)


def _counts(series: pd.Series) -> Dict:
    # numpy scalars -> plain Python keys so the result stays JSON friendly
    return {
        (key.item() if hasattr(key, "item") else key): int(count)
        for key, count in series.value_counts().sort_index().items()
    }


def compute_restaurant_analytics(
    restaurant_id: str,
    orders: Iterable[Order],
    deliveries: Iterable[Delivery],
    start: datetime,
    end: datetime,
    *,
    policy: Optional[AnalyticsPolicy] = None,
) -> RestaurantAnalytics:
    policy = policy or default_analytics_policy()

    in_window = [
        order for order in orders
        if order.restaurant_id == restaurant_id and start <= order.created_at <= end
    ]
    if not in_window:
        return RestaurantAnalytics(restaurant_id=restaurant_id, window_start=start, window_end=end)

    frame = pd.DataFrame(
        {
            "order_id": [order.id for order in in_window],
            "customer_id": [order.customer_id for order in in_window],
            "created_at": pd.to_datetime([order.created_at for order in in_window]),
            "total_bill": [order.total_bill for order in in_window],
            "items": [list(order.items) for order in in_window],
        }
    )

    daily_orders = _counts(frame["created_at"].dt.strftime("%Y-%m-%d"))
    peak_hours = _counts(frame["created_at"].dt.hour)
    popular_items = _counts(frame["items"].explode().dropna())

    average_order_value = (sum(frame["total_bill"], Decimal("0")) / len(frame)).quantize(CENTS)

    orders_per_customer = frame.groupby("customer_id").size()
    retention_rate = float((orders_per_customer > 1).sum()) / len(orders_per_customer)

    return RestaurantAnalytics(
        restaurant_id=restaurant_id,
        window_start=start,
        window_end=end,
        order_count=len(frame),
        daily_orders=daily_orders,
        peak_hours=peak_hours,
        popular_items=popular_items,
        average_order_value=average_order_value,
        customer_retention_rate=retention_rate,
        delivery_performance=_delivery_performance(in_window, deliveries, policy),
    )


def _delivery_performance(
    orders: Iterable[Order],
    deliveries: Iterable[Delivery],
    policy: AnalyticsPolicy,
) -> DeliveryPerformance:
    placed_at = {order.id: order.created_at for order in orders}
    minutes = [
        (delivery.delivered_at - placed_at[delivery.order_id]).total_seconds() / 60.0
        for delivery in deliveries
        if delivery.status == DeliveryStatus.DELIVERED
        and delivery.delivered_at is not None
        and delivery.order_id in placed_at
    ]
    if not minutes:
        return DeliveryPerformance()

    durations = pd.Series(minutes, dtype="float64")
    late = int((durations > policy.late_after_minutes).sum())
    return DeliveryPerformance(
        average_time_minutes=round(float(durations.mean()), 2),
        late_deliveries=late,
        on_time_deliveries=len(durations) - late,
    )
