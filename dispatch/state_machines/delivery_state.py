from dataclasses import replace
from datetime import datetime
from typing import Optional

from orders.errors import InvalidTransition
from orders.models import Delivery, DeliveryStatus, Order, OrderStatus


def accept_delivery(delivery: Delivery, now: Optional[datetime] = None) -> Delivery:
    """
    Courier accepted the assignment: ASSIGNED -> ACCEPTED.
    """
    if delivery.status != DeliveryStatus.ASSIGNED:
        raise InvalidTransition(f"Cannot accept delivery {delivery.id} from {delivery.status.value}")
    return replace(delivery, status=DeliveryStatus.ACCEPTED, accepted_at=now or datetime.utcnow())


def mark_delivered(delivery: Delivery, now: Optional[datetime] = None) -> Delivery:
    """
    Order handed to the customer: ACCEPTED -> DELIVERED.
    """
    if delivery.status != DeliveryStatus.ACCEPTED:
        raise InvalidTransition(f"Cannot mark delivery {delivery.id} delivered from {delivery.status.value}")
    return replace(delivery, status=DeliveryStatus.DELIVERED, delivered_at=now or datetime.utcnow())


def order_status_for(delivery: Delivery) -> OrderStatus:
    # an order only leaves PENDING through its delivery
    return OrderStatus(delivery.status.value)


def sync_order_status(order: Order, delivery: Delivery) -> Order:
    return replace(order, status=order_status_for(delivery))
