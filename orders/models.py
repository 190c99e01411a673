"""
Purpose: Domain models for the food-delivery backend.
What it does:
- Defines core records:
- User (id, username, email, phone number, role)
- Restaurant (owner, name, address)
- MenuItem (restaurant, price, stock in kg)
- Order (customer, restaurant, item ids, snapshotted total bill, status)
- Delivery (order, courier, lifecycle timestamps)
- BatchOrder (courier, order ids, optimized route, total distance)

Defines enums:
- UserRole = Customer | RestaurantOwner | DeliveryPerson
- OrderStatus = pending | assigned | accepted | delivered
- DeliveryStatus = assigned | accepted | delivered
- BatchStatus = pending | in_progress | completed | cancelled

Rule: No routing calls, no batching logic. Models only.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple


def new_id() -> str:
    return str(uuid.uuid4())


class UserRole(str, Enum):
    CUSTOMER = "Customer"
    RESTAURANT_OWNER = "RestaurantOwner"
    DELIVERY_PERSON = "DeliveryPerson"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    DELIVERED = "delivered"


class DeliveryStatus(str, Enum):
    ASSIGNED = "assigned"
    ACCEPTED = "accepted"
    DELIVERED = "delivered"


class BatchStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class User:
    id: str
    username: str
    email: str
    phone_number: str
    role: UserRole
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def new(cls, username: str, email: str, phone_number: str, role: str | UserRole) -> User:
        return cls(
            id=new_id(),
            username=username,
            email=email,
            phone_number=phone_number,
            role=UserRole(role),
        )


@dataclass(frozen=True)
class Restaurant:
    id: str
    owner_id: str
    name: str
    description: str
    address: str
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def new(cls, owner_id: str, name: str, description: str, address: str) -> Restaurant:
        return cls(id=new_id(), owner_id=owner_id, name=name, description=description, address=address)


@dataclass(frozen=True)
class MenuItem:
    """
    A priced catalog entry. Owned by exactly one Restaurant.
    """
    id: str
    restaurant_id: str
    name: str
    description: str
    price: Decimal
    quantity_kg: float
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def new(
        cls,
        restaurant_id: str,
        name: str,
        description: str,
        price: Decimal,
        quantity_kg: float,
    ) -> MenuItem:
        return cls(
            id=new_id(),
            restaurant_id=restaurant_id,
            name=name,
            description=description,
            price=Decimal(str(price)),
            quantity_kg=quantity_kg,
        )


@dataclass(frozen=True)
class Order:
    """
    A customer order. total_bill is derived from the menu prices at creation
    (see orders.billing) and is never set by a client.
    """
    id: str
    customer_id: str
    restaurant_id: str
    items: Tuple[str, ...]
    total_bill: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class Delivery:
    id: str
    order_id: str
    courier_id: str
    status: DeliveryStatus = DeliveryStatus.ASSIGNED
    created_at: datetime = field(default_factory=datetime.utcnow)
    accepted_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    def new(cls, order_id: str, courier_id: str) -> Delivery:
        return cls(id=new_id(), order_id=order_id, courier_id=courier_id)


@dataclass(frozen=True)
class BatchOrder:
    """
    Output of batch dispatch: one courier, several orders, one visiting sequence.
    Immutable once computed except for status (see dispatch.state_machines).
    """
    id: str
    courier_id: str
    order_ids: Tuple[str, ...]

    # visiting sequence of "lat,lon" strings, depot first
    optimized_route: List[str]
    total_distance: float  # kilometers

    status: BatchStatus = BatchStatus.PENDING
    created_at: datetime = field(default_factory=datetime.utcnow)

    @staticmethod
    def new(courier_id: str, order_ids: Tuple[str, ...], optimized_route: List[str], total_distance: float) -> BatchOrder:
        return BatchOrder(
            id=new_id(),
            courier_id=courier_id,
            order_ids=tuple(order_ids),
            optimized_route=list(optimized_route),
            total_distance=total_distance,
        )
