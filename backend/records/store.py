"""
Purpose: Database-backed record store for the running service.
What it does:
- ModelRecordMap: the RecordMap operations (get, insert, values, update,
  add_unique) over one Django model, converting rows to and from the frozen
  domain records
- DatabaseStore: one ModelRecordMap per entity, same attribute names as
  storage.InMemoryStore

Rule: update() runs in a transaction with the row locked (select_for_update),
so concurrent read-modify-writes of one key are serialized by the database.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Type, TypeVar

from django.db import IntegrityError, models, transaction

from loyalty.models import LoyaltyProgram, Tier
from orders.models import (
    BatchOrder,
    BatchStatus,
    Delivery,
    DeliveryStatus,
    MenuItem,
    Order,
    OrderStatus,
    Restaurant,
    User,
    UserRole,
)
from pricing.models import AdjustmentType, PricingRule, condition_from_record, condition_to_record

from .models import (
    BatchOrderRecord,
    DeliveryRecord,
    LoyaltyProgramRecord,
    MenuItemRecord,
    OrderRecord,
    PricingRuleRecord,
    RestaurantRecord,
    UserRecord,
)

T = TypeVar("T")


class ModelRecordMap(Generic[T]):
    """
    Map of primary key -> domain record stored in one Django model.

    to_row builds the model's non-key column values from a record;
    to_record rebuilds the record from a model instance.
    """

    def __init__(
        self,
        model: Type[models.Model],
        to_row: Callable[[T], dict],
        to_record: Callable[[models.Model], T],
    ) -> None:
        self.model = model
        self.to_row = to_row
        self.to_record = to_record

    def get(self, key: str) -> Optional[T]:
        row = self.model.objects.filter(pk=key).first()
        return None if row is None else self.to_record(row)

    def insert(self, key: str, record: T) -> None:
        self.model.objects.update_or_create(pk=key, defaults=self.to_row(record))

    def values(self) -> List[T]:
        return [self.to_record(row) for row in self.model.objects.order_by("pk")]

    def update(self, key: str, fn: Callable[[Optional[T]], T]) -> T:
        """
        Read the current record (or None), compute the replacement with fn and
        store it inside one transaction. fn may run twice when another writer
        creates the row first; it must not have side effects beyond its result.
        """
        with transaction.atomic():
            row = self.model.objects.select_for_update().filter(pk=key).first()
            if row is None:
                record = fn(None)
                try:
                    with transaction.atomic():
                        self.model.objects.create(pk=key, **self.to_row(record))
                    return record
                except IntegrityError:
                    # created concurrently: fall through and update the winner's row
                    row = self.model.objects.select_for_update().get(pk=key)

            record = fn(self.to_record(row))
            self.model.objects.filter(pk=key).update(**self.to_row(record))
            return record

    def add_unique(self, key: str, record: T, field_name: str) -> bool:
        """
        Insert record unless a row already has the same field_name value.
        The column carries a unique constraint, so a concurrent insert that
        passes the check still fails in the database.
        """
        row = self.to_row(record)
        try:
            with transaction.atomic():
                if self.model.objects.filter(**{field_name: row[field_name]}).exists():
                    return False
                self.model.objects.create(pk=key, **row)
        except IntegrityError:
            return False
        return True

    def __contains__(self, key: object) -> bool:
        return self.model.objects.filter(pk=key).exists()

    def __len__(self) -> int:
        return self.model.objects.count()


# --- row <-> record conversions ---

def _user_row(user: User) -> dict:
    return {
        "username": user.username,
        "email": user.email,
        "phone_number": user.phone_number,
        "role": user.role.value,
        "created_at": user.created_at,
    }


def _user(row: UserRecord) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        phone_number=row.phone_number,
        role=UserRole(row.role),
        created_at=row.created_at,
    )


def _restaurant_row(restaurant: Restaurant) -> dict:
    return {
        "owner_id": restaurant.owner_id,
        "name": restaurant.name,
        "description": restaurant.description,
        "address": restaurant.address,
        "created_at": restaurant.created_at,
    }


def _restaurant(row: RestaurantRecord) -> Restaurant:
    return Restaurant(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        description=row.description,
        address=row.address,
        created_at=row.created_at,
    )


def _menu_item_row(item: MenuItem) -> dict:
    return {
        "restaurant_id": item.restaurant_id,
        "name": item.name,
        "description": item.description,
        "price": item.price,
        "quantity_kg": item.quantity_kg,
        "created_at": item.created_at,
    }


def _menu_item(row: MenuItemRecord) -> MenuItem:
    return MenuItem(
        id=row.id,
        restaurant_id=row.restaurant_id,
        name=row.name,
        description=row.description,
        price=row.price,
        quantity_kg=row.quantity_kg,
        created_at=row.created_at,
    )


def _order_row(order: Order) -> dict:
    return {
        "customer_id": order.customer_id,
        "restaurant_id": order.restaurant_id,
        "items": list(order.items),
        "total_bill": order.total_bill,
        "status": order.status.value,
        "created_at": order.created_at,
    }


def _order(row: OrderRecord) -> Order:
    return Order(
        id=row.id,
        customer_id=row.customer_id,
        restaurant_id=row.restaurant_id,
        items=tuple(row.items),
        total_bill=row.total_bill,
        status=OrderStatus(row.status),
        created_at=row.created_at,
    )


def _delivery_row(delivery: Delivery) -> dict:
    return {
        "order_id": delivery.order_id,
        "courier_id": delivery.courier_id,
        "status": delivery.status.value,
        "created_at": delivery.created_at,
        "accepted_at": delivery.accepted_at,
        "delivered_at": delivery.delivered_at,
    }


def _delivery(row: DeliveryRecord) -> Delivery:
    return Delivery(
        id=row.id,
        order_id=row.order_id,
        courier_id=row.courier_id,
        status=DeliveryStatus(row.status),
        created_at=row.created_at,
        accepted_at=row.accepted_at,
        delivered_at=row.delivered_at,
    )


def _batch_row(batch: BatchOrder) -> dict:
    return {
        "courier_id": batch.courier_id,
        "order_ids": list(batch.order_ids),
        "optimized_route": list(batch.optimized_route),
        "total_distance": batch.total_distance,
        "status": batch.status.value,
        "created_at": batch.created_at,
    }


def _batch(row: BatchOrderRecord) -> BatchOrder:
    return BatchOrder(
        id=row.id,
        courier_id=row.courier_id,
        order_ids=tuple(row.order_ids),
        optimized_route=list(row.optimized_route),
        total_distance=row.total_distance,
        status=BatchStatus(row.status),
        created_at=row.created_at,
    )


def _rule_row(rule: PricingRule) -> dict:
    return {
        "restaurant_id": rule.restaurant_id,
        "condition": condition_to_record(rule.condition),
        "adjustment_type": rule.adjustment_type.value,
        "adjustment_value": rule.adjustment_value,
        "priority": rule.priority,
        "created_at": rule.created_at,
        "sequence": rule.sequence,
    }


def _rule(row: PricingRuleRecord) -> PricingRule:
    return PricingRule(
        id=row.id,
        restaurant_id=row.restaurant_id,
        condition=condition_from_record(row.condition),
        adjustment_type=AdjustmentType(row.adjustment_type),
        adjustment_value=row.adjustment_value,
        priority=row.priority,
        created_at=row.created_at,
        sequence=row.sequence,
    )


def _program_row(program: LoyaltyProgram) -> dict:
    return {
        "program_id": program.id,
        "points": program.points,
        "historical_points": program.historical_points,
        "tier": program.tier.value,
        "rewards": list(program.rewards),
        "created_at": program.created_at,
    }


def _program(row: LoyaltyProgramRecord) -> LoyaltyProgram:
    return LoyaltyProgram(
        id=row.program_id,
        user_id=row.user_id,
        points=row.points,
        historical_points=row.historical_points,
        tier=Tier(row.tier),
        rewards=tuple(row.rewards),
        created_at=row.created_at,
    )


@dataclass
class DatabaseStore:
    """
    One table per entity. Loyalty programs are keyed by user id.
    """
    users: ModelRecordMap[User] = field(default_factory=lambda: ModelRecordMap(UserRecord, _user_row, _user))
    restaurants: ModelRecordMap[Restaurant] = field(
        default_factory=lambda: ModelRecordMap(RestaurantRecord, _restaurant_row, _restaurant)
    )
    menu_items: ModelRecordMap[MenuItem] = field(
        default_factory=lambda: ModelRecordMap(MenuItemRecord, _menu_item_row, _menu_item)
    )
    orders: ModelRecordMap[Order] = field(default_factory=lambda: ModelRecordMap(OrderRecord, _order_row, _order))
    deliveries: ModelRecordMap[Delivery] = field(
        default_factory=lambda: ModelRecordMap(DeliveryRecord, _delivery_row, _delivery)
    )
    batch_orders: ModelRecordMap[BatchOrder] = field(
        default_factory=lambda: ModelRecordMap(BatchOrderRecord, _batch_row, _batch)
    )
    pricing_rules: ModelRecordMap[PricingRule] = field(
        default_factory=lambda: ModelRecordMap(PricingRuleRecord, _rule_row, _rule)
    )
    loyalty_programs: ModelRecordMap[LoyaltyProgram] = field(
        default_factory=lambda: ModelRecordMap(LoyaltyProgramRecord, _program_row, _program)
    )
