"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Owns the read -> engine -> persist sequence for every operation the boundary
exposes. Engines (batching, pricing, loyalty, analytics) stay pure; this class
resolves references in the store, calls them, and stores what they return.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from analytics import AnalyticsPolicy, RestaurantAnalytics, compute_restaurant_analytics, default_analytics_policy
from loyalty import AccrualResult, LoyaltyPolicy, LoyaltyProgram, accrue, default_loyalty_policy
from orders.batching import BatchingPolicy, create_batch, default_batching_policy
from orders.billing import build_order
from orders.errors import (
    BatchOrderNotFound,
    CourierNotFound,
    DeliveryNotFound,
    DuplicateEmail,
    InvalidRole,
    LoyaltyProgramNotFound,
    OrderNotFound,
    PricingRuleNotFound,
    RestaurantNotFound,
    UserNotFound,
)
from orders.models import BatchOrder, BatchStatus, Delivery, MenuItem, Order, Restaurant, User, UserRole
from pricing import PricingContext, PricingResult, PricingRule, apply_rules
from routing import DistanceMatrixProvider

from .state_machines import accept_delivery, mark_delivered, sync_order_status, transition_batch

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Coordinates users, restaurants, orders, deliveries, batches, pricing and loyalty
    over one injected record store: storage.InMemoryStore, or
    backend.records.store.DatabaseStore in the running service. Both expose the
    same maps with the same RecordMap operations.
    """
    def __init__(
        self,
        store,
        *,
        batching_policy: Optional[BatchingPolicy] = None,
        loyalty_policy: Optional[LoyaltyPolicy] = None,
        analytics_policy: Optional[AnalyticsPolicy] = None,
        distance_matrix_provider: Optional[DistanceMatrixProvider] = None,
    ):
        self.store = store
        self.batching_policy = batching_policy or default_batching_policy()
        self.loyalty_policy = loyalty_policy or default_loyalty_policy()
        self.analytics_policy = analytics_policy or default_analytics_policy()
        self.distance_matrix_provider = distance_matrix_provider

    # --- lookups ---

    def _require_user(self, user_id: str, role: Optional[UserRole] = None) -> User:
        user = self.store.users.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        if role is not None and user.role != role:
            raise InvalidRole(user_id, role)
        return user

    def _require_courier(self, courier_id: str) -> User:
        courier = self.store.users.get(courier_id)
        if courier is None:
            raise CourierNotFound(courier_id)
        if courier.role != UserRole.DELIVERY_PERSON:
            raise InvalidRole(courier_id, UserRole.DELIVERY_PERSON)
        return courier

    def _require_restaurant(self, restaurant_id: str) -> Restaurant:
        restaurant = self.store.restaurants.get(restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound(restaurant_id)
        return restaurant

    # --- users / restaurants / menu ---

    def create_user(self, username: str, email: str, phone_number: str, role: str | UserRole) -> User:
        user = User.new(username, email, phone_number, role)
        if not self.store.users.add_unique(user.id, user, "email"):
            raise DuplicateEmail(email)
        logger.info("created user %s (%s)", user.id, user.role.value)
        return user

    def list_users(self) -> List[User]:
        return self.store.users.values()

    def get_user(self, user_id: str) -> User:
        return self._require_user(user_id)

    def create_restaurant(self, owner_id: str, name: str, description: str, address: str) -> Restaurant:
        self._require_user(owner_id, UserRole.RESTAURANT_OWNER)

        restaurant = Restaurant.new(owner_id, name, description, address)
        self.store.restaurants.insert(restaurant.id, restaurant)
        return restaurant

    def list_restaurants(self) -> List[Restaurant]:
        return self.store.restaurants.values()

    def create_menu_item(
        self,
        restaurant_id: str,
        name: str,
        description: str,
        price: Decimal,
        quantity_kg: float,
    ) -> MenuItem:
        self._require_restaurant(restaurant_id)

        menu_item = MenuItem.new(restaurant_id, name, description, price, quantity_kg)
        self.store.menu_items.insert(menu_item.id, menu_item)
        return menu_item

    def list_menu_items(self) -> List[MenuItem]:
        return self.store.menu_items.values()

    # --- orders / deliveries ---

    def create_order(self, customer_id: str, restaurant_id: str, item_ids: Sequence[str]) -> Order:
        self._require_user(customer_id, UserRole.CUSTOMER)
        self._require_restaurant(restaurant_id)

        order = build_order(customer_id, restaurant_id, item_ids, self.store.menu_items.get)
        self.store.orders.insert(order.id, order)
        logger.info("created order %s total=%s", order.id, order.total_bill)
        return order

    def list_orders(self) -> List[Order]:
        return self.store.orders.values()

    def get_order(self, order_id: str) -> Order:
        order = self.store.orders.get(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def create_delivery(self, order_id: str, courier_id: str) -> Delivery:
        order = self.get_order(order_id)
        self._require_courier(courier_id)

        delivery = Delivery.new(order_id, courier_id)
        self.store.deliveries.insert(delivery.id, delivery)
        self.store.orders.insert(order.id, sync_order_status(order, delivery))
        return delivery

    def list_deliveries(self) -> List[Delivery]:
        return self.store.deliveries.values()

    def get_delivery(self, delivery_id: str) -> Delivery:
        delivery = self.store.deliveries.get(delivery_id)
        if delivery is None:
            raise DeliveryNotFound(delivery_id)
        return delivery

    def accept_delivery(self, delivery_id: str, now: Optional[datetime] = None) -> Delivery:
        return self._advance_delivery(accept_delivery(self.get_delivery(delivery_id), now))

    def mark_delivered(self, delivery_id: str, now: Optional[datetime] = None) -> Delivery:
        return self._advance_delivery(mark_delivered(self.get_delivery(delivery_id), now))

    def _advance_delivery(self, delivery: Delivery) -> Delivery:
        self.store.deliveries.insert(delivery.id, delivery)

        order = self.store.orders.get(delivery.order_id)
        if order is not None:
            self.store.orders.insert(order.id, sync_order_status(order, delivery))
        return delivery

    # --- batch dispatch ---

    def create_batch(self, courier_id: str, order_ids: Iterable[str], locations: Sequence[str]) -> BatchOrder:
        batch = create_batch(
            courier_id,
            order_ids,
            locations,
            get_user=self.store.users.get,
            get_order=self.store.orders.get,
            policy=self.batching_policy,
            distance_matrix_provider=self.distance_matrix_provider,
        )
        self.store.batch_orders.insert(batch.id, batch)
        return batch

    def list_batches(self) -> List[BatchOrder]:
        return self.store.batch_orders.values()

    def get_batch(self, batch_id: str) -> BatchOrder:
        batch = self.store.batch_orders.get(batch_id)
        if batch is None:
            raise BatchOrderNotFound(batch_id)
        return batch

    def batches_for_courier(self, courier_id: str) -> List[BatchOrder]:
        return [batch for batch in self.store.batch_orders.values() if batch.courier_id == courier_id]

    def advance_batch(self, batch_id: str, status: str | BatchStatus) -> BatchOrder:
        batch = transition_batch(self.get_batch(batch_id), status)
        self.store.batch_orders.insert(batch.id, batch)
        return batch

    # --- pricing ---

    def create_pricing_rule(self, record: dict) -> PricingRule:
        """
        record is the free-form rule payload: restaurant id, condition, adjustment, priority.
        """
        rule = PricingRule.from_record(record)
        self._require_restaurant(rule.restaurant_id)

        self.store.pricing_rules.insert(rule.id, rule)
        return rule

    def list_pricing_rules(self) -> List[PricingRule]:
        return self.store.pricing_rules.values()

    def get_pricing_rule(self, rule_id: str) -> PricingRule:
        rule = self.store.pricing_rules.get(rule_id)
        if rule is None:
            raise PricingRuleNotFound(rule_id)
        return rule

    def pricing_rules_for_restaurant(self, restaurant_id: str) -> List[PricingRule]:
        return [rule for rule in self.store.pricing_rules.values() if rule.restaurant_id == restaurant_id]

    def quote_price(self, restaurant_id: str, base_price, context: PricingContext) -> PricingResult:
        self._require_restaurant(restaurant_id)
        return apply_rules(base_price, self.pricing_rules_for_restaurant(restaurant_id), context)

    # --- loyalty ---

    def earn_points(self, user_id: str, order_id: str) -> AccrualResult:
        """
        Accrue points for an existing order. The read-modify-write of the
        user's program runs under the store's per-map lock, so concurrent
        accruals for the same user never lose an update.
        """
        order = self.get_order(order_id)
        earned: List[int] = []

        def _accrue(program: Optional[LoyaltyProgram]) -> LoyaltyProgram:
            result = accrue(user_id, order, program, policy=self.loyalty_policy)
            earned.append(result.points_earned)
            return result.program

        program = self.store.loyalty_programs.update(user_id, _accrue)
        logger.info("user %s earned %d points for order %s", user_id, earned[-1], order_id)
        return AccrualResult(points_earned=earned[-1], program=program)

    def list_loyalty_programs(self) -> List[LoyaltyProgram]:
        return self.store.loyalty_programs.values()

    def get_loyalty_program(self, user_id: str) -> LoyaltyProgram:
        program = self.store.loyalty_programs.get(user_id)
        if program is None:
            raise LoyaltyProgramNotFound(user_id)
        return program

    # --- analytics ---

    def restaurant_analytics(self, restaurant_id: str, start: datetime, end: datetime) -> RestaurantAnalytics:
        self._require_restaurant(restaurant_id)
        return compute_restaurant_analytics(
            restaurant_id,
            self.store.orders.values(),
            self.store.deliveries.values(),
            start,
            end,
            policy=self.analytics_policy,
        )
