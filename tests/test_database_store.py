import datetime as dt
from decimal import Decimal

import pytest

from backend.records.store import DatabaseStore
from dispatch import Dispatcher
from loyalty import Tier
from orders.errors import DuplicateEmail, InvalidTransition
from orders.models import BatchStatus, OrderStatus, UserRole
from pricing import PricingContext, TimeCondition


@pytest.fixture
def db_dispatcher(db_store):
    return Dispatcher(db_store)


@pytest.fixture
def seeded(db_dispatcher):
    owner = db_dispatcher.create_user("olga", "olga@example.com", "+263771000001", UserRole.RESTAURANT_OWNER)
    customer = db_dispatcher.create_user("chipo", "chipo@example.com", "+263771000002", UserRole.CUSTOMER)
    courier = db_dispatcher.create_user("dan", "dan@example.com", "+263771000003", UserRole.DELIVERY_PERSON)
    restaurant = db_dispatcher.create_restaurant(owner.id, "Sadza Spot", "Local food", "Samora Machel Ave")
    item = db_dispatcher.create_menu_item(restaurant.id, "Sadza & beef", "Plate", "12.50", 0.6)
    order = db_dispatcher.create_order(customer.id, restaurant.id, [item.id, item.id])
    return {"customer": customer, "courier": courier, "restaurant": restaurant, "order": order}


def test_records_survive_a_new_store(db_dispatcher, seeded):
    # a fresh store over the same database sees everything, as after a restart
    restarted = Dispatcher(DatabaseStore())

    order = restarted.get_order(seeded["order"].id)
    assert order == seeded["order"]
    assert order.total_bill == Decimal("25.00")
    assert order.items == seeded["order"].items
    assert restarted.get_user(seeded["customer"].id).role is UserRole.CUSTOMER
    assert len(restarted.list_users()) == 3


def test_duplicate_email_hits_the_unique_column(db_dispatcher, seeded):
    with pytest.raises(DuplicateEmail):
        db_dispatcher.create_user("other", "chipo@example.com", "+263771000009", UserRole.CUSTOMER)
    assert len(db_dispatcher.list_users()) == 3


def test_delivery_lifecycle_is_persisted(db_dispatcher, seeded):
    delivery = db_dispatcher.create_delivery(seeded["order"].id, seeded["courier"].id)
    db_dispatcher.accept_delivery(delivery.id)
    delivered = db_dispatcher.mark_delivered(delivery.id)

    assert db_dispatcher.get_delivery(delivery.id) == delivered
    assert db_dispatcher.get_order(seeded["order"].id).status is OrderStatus.DELIVERED


def test_batch_round_trip_and_transitions(db_dispatcher, seeded):
    batch = db_dispatcher.create_batch(seeded["courier"].id, [seeded["order"].id], ["0,0", "0,2", "0,1"])

    stored = db_dispatcher.get_batch(batch.id)
    assert stored.optimized_route == ["0,0", "0,1", "0,2"]
    assert stored.order_ids == (seeded["order"].id,)

    db_dispatcher.advance_batch(batch.id, BatchStatus.CANCELLED)
    with pytest.raises(InvalidTransition):
        db_dispatcher.advance_batch(batch.id, BatchStatus.IN_PROGRESS)
    assert db_dispatcher.batches_for_courier(seeded["courier"].id)[0].status is BatchStatus.CANCELLED


def test_pricing_rules_are_rebuilt_from_rows(db_dispatcher, seeded):
    restaurant_id = seeded["restaurant"].id
    late_night = db_dispatcher.create_pricing_rule(
        {
            "restaurant_id": restaurant_id,
            "condition": {"type": "time", "parameters": {"start_time": "22:00", "end_time": "02:00"}},
            "adjustment_type": "fixed",
            "adjustment_value": "1.5",
            "priority": 1,
        }
    )

    stored = db_dispatcher.get_pricing_rule(late_night.id)
    assert stored.condition == TimeCondition(dt.time(22, 0), dt.time(2, 0))
    assert stored.sequence == late_night.sequence

    result = db_dispatcher.quote_price(restaurant_id, Decimal("10"), PricingContext(time=dt.time(23, 30)))
    assert result.price == Decimal("11.5")


def test_loyalty_update_creates_then_accumulates(db_dispatcher, seeded):
    first = db_dispatcher.earn_points(seeded["customer"].id, seeded["order"].id)
    second = db_dispatcher.earn_points(seeded["customer"].id, seeded["order"].id)

    program = db_dispatcher.get_loyalty_program(seeded["customer"].id)
    assert first.points_earned == 2
    assert program.id == first.program.id
    assert program.historical_points == second.program.historical_points == 4
    assert program.tier is Tier.BRONZE


def test_values_are_ordered_by_key(db_store, seeded):
    ids = [user.id for user in db_store.users.values()]
    assert ids == sorted(ids)
    assert seeded["customer"].id in db_store.users
    assert "missing" not in db_store.users
