from decimal import Decimal

import pytest
from rest_framework.test import APIRequestFactory

from backend.api import views

factory = APIRequestFactory()


def call(dispatcher, view_class, method, data=None, **kwargs):
    request = getattr(factory, method)("/", data, format="json") if method != "get" else factory.get("/", data)
    return view_class.as_view(dispatcher=dispatcher)(request, **kwargs)


def test_create_user_validates_phone_number(dispatcher):
    response = call(
        dispatcher,
        views.UsersView,
        "post",
        {"username": "tendai", "email": "tendai@example.com", "phone_number": "+263771234567", "role": "Customer"},
    )

    assert response.status_code == 201
    assert response.data["user"]["phone_number"] == "+263771234567"
    assert response.data["user"]["role"] == "Customer"


def test_bad_phone_number_is_a_validation_error(dispatcher):
    response = call(
        dispatcher,
        views.UsersView,
        "post",
        {"username": "tendai", "email": "tendai@example.com", "phone_number": "not-a-phone", "role": "Customer"},
    )
    assert response.status_code == 400
    assert "phone_number" in response.data


def test_duplicate_email_is_a_conflict(dispatcher, customer):
    response = call(
        dispatcher,
        views.UsersView,
        "post",
        {"username": "x", "email": customer.email, "phone_number": "+263771234568", "role": "Customer"},
    )
    assert response.status_code == 409
    assert response.data["error"] == "Email already exists."


def test_empty_listing_is_not_found(dispatcher):
    response = call(dispatcher, views.OrdersView, "get")

    assert response.status_code == 404
    assert response.data == {"message": "No orders found."}


def test_order_total_is_computed_server_side(dispatcher, customer, restaurant, menu_item):
    response = call(
        dispatcher,
        views.OrdersView,
        "post",
        {"customer_id": customer.id, "restaurant_id": restaurant.id, "items": [menu_item.id], "total_bill": "1"},
    )

    assert response.status_code == 201
    assert response.data["order"]["total_bill"] == Decimal("12.50")


def test_missing_courier_and_wrong_role_read_differently(dispatcher, customer, order):
    payload = {"order_ids": [order.id], "locations": ["-17.82,31.05", "-17.80,31.03"]}

    missing = call(dispatcher, views.BatchOrdersView, "post", {**payload, "courier_id": "ghost"})
    wrong_role = call(dispatcher, views.BatchOrdersView, "post", {**payload, "courier_id": customer.id})

    assert missing.status_code == 404
    assert missing.data["error"] == "Delivery person ghost not found."
    assert wrong_role.status_code == 400
    assert wrong_role.data["error"] != missing.data["error"]
    assert "DeliveryPerson" in wrong_role.data["error"]


def test_batch_with_no_locations_is_a_bad_request(dispatcher, courier, order):
    response = call(
        dispatcher, views.BatchOrdersView, "post", {"courier_id": courier.id, "order_ids": [order.id], "locations": []}
    )
    assert response.status_code == 400
    assert response.data["error"].startswith("Invalid input")


def test_bad_coordinate_is_a_bad_request(dispatcher, courier, order):
    response = call(
        dispatcher,
        views.BatchOrdersView,
        "post",
        {"courier_id": courier.id, "order_ids": [order.id], "locations": ["-17.82,31.05", "north"]},
    )
    assert response.status_code == 400
    assert response.data["error"].startswith("Invalid coordinate")


def test_batch_is_created_and_listed_per_courier(dispatcher, courier, order):
    created = call(
        dispatcher,
        views.BatchOrdersView,
        "post",
        {"courier_id": courier.id, "order_ids": [order.id], "locations": ["0,0", "0,2", "0,1"]},
    )
    listed = call(dispatcher, views.CourierBatchOrdersView, "get", courier_id=courier.id)

    assert created.status_code == 201
    assert created.data["batch_order"]["optimized_route"] == ["0,0", "0,1", "0,2"]
    assert listed.data["batch_orders"][0]["id"] == created.data["batch_order"]["id"]


def test_invalid_batch_transition(dispatcher, courier, order):
    batch = dispatcher.create_batch(courier.id, [order.id], ["0,0"])
    dispatcher.advance_batch(batch.id, "cancelled")

    response = call(dispatcher, views.BatchOrderDetailView, "patch", {"status": "in_progress"}, batch_id=batch.id)
    assert response.status_code == 400


def test_unknown_condition_is_an_invalid_rule(dispatcher, restaurant):
    response = call(
        dispatcher,
        views.PricingRulesView,
        "post",
        {
            "restaurant_id": restaurant.id,
            "condition": {"type": "moon_phase", "parameters": {}},
            "adjustment_type": "fixed",
            "adjustment_value": "2",
            "priority": 1,
        },
    )
    assert response.status_code == 400
    assert response.data["error"].startswith("Invalid pricing rule")


def test_rule_is_stored_and_quoted(dispatcher, restaurant):
    created = call(
        dispatcher,
        views.PricingRulesView,
        "post",
        {
            "restaurant_id": restaurant.id,
            "condition": {"type": "demand", "parameters": {"demandThreshold": 0.8}},
            "adjustment_type": "percentage",
            "adjustment_value": "50",
            "priority": 2,
        },
    )
    quote = call(
        dispatcher,
        views.PriceQuoteView,
        "post",
        {"restaurant_id": restaurant.id, "base_price": "20.00", "demand_level": 0.9},
    )

    assert created.status_code == 201
    assert created.data["pricing_rule"]["condition"] == {"type": "demand", "parameters": {"demand_threshold": 0.8}}
    assert quote.status_code == 200
    assert quote.data["price"] == Decimal("30")
    assert quote.data["applied_rule_ids"] == [created.data["pricing_rule"]["id"]]


def test_earn_points_and_read_program(dispatcher, customer, order):
    earned = call(dispatcher, views.EarnPointsView, "post", {"user_id": customer.id, "order_id": order.id})
    program = call(dispatcher, views.LoyaltyProgramDetailView, "get", user_id=customer.id)

    assert earned.data["points_earned"] == 2
    assert program.data["loyalty_program"]["points"] == 2
    assert program.data["loyalty_program"]["tier"] == "BRONZE"


def test_unknown_loyalty_program(dispatcher):
    response = call(dispatcher, views.LoyaltyProgramDetailView, "get", user_id="ghost")
    assert response.status_code == 404
    assert response.data["error"] == "Loyalty program for user ghost not found."


def test_delivery_accept_then_deliver(dispatcher, courier, order):
    delivery = call(dispatcher, views.DeliveriesView, "post", {"order_id": order.id, "courier_id": courier.id})
    delivery_id = delivery.data["delivery"]["id"]

    early = call(dispatcher, views.DeliveryDeliveredView, "patch", delivery_id=delivery_id)
    accepted = call(dispatcher, views.DeliveryAcceptView, "patch", delivery_id=delivery_id)
    done = call(dispatcher, views.DeliveryDeliveredView, "patch", delivery_id=delivery_id)

    assert early.status_code == 400
    assert accepted.data["delivery"]["status"] == "accepted"
    assert done.data["delivery"]["status"] == "delivered"


@pytest.mark.parametrize(
    "params, status_code",
    [
        ({"start": "2024-03-01T00:00:00", "end": "2024-03-02T00:00:00"}, 200),
        ({"start": "2024-03-02T00:00:00", "end": "2024-03-01T00:00:00"}, 400),
        ({"start": "yesterday"}, 400),
    ],
)
def test_analytics_window(dispatcher, restaurant, params, status_code):
    response = call(dispatcher, views.RestaurantAnalyticsView, "get", params, restaurant_id=restaurant.id)

    assert response.status_code == status_code
    if status_code == 200:
        assert response.data["analytics"]["order_count"] == 0
