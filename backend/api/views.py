"""
REST boundary over the Dispatcher.

Every view receives the process's Dispatcher through as_view(dispatcher=...)
(see backend.urls). Domain errors propagate to
backend.api.exceptions.coordination_exception_handler.
"""
from dataclasses import asdict

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from dispatch import Dispatcher
from pricing import PricingContext, condition_to_record

from .serializers import (
    AnalyticsWindowSerializer,
    BatchOrderCreateSerializer,
    BatchStatusSerializer,
    DeliveryCreateSerializer,
    EarnPointsSerializer,
    MenuItemCreateSerializer,
    OrderCreateSerializer,
    PriceQuoteSerializer,
    PricingRuleCreateSerializer,
    RestaurantCreateSerializer,
    UserCreateSerializer,
)


def present(record) -> dict:
    return asdict(record)


def present_rule(rule) -> dict:
    data = asdict(rule)
    data["condition"] = condition_to_record(rule.condition)
    return data


def listing(records, key: str, noun: str, presenter=present) -> Response:
    # an empty listing is a 404, as clients of the original service expect
    if not records:
        return Response({"message": f"No {noun} found."}, status=status.HTTP_404_NOT_FOUND)
    return Response({"message": f"{noun.capitalize()} retrieved successfully.", key: [presenter(r) for r in records]})


class DispatcherView(APIView):
    dispatcher: Dispatcher = None

    def validated(self, serializer_class, data) -> dict:
        serializer = serializer_class(data=data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class UsersView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_users(), "users", "users")

    def post(self, request):
        data = self.validated(UserCreateSerializer, request.data)
        user = self.dispatcher.create_user(
            username=data["username"],
            email=data["email"],
            phone_number=str(data["phone_number"]),
            role=data["role"],
        )
        return Response({"message": "User created successfully.", "user": present(user)}, status=status.HTTP_201_CREATED)


class RestaurantsView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_restaurants(), "restaurants", "restaurants")

    def post(self, request):
        restaurant = self.dispatcher.create_restaurant(**self.validated(RestaurantCreateSerializer, request.data))
        return Response(
            {"message": "Restaurant created successfully.", "restaurant": present(restaurant)},
            status=status.HTTP_201_CREATED,
        )


class MenuItemsView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_menu_items(), "menu_items", "menu items")

    def post(self, request):
        menu_item = self.dispatcher.create_menu_item(**self.validated(MenuItemCreateSerializer, request.data))
        return Response(
            {"message": "Menu item created successfully.", "menu_item": present(menu_item)},
            status=status.HTTP_201_CREATED,
        )


class OrdersView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_orders(), "orders", "orders")

    def post(self, request):
        data = self.validated(OrderCreateSerializer, request.data)
        order = self.dispatcher.create_order(data["customer_id"], data["restaurant_id"], data["items"])
        return Response({"message": "Order created successfully.", "order": present(order)}, status=status.HTTP_201_CREATED)


class OrderDetailView(DispatcherView):
    def get(self, request, order_id):
        return Response({"message": "Order retrieved successfully.", "order": present(self.dispatcher.get_order(order_id))})


class DeliveriesView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_deliveries(), "deliveries", "deliveries")

    def post(self, request):
        delivery = self.dispatcher.create_delivery(**self.validated(DeliveryCreateSerializer, request.data))
        return Response(
            {"message": "Delivery created successfully.", "delivery": present(delivery)},
            status=status.HTTP_201_CREATED,
        )


class DeliveryAcceptView(DispatcherView):
    def patch(self, request, delivery_id):
        delivery = self.dispatcher.accept_delivery(delivery_id)
        return Response({"message": "Delivery accepted successfully.", "delivery": present(delivery)})


class DeliveryDeliveredView(DispatcherView):
    def patch(self, request, delivery_id):
        delivery = self.dispatcher.mark_delivered(delivery_id)
        return Response({"message": "Delivery marked as delivered.", "delivery": present(delivery)})


class BatchOrdersView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_batches(), "batch_orders", "batch orders")

    def post(self, request):
        data = self.validated(BatchOrderCreateSerializer, request.data)
        batch = self.dispatcher.create_batch(data["courier_id"], data["order_ids"], data["locations"])
        return Response(
            {"message": "Batch order created successfully.", "batch_order": present(batch)},
            status=status.HTTP_201_CREATED,
        )


class BatchOrderDetailView(DispatcherView):
    def get(self, request, batch_id):
        batch = self.dispatcher.get_batch(batch_id)
        return Response({"message": "Batch order retrieved successfully.", "batch_order": present(batch)})

    def patch(self, request, batch_id):
        data = self.validated(BatchStatusSerializer, request.data)
        batch = self.dispatcher.advance_batch(batch_id, data["status"])
        return Response({"message": "Batch order updated successfully.", "batch_order": present(batch)})


class CourierBatchOrdersView(DispatcherView):
    def get(self, request, courier_id):
        return listing(
            self.dispatcher.batches_for_courier(courier_id), "batch_orders", "batch orders for this delivery person"
        )


class PricingRulesView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_pricing_rules(), "pricing_rules", "pricing rules", present_rule)

    def post(self, request):
        rule = self.dispatcher.create_pricing_rule(dict(self.validated(PricingRuleCreateSerializer, request.data)))
        return Response(
            {"message": "Pricing rule created successfully.", "pricing_rule": present_rule(rule)},
            status=status.HTTP_201_CREATED,
        )


class PricingRuleDetailView(DispatcherView):
    def get(self, request, rule_id):
        rule = self.dispatcher.get_pricing_rule(rule_id)
        return Response({"message": "Pricing rule retrieved successfully.", "pricing_rule": present_rule(rule)})


class RestaurantPricingRulesView(DispatcherView):
    def get(self, request, restaurant_id):
        return listing(
            self.dispatcher.pricing_rules_for_restaurant(restaurant_id),
            "pricing_rules",
            "pricing rules for this restaurant",
            present_rule,
        )


class PriceQuoteView(DispatcherView):
    def post(self, request):
        data = self.validated(PriceQuoteSerializer, request.data)
        context = PricingContext(
            time=data.get("time"),
            demand_level=data.get("demand_level"),
            weather_condition=data.get("weather_condition"),
            active_event=data.get("active_event"),
        )
        result = self.dispatcher.quote_price(data["restaurant_id"], data["base_price"], context)
        return Response({"message": "Price calculated successfully.", **present(result)})


class EarnPointsView(DispatcherView):
    def post(self, request):
        data = self.validated(EarnPointsSerializer, request.data)
        result = self.dispatcher.earn_points(data["user_id"], data["order_id"])
        return Response(
            {
                "message": "Points earned successfully.",
                "points_earned": result.points_earned,
                "loyalty_program": present(result.program),
            }
        )


class LoyaltyProgramsView(DispatcherView):
    def get(self, request):
        return listing(self.dispatcher.list_loyalty_programs(), "loyalty_programs", "loyalty programs")


class LoyaltyProgramDetailView(DispatcherView):
    def get(self, request, user_id):
        program = self.dispatcher.get_loyalty_program(user_id)
        return Response({"message": "Loyalty program retrieved successfully.", "loyalty_program": present(program)})


class RestaurantAnalyticsView(DispatcherView):
    def get(self, request, restaurant_id):
        window = self.validated(AnalyticsWindowSerializer, request.query_params)
        analytics = self.dispatcher.restaurant_analytics(restaurant_id, window["start"], window["end"])
        return Response({"message": "Analytics computed successfully.", "analytics": present(analytics)})
