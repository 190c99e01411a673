from decimal import Decimal

from phonenumber_field.serializerfields import PhoneNumberField
from rest_framework import serializers

from orders.models import BatchStatus, UserRole


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    # validated against PHONENUMBER_DEFAULT_REGION when no +country prefix is given
    phone_number = PhoneNumberField()
    role = serializers.ChoiceField(choices=[role.value for role in UserRole])


class RestaurantCreateSerializer(serializers.Serializer):
    owner_id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    address = serializers.CharField()


class MenuItemCreateSerializer(serializers.Serializer):
    restaurant_id = serializers.CharField()
    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    quantity_kg = serializers.FloatField(min_value=0)


class OrderCreateSerializer(serializers.Serializer):
    customer_id = serializers.CharField()
    restaurant_id = serializers.CharField()
    items = serializers.ListField(child=serializers.CharField(), allow_empty=False)


class DeliveryCreateSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    courier_id = serializers.CharField()


class BatchOrderCreateSerializer(serializers.Serializer):
    courier_id = serializers.CharField()
    order_ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    # emptiness is left to the batching engine so it reports its own error
    locations = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class BatchStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[batch_status.value for batch_status in BatchStatus])


class PricingRuleCreateSerializer(serializers.Serializer):
    """
    Only the envelope is checked here. Condition kinds and adjustment types are
    validated when the rule is built, so a bad one surfaces as InvalidRule.
    """
    restaurant_id = serializers.CharField()
    condition = serializers.DictField()
    adjustment_type = serializers.CharField()
    adjustment_value = serializers.DecimalField(max_digits=12, decimal_places=4)
    priority = serializers.IntegerField()


class PriceQuoteSerializer(serializers.Serializer):
    restaurant_id = serializers.CharField()
    base_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    time = serializers.TimeField(required=False)
    demand_level = serializers.FloatField(required=False)
    weather_condition = serializers.CharField(required=False)
    active_event = serializers.CharField(required=False)


class EarnPointsSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    order_id = serializers.CharField()


class AnalyticsWindowSerializer(serializers.Serializer):
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError("start must not be after end")
        return attrs
