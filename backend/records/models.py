from django.db import models

from loyalty.models import Tier
from orders.models import BatchStatus, DeliveryStatus, OrderStatus, UserRole
from pricing.models import AdjustmentType


def choices(enum):
    return [(member.value, member.value) for member in enum]


class UserRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    username = models.CharField(max_length=150)
    # one account per email; the dispatcher turns a clash into DuplicateEmail
    email = models.EmailField(unique=True)
    # E.164, already normalized by the API serializer
    phone_number = models.CharField(max_length=32)
    role = models.CharField(max_length=20, choices=choices(UserRole))
    created_at = models.DateTimeField()

    def __str__(self):
        return f"{self.username} ({self.role})"


class RestaurantRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    owner_id = models.CharField(max_length=36, db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    # landmark based address text
    address = models.TextField()
    created_at = models.DateTimeField()

    def __str__(self):
        return self.name


class MenuItemRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    restaurant_id = models.CharField(max_length=36, db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity_kg = models.FloatField()
    created_at = models.DateTimeField()

    def __str__(self):
        return self.name


class OrderRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    customer_id = models.CharField(max_length=36, db_index=True)
    restaurant_id = models.CharField(max_length=36, db_index=True)
    # menu item ids, repeated once per unit ordered
    items = models.JSONField(default=list)
    total_bill = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=choices(OrderStatus))
    created_at = models.DateTimeField()


class DeliveryRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    order_id = models.CharField(max_length=36, db_index=True)
    courier_id = models.CharField(max_length=36, db_index=True)
    status = models.CharField(max_length=20, choices=choices(DeliveryStatus))
    created_at = models.DateTimeField()
    accepted_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)


class BatchOrderRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    courier_id = models.CharField(max_length=36, db_index=True)
    order_ids = models.JSONField(default=list)
    # "lat,lon" strings, depot first
    optimized_route = models.JSONField(default=list)
    total_distance = models.FloatField()
    status = models.CharField(max_length=20, choices=choices(BatchStatus))
    created_at = models.DateTimeField()


class PricingRuleRecord(models.Model):
    id = models.CharField(max_length=36, primary_key=True)
    restaurant_id = models.CharField(max_length=36, db_index=True)
    # {"type": ..., "parameters": {...}}
    condition = models.JSONField()
    adjustment_type = models.CharField(max_length=20, choices=choices(AdjustmentType))
    adjustment_value = models.DecimalField(max_digits=12, decimal_places=4)
    priority = models.IntegerField()
    created_at = models.DateTimeField()
    sequence = models.PositiveIntegerField()


class LoyaltyProgramRecord(models.Model):
    # keyed by user: one program per user
    user_id = models.CharField(max_length=36, primary_key=True)
    program_id = models.CharField(max_length=36, unique=True)
    points = models.IntegerField(default=0)
    historical_points = models.IntegerField(default=0)
    tier = models.CharField(max_length=20, choices=choices(Tier))
    rewards = models.JSONField(default=list)
    created_at = models.DateTimeField()
