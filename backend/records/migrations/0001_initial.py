from django.db import migrations, models

ORDER_STATUSES = [("pending", "pending"), ("assigned", "assigned"), ("accepted", "accepted"), ("delivered", "delivered")]
DELIVERY_STATUSES = [("assigned", "assigned"), ("accepted", "accepted"), ("delivered", "delivered")]
BATCH_STATUSES = [
    ("pending", "pending"),
    ("in_progress", "in_progress"),
    ("completed", "completed"),
    ("cancelled", "cancelled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="UserRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("username", models.CharField(max_length=150)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone_number", models.CharField(max_length=32)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("Customer", "Customer"),
                            ("RestaurantOwner", "RestaurantOwner"),
                            ("DeliveryPerson", "DeliveryPerson"),
                        ],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="RestaurantRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("owner_id", models.CharField(db_index=True, max_length=36)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("address", models.TextField()),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="MenuItemRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("restaurant_id", models.CharField(db_index=True, max_length=36)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("quantity_kg", models.FloatField()),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="OrderRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("customer_id", models.CharField(db_index=True, max_length=36)),
                ("restaurant_id", models.CharField(db_index=True, max_length=36)),
                ("items", models.JSONField(default=list)),
                ("total_bill", models.DecimalField(decimal_places=2, max_digits=12)),
                ("status", models.CharField(choices=ORDER_STATUSES, max_length=20)),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="DeliveryRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("order_id", models.CharField(db_index=True, max_length=36)),
                ("courier_id", models.CharField(db_index=True, max_length=36)),
                ("status", models.CharField(choices=DELIVERY_STATUSES, max_length=20)),
                ("created_at", models.DateTimeField()),
                ("accepted_at", models.DateTimeField(blank=True, null=True)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
            ],
        ),
        migrations.CreateModel(
            name="BatchOrderRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("courier_id", models.CharField(db_index=True, max_length=36)),
                ("order_ids", models.JSONField(default=list)),
                ("optimized_route", models.JSONField(default=list)),
                ("total_distance", models.FloatField()),
                ("status", models.CharField(choices=BATCH_STATUSES, max_length=20)),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="PricingRuleRecord",
            fields=[
                ("id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("restaurant_id", models.CharField(db_index=True, max_length=36)),
                ("condition", models.JSONField()),
                (
                    "adjustment_type",
                    models.CharField(choices=[("percentage", "percentage"), ("fixed", "fixed")], max_length=20),
                ),
                ("adjustment_value", models.DecimalField(decimal_places=4, max_digits=12)),
                ("priority", models.IntegerField()),
                ("created_at", models.DateTimeField()),
                ("sequence", models.PositiveIntegerField()),
            ],
        ),
        migrations.CreateModel(
            name="LoyaltyProgramRecord",
            fields=[
                ("user_id", models.CharField(max_length=36, primary_key=True, serialize=False)),
                ("program_id", models.CharField(max_length=36, unique=True)),
                ("points", models.IntegerField(default=0)),
                ("historical_points", models.IntegerField(default=0)),
                (
                    "tier",
                    models.CharField(
                        choices=[("BRONZE", "BRONZE"), ("SILVER", "SILVER"), ("GOLD", "GOLD"), ("PLATINUM", "PLATINUM")],
                        max_length=20,
                    ),
                ),
                ("rewards", models.JSONField(default=list)),
                ("created_at", models.DateTimeField()),
            ],
        ),
    ]
