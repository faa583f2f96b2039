import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Sequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True, verbose_name="name")),
                ("value", models.PositiveIntegerField(default=0, verbose_name="value")),
            ],
            options={
                "verbose_name": "sequence",
                "verbose_name_plural": "sequences",
                "db_table": "laundryman_sequence",
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(help_text="Unique customer code (e.g. PL24)", max_length=50, unique=True, verbose_name="code")),
                ("uuid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("name", models.CharField(max_length=150, verbose_name="name")),
                ("phone", models.CharField(blank=True, db_index=True, max_length=20, verbose_name="phone")),
                ("email", models.EmailField(blank=True, db_index=True, max_length=254, verbose_name="email")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("pickup_date", models.DateTimeField(verbose_name="pickup date")),
                ("notes", models.TextField(blank=True, verbose_name="notes")),
                ("total", models.DecimalField(decimal_places=2, help_text="Charged amount, after any reward discount", max_digits=12, verbose_name="total")),
                ("original_total", models.DecimalField(blank=True, decimal_places=2, help_text="Amount before the reward discount (reward orders only)", max_digits=12, null=True, verbose_name="original total")),
                ("reward_discount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12, verbose_name="reward discount")),
                ("is_reward_order", models.BooleanField(default=False, verbose_name="reward order")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending Pickup", "Pending Pickup"),
                            ("Picked Up", "Picked Up"),
                            ("In Progress", "In Progress"),
                            ("Ready for Pickup", "Ready for Pickup"),
                            ("Out for Delivery", "Out for Delivery"),
                            ("Delivered", "Delivered"),
                            ("Completed", "Completed"),
                        ],
                        db_index=True,
                        default="Pending Pickup",
                        max_length=30,
                        verbose_name="status",
                    ),
                ),
                ("pickup_location", models.JSONField(verbose_name="pickup location")),
                ("dropoff_location", models.JSONField(verbose_name="dropoff location")),
                ("picked_up_at", models.DateTimeField(blank=True, null=True, verbose_name="picked up at")),
                ("delivered_at", models.DateTimeField(blank=True, null=True, verbose_name="delivered at")),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("SUCCESSFUL", "Successful"),
                            ("FAILED", "Failed"),
                            ("NOT_REQUIRED", "Not required"),
                        ],
                        default="PENDING",
                        max_length=20,
                        verbose_name="payment status",
                    ),
                ),
                ("payment_reference", models.CharField(blank=True, max_length=100, verbose_name="payment reference")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="laundryman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "order",
                "verbose_name_plural": "orders",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["customer", "-created_at"], name="laundryman_order_cust_created")],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_ref", models.CharField(blank=True, help_text="Inventory item id", max_length=100, verbose_name="item reference")),
                ("name", models.CharField(max_length=200, verbose_name="name")),
                ("price", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="price")),
                ("quantity", models.PositiveIntegerField(default=1, verbose_name="quantity")),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="laundryman.order",
                        verbose_name="order",
                    ),
                ),
            ],
            options={
                "verbose_name": "order item",
                "verbose_name_plural": "order items",
            },
        ),
        migrations.CreateModel(
            name="PaymentTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reference", models.CharField(max_length=100, unique=True, verbose_name="reference")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="amount")),
                ("phone_number", models.CharField(blank=True, max_length=20, verbose_name="phone number")),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("SUCCESSFUL", "Successful"), ("FAILED", "Failed")],
                        db_index=True,
                        default="PENDING",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("operator", models.CharField(blank=True, max_length=50, verbose_name="operator")),
                ("ussd_code", models.CharField(blank=True, max_length=50, verbose_name="USSD code")),
                ("description", models.CharField(blank=True, max_length=255, verbose_name="description")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payment_transactions",
                        to="laundryman.customer",
                        verbose_name="customer",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="payment_transactions",
                        to="laundryman.order",
                        verbose_name="order",
                    ),
                ),
            ],
            options={
                "verbose_name": "payment transaction",
                "verbose_name_plural": "payment transactions",
                "db_table": "laundryman_payment_transaction",
                "ordering": ["-created_at"],
            },
        ),
    ]
