from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("laundryman", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="RewardLedger",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("total_orders_count", models.PositiveIntegerField(default=0, help_text="Orders ever tracked (never decreases)", verbose_name="total orders")),
                ("is_eligible_for_discount", models.BooleanField(default=False, verbose_name="eligible for discount")),
                ("next_discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12, verbose_name="next discount")),
                ("total_rewards_earned", models.DecimalField(decimal_places=2, default=Decimal("0"), help_text="Sum of all applied discounts (never decreases)", max_digits=14, verbose_name="rewards earned")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "customer",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reward_ledger",
                        to="laundryman.customer",
                        verbose_name="customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward ledger",
                "verbose_name_plural": "reward ledgers",
            },
        ),
        migrations.CreateModel(
            name="RewardCycleEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="amount")),
                ("recorded_at", models.DateTimeField(auto_now_add=True, verbose_name="recorded at")),
                (
                    "ledger",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="entries",
                        to="laundryman_rewards.rewardledger",
                        verbose_name="ledger",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reward_entries",
                        to="laundryman.order",
                        verbose_name="order",
                    ),
                ),
            ],
            options={
                "verbose_name": "reward cycle entry",
                "verbose_name_plural": "reward cycle entries",
                "ordering": ["recorded_at", "pk"],
            },
        ),
        migrations.CreateModel(
            name="CompletedRewardCycle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_ids", models.JSONField(default=list, verbose_name="order ids")),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="total amount")),
                ("average_amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="average amount")),
                ("discount_applied", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="discount applied")),
                ("completed_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="completed at")),
                (
                    "discount_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reward_cycles",
                        to="laundryman.order",
                        verbose_name="discount order",
                    ),
                ),
                (
                    "ledger",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cycles",
                        to="laundryman_rewards.rewardledger",
                        verbose_name="ledger",
                    ),
                ),
            ],
            options={
                "verbose_name": "completed reward cycle",
                "verbose_name_plural": "completed reward cycles",
                "ordering": ["completed_at", "pk"],
            },
        ),
    ]
