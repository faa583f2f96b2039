"""Order models - laundry pickup/delivery orders and their line items."""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class OrderStatus(models.TextChoices):
    PENDING_PICKUP = "Pending Pickup", _("Pending Pickup")
    PICKED_UP = "Picked Up", _("Picked Up")
    IN_PROGRESS = "In Progress", _("In Progress")
    READY_FOR_PICKUP = "Ready for Pickup", _("Ready for Pickup")
    OUT_FOR_DELIVERY = "Out for Delivery", _("Out for Delivery")
    DELIVERED = "Delivered", _("Delivered")
    COMPLETED = "Completed", _("Completed")


class PaymentStatus(models.TextChoices):
    PENDING = "PENDING", _("Pending")
    SUCCESSFUL = "SUCCESSFUL", _("Successful")
    FAILED = "FAILED", _("Failed")
    NOT_REQUIRED = "NOT_REQUIRED", _("Not required")


class Order(models.Model):
    """
    Laundry order.

    Locations are stored as JSON documents validated by
    ``Gates.location_is_valid``::

        {
            "address": "Rue 1.234, Bastos, Yaounde",
            "coordinates": {"latitude": 3.848, "longitude": 11.5021},
            "place_id": "ChIJ...",        # optional
            "instructions": "Gate 2",     # optional
        }

    Reward fields (``original_total``, ``reward_discount``,
    ``is_reward_order``) are written only by the reward engine.
    """

    customer = models.ForeignKey(
        "laundryman.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
        verbose_name=_("customer"),
    )

    pickup_date = models.DateTimeField(_("pickup date"))
    notes = models.TextField(_("notes"), blank=True)

    total = models.DecimalField(
        _("total"),
        max_digits=12,
        decimal_places=2,
        help_text=_("Charged amount, after any reward discount"),
    )
    original_total = models.DecimalField(
        _("original total"),
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Amount before the reward discount (reward orders only)"),
    )
    reward_discount = models.DecimalField(
        _("reward discount"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    is_reward_order = models.BooleanField(_("reward order"), default=False)

    status = models.CharField(
        _("status"),
        max_length=30,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING_PICKUP,
        db_index=True,
    )

    pickup_location = models.JSONField(_("pickup location"))
    dropoff_location = models.JSONField(_("dropoff location"))

    picked_up_at = models.DateTimeField(_("picked up at"), null=True, blank=True)
    delivered_at = models.DateTimeField(_("delivered at"), null=True, blank=True)

    payment_status = models.CharField(
        _("payment status"),
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_reference = models.CharField(_("payment reference"), max_length=100, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("order")
        verbose_name_plural = _("orders")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "-created_at"], name="laundryman_order_cust_created"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.customer.code} - {self.total} ({self.status})"

    @property
    def items_total(self) -> Decimal:
        """Sum of price x quantity over the order's line items."""
        return sum(
            (item.line_total for item in self.items.all()),
            Decimal("0"),
        )


class OrderItem(models.Model):
    """Line item of an order (a priced laundry article)."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name=_("order"),
    )
    item_ref = models.CharField(
        _("item reference"),
        max_length=100,
        blank=True,
        help_text=_("Inventory item id"),
    )
    name = models.CharField(_("name"), max_length=200)
    price = models.DecimalField(_("price"), max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField(_("quantity"), default=1)

    class Meta:
        verbose_name = _("order item")
        verbose_name_plural = _("order items")

    def __str__(self):
        return f"{self.quantity}x {self.name}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
