"""Django ORM OrderStore adapter."""

from decimal import Decimal
from typing import Any

from django.db import transaction
from django.utils import timezone

from laundryman.models import Order, OrderItem


class DjangoOrderStore:
    """
    Adapter that implements OrderStore on the Laundryman Order model.

    Configuration in settings.py:
        LAUNDRYMAN = {
            "ORDER_STORE_BACKEND": "laundryman.adapters.django_orders.DjangoOrderStore",
        }
    """

    def create_order(self, data: dict[str, Any]) -> Order:
        """Create the order and its line items atomically."""
        data = dict(data)
        items = data.pop("items", [])
        with transaction.atomic():
            order = Order.objects.create(**data)
            OrderItem.objects.bulk_create(
                [
                    OrderItem(
                        order=order,
                        item_ref=str(item.get("item_ref") or item.get("id") or ""),
                        name=item["name"],
                        price=Decimal(str(item["price"])),
                        quantity=item.get("quantity", 1),
                    )
                    for item in items
                ]
            )
        return order

    def update_order(self, order_id: int, patch: dict[str, Any]) -> Order | None:
        """Apply ``patch`` and return the fresh order (None if missing)."""
        updated = Order.objects.filter(pk=order_id).update(**patch, updated_at=timezone.now())
        if not updated:
            return None
        return Order.objects.select_related("customer").get(pk=order_id)

    def find_order(self, order_id: int) -> Order | None:
        try:
            return Order.objects.select_related("customer").get(pk=order_id)
        except Order.DoesNotExist:
            return None
