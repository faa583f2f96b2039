"""Management command to check order totals against their line items."""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db.models import Prefetch

from laundryman.conf import laundryman_settings
from laundryman.models import Order, OrderItem


def expected_total(order: Order) -> tuple[Decimal, Decimal]:
    """Return (items_total, total after any reward discount)."""
    items_total = order.items_total
    if order.is_reward_order and order.reward_discount:
        return items_total, max(Decimal("0"), items_total - order.reward_discount)
    return items_total, items_total


class Command(BaseCommand):
    help = "Report (and optionally fix) orders whose total does not match their items"

    def add_arguments(self, parser):
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Write the recomputed totals",
        )

    def handle(self, *args, **options):
        tolerance = Decimal(str(laundryman_settings.TOTAL_TOLERANCE))
        orders = Order.objects.select_related("customer").prefetch_related(
            Prefetch("items", queryset=OrderItem.objects.all())
        )

        checked = mismatched = 0
        for order in orders:
            checked += 1
            items_total, should_be = expected_total(order)
            if abs(order.total - should_be) <= tolerance:
                continue

            mismatched += 1
            self.stdout.write(
                f"Order {order.pk} ({order.customer.code}): total {order.total}, "
                f"expected {should_be} (items {items_total}, discount {order.reward_discount})"
            )
            if options["fix"]:
                patch = {"total": should_be}
                if order.is_reward_order and order.original_total is None:
                    patch["original_total"] = items_total
                Order.objects.filter(pk=order.pk).update(**patch)

        verb = "Fixed" if options["fix"] else "Found"
        self.stdout.write(
            self.style.SUCCESS(f"Checked {checked} orders. {verb} {mismatched} mismatched totals.")
        )
