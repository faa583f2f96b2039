"""Order service - placement flow, status changes and queries.

place_order() runs the full flow:

    gates -> actor resolution
          -> [atomic: lock reward ledger, mobile payment, create order,
              link transaction, apply reward, track reward]
          -> order_created

The ledger lock is held across the payment request, so two placements for
the same customer run one after the other. A payment failure aborts before
any order exists. A failure while applying the reward discount rolls the
order back. Tracking storage failures are logged only; a broken reward
cycle aborts the placement.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from laundryman.adapters import get_order_store, get_payment_collector
from laundryman.exceptions import LaundrymanError, RewardInvariantError
from laundryman.gates import Gates
from laundryman.models import (
    Order,
    OrderStatus,
    PaymentStatus,
    PaymentTransaction,
    TransactionStatus,
)
from laundryman.protocols.customer import Actor
from laundryman.services import customer as customer_service
from laundryman.signals import order_created, order_status_changed

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass
class PlacedOrder:
    """Outcome of place_order()."""

    order: Order
    payment: PaymentTransaction | None = None
    reward: object | None = None  # DiscountResult when a discount was due
    tracking: object | None = None  # TrackResult, None for reward orders or on failure

    @property
    def reward_applied(self) -> bool:
        return bool(self.reward is not None and self.reward.success)

    def to_dict(self) -> dict:
        order = self.order
        data = {
            "success": True,
            "message": "Order created successfully",
            "order": {
                "id": order.pk,
                "customerId": order.customer.code,
                "status": order.status,
                "total": float(order.total),
                "originalTotal": float(order.original_total) if order.original_total is not None else None,
                "rewardDiscount": float(order.reward_discount),
                "isRewardOrder": order.is_reward_order,
                "paymentStatus": order.payment_status,
                "paymentReference": order.payment_reference,
            },
        }
        if self.payment is not None:
            data["payment"] = {
                "reference": self.payment.reference,
                "operator": self.payment.operator,
                "ussdCode": self.payment.ussd_code,
            }
        if self.reward is not None:
            data["reward"] = self.reward.to_dict()
        if self.tracking is not None:
            data["rewardStatus"] = self.tracking.reward_status.to_dict()
        return data


def _subtotal(items: list[dict]) -> Decimal:
    total = sum(
        (Decimal(str(item["price"])) * int(item.get("quantity", 1)) for item in items),
        Decimal("0"),
    )
    return total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# =============================================================================
# Placement
# =============================================================================


def place_order(
    actor: Actor,
    items: list[dict],
    pickup_date,
    pickup_location: dict,
    dropoff_location: dict,
    notes: str = "",
    customer_code: str | None = None,
    payment_phone: str | None = None,
    apply_reward: bool = True,
) -> PlacedOrder:
    """
    Validate, charge and persist a laundry order.

    Args:
        actor: Who places the order (customer for self, staff for a customer)
        items: [{"name", "price", "quantity", "id"/"item_ref"}]
        pickup_date: When the laundry is collected
        pickup_location: {"address", "coordinates": {"latitude", "longitude"}}
        dropoff_location: Same shape as pickup_location
        notes: Free text for the laundry
        customer_code: Target customer when a staff member acts
        payment_phone: Mobile money number to charge; no payment when omitted
        apply_reward: Apply a pending reward discount to this order

    Returns:
        PlacedOrder

    Raises:
        GateError: Invalid items, locations or payment number
        LaundrymanError: NOT_AUTHORIZED, CUSTOMER_NOT_FOUND,
            PAYMENT_INITIATION_FAILED, ORDER_NOT_FOUND (discount rollback),
            REWARD_UNAVAILABLE (charged amount no longer matches the order)
        RewardInvariantError: The reward cycle is corrupt
    """
    Gates.order_has_items(items)
    Gates.location_is_valid(pickup_location, field="pickup_location")
    Gates.location_is_valid(dropoff_location, field="dropoff_location")
    if payment_phone:
        Gates.payment_phone(payment_phone)
        payment_phone = Gates.normalize_phone(payment_phone)

    cust = customer_service.resolve_for_actor(actor, customer_code)
    subtotal = _subtotal(items)

    # Imported here: contrib.rewards depends on core, not the other way round.
    from laundryman.contrib.rewards.service import RewardService

    payment = None
    reward = None
    tracking = None
    try:
        with transaction.atomic():
            # The ledger row stays locked until commit, so a concurrent
            # apply for this customer waits instead of consuming the
            # discount we are about to charge for.
            reward_due = False
            charge = subtotal
            if apply_reward:
                eligibility = RewardService.check_discount_eligibility(cust.code, lock=True)
                if eligibility.is_eligible:
                    reward_due = True
                    charge = max(ZERO, subtotal - eligibility.discount_amount)

            if payment_phone and charge > 0:
                payment = _collect_payment(cust, charge, payment_phone)

            order = get_order_store().create_order(
                {
                    "customer": cust,
                    "items": items,
                    "pickup_date": pickup_date,
                    "pickup_location": pickup_location,
                    "dropoff_location": dropoff_location,
                    "notes": notes or "",
                    "total": subtotal,
                    "payment_status": PaymentStatus.PENDING if payment else PaymentStatus.NOT_REQUIRED,
                    "payment_reference": payment.reference if payment else "",
                }
            )
            if payment is not None:
                payment.order = order
                payment.save(update_fields=["order", "updated_at"])

            if reward_due:
                reward = RewardService.apply_reward_discount(cust.code, order.pk, subtotal)
                if reward.success:
                    order.refresh_from_db()

            if order.total != charge:
                raise LaundrymanError(
                    "REWARD_UNAVAILABLE",
                    customer_code=cust.code,
                    charged=str(charge),
                    total=str(order.total),
                )

            if not (reward is not None and reward.success):
                tracking = _track_reward(cust.code, order.pk, order.total)
    except Exception:
        if payment is not None:
            logger.error(
                "Order for customer %s rolled back after payment %s was requested",
                cust.code,
                payment.reference,
            )
        raise

    logger.info(
        "Order %s created for customer %s by %s (total=%s, reward=%s)",
        order.pk,
        cust.code,
        actor.role,
        order.total,
        bool(reward and reward.success),
    )
    order_created.send(
        sender=Order,
        order=order,
        reward_applied=bool(reward and reward.success),
    )

    return PlacedOrder(order=order, payment=payment, reward=reward, tracking=tracking)


def _collect_payment(cust, amount: Decimal, phone_number: str) -> PaymentTransaction:
    """Request the mobile money payment and record it PENDING."""
    description = f"Laundry order for {cust.name}"
    try:
        receipt = get_payment_collector().collect(amount, phone_number, description)
    except LaundrymanError as exc:
        logger.warning("Payment initiation failed for %s: %s", cust.code, exc.message)
        raise LaundrymanError(
            "PAYMENT_INITIATION_FAILED",
            message=f"Failed to initiate payment: {exc.message}",
            customer_code=cust.code,
            provider_code=exc.code,
        ) from exc

    return PaymentTransaction.objects.create(
        customer=cust,
        reference=receipt.reference,
        amount=receipt.amount if receipt.amount is not None else amount,
        phone_number=phone_number,
        status=TransactionStatus.PENDING,
        operator=receipt.operator,
        ussd_code=receipt.ussd_code,
        description=description,
    )


def _track_reward(customer_code: str, order_id: int, amount):
    """Track the order in the reward cycle. Only invariant violations propagate."""
    from laundryman.contrib.rewards.service import RewardService

    try:
        return RewardService.track_order(customer_code, order_id, amount)
    except RewardInvariantError:
        raise
    except LaundrymanError:
        logger.exception("Reward tracking failed for order %s (%s)", order_id, customer_code)
        return None


# =============================================================================
# Status & queries
# =============================================================================


def get_order(order_id: int) -> Order | None:
    """Get order by id (via the configured store)."""
    return get_order_store().find_order(order_id)


def update_status(order_id: int, status: str) -> Order:
    """
    Move an order to another status.

    Stamps ``picked_up_at`` / ``delivered_at`` the first time the order
    reaches those states.

    Raises:
        LaundrymanError: INVALID_STATUS, ORDER_NOT_FOUND
    """
    if status not in OrderStatus.values:
        raise LaundrymanError("INVALID_STATUS", status=status, allowed=list(OrderStatus.values))

    order = get_order(order_id)
    if order is None:
        raise LaundrymanError("ORDER_NOT_FOUND", order_id=order_id)

    old_status = order.status
    patch = {"status": status}
    now = timezone.now()
    if status == OrderStatus.PICKED_UP and order.picked_up_at is None:
        patch["picked_up_at"] = now
    if status == OrderStatus.DELIVERED and order.delivered_at is None:
        patch["delivered_at"] = now

    order = get_order_store().update_order(order_id, patch)
    if order is None:
        raise LaundrymanError("ORDER_NOT_FOUND", order_id=order_id)

    if old_status != status:
        order_status_changed.send(
            sender=Order,
            order=order,
            old_status=old_status,
            new_status=status,
        )
    return order


def customer_orders(customer_code: str, limit: int | None = None) -> list[Order]:
    """Customer's orders, newest first."""
    qs = (
        Order.objects.filter(customer__code=customer_code)
        .order_by("-created_at", "-pk")
        .prefetch_related("items")
    )
    if limit:
        qs = qs[:limit]
    return list(qs)


def dashboard_stats(recent: int = 5) -> dict:
    """Counters for the reception dashboard (today = local calendar day)."""
    start = timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    today = Order.objects.filter(created_at__gte=start, created_at__lt=end)

    return {
        "totalOrdersToday": today.count(),
        "ordersInProgress": Order.objects.filter(status=OrderStatus.IN_PROGRESS).count(),
        "ordersReadyForPickup": Order.objects.filter(status=OrderStatus.READY_FOR_PICKUP).count(),
        "earningsToday": float(today.aggregate(total=Sum("total"))["total"] or 0),
        "recentOrders": [
            {
                "id": order.pk,
                "customerName": order.customer.name,
                "status": order.status,
                "total": float(order.total),
            }
            for order in Order.objects.select_related("customer")[:recent]
        ],
    }
