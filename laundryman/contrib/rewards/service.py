"""Reward service - order cycles, discount computation and application."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from django.db import DatabaseError, transaction
from django.db.models import Count, Sum

from laundryman.adapters import get_order_store
from laundryman.conf import laundryman_settings
from laundryman.contrib.rewards.models import (
    CompletedRewardCycle,
    RewardCycleEntry,
    RewardLedger,
)
from laundryman.exceptions import LaundrymanError, RewardInvariantError
from laundryman.gates import GateError, Gates
from laundryman.models import Customer
from laundryman.signals import reward_cycle_completed, reward_discount_applied

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
_CENT = Decimal("0.01")


def _q2(value: Decimal) -> Decimal:
    """Round half-up to 2 decimal places."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _amount(value) -> Decimal:
    """Coerce an order amount to Decimal; reject negatives and non-numbers (G3)."""
    try:
        Gates.amount_non_negative(value)
    except GateError as exc:
        raise LaundrymanError("REWARD_INVALID_AMOUNT", amount=str(value)) from exc
    return _q2(Decimal(str(value)))


def _jsonable(value):
    """Decimals become numbers and datetimes ISO strings, recursively."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _entry_dict(entry: RewardCycleEntry) -> dict:
    return {
        "orderId": entry.order_id,
        "amount": entry.amount,
        "recordedAt": entry.recorded_at,
    }


def _cycle_dict(cycle: CompletedRewardCycle) -> dict:
    return {
        "orderIds": list(cycle.order_ids),
        "totalAmount": cycle.total_amount,
        "averageAmount": cycle.average_amount,
        "discountApplied": cycle.discount_applied,
        "discountOrderId": cycle.discount_order_id,
        "completedAt": cycle.completed_at,
    }


# =============================================================================
# Results
# =============================================================================


@dataclass
class RewardStatus:
    """Live view of a customer's ledger (zero-valued when there is none)."""

    customer_code: str
    current_cycle_order_count: int
    orders_until_discount: int
    is_eligible_for_discount: bool
    next_discount_amount: Decimal
    total_orders_count: int
    completed_cycles: int
    total_rewards_earned: Decimal
    current_cycle_total: Decimal

    def to_dict(self) -> dict:
        return _jsonable(
            {
                "customerId": self.customer_code,
                "currentCycleOrderCount": self.current_cycle_order_count,
                "ordersUntilDiscount": self.orders_until_discount,
                "isEligibleForDiscount": self.is_eligible_for_discount,
                "nextDiscountAmount": self.next_discount_amount,
                "totalOrdersCount": self.total_orders_count,
                "completedCycles": self.completed_cycles,
                "totalRewardsEarned": self.total_rewards_earned,
                "currentCycleTotal": self.current_cycle_total,
            }
        )


@dataclass
class TrackResult:
    success: bool
    reward_status: RewardStatus
    message: str

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "rewardStatus": self.reward_status.to_dict(),
            "message": self.message,
        }


@dataclass
class EligibilityResult:
    is_eligible: bool
    discount_amount: Decimal
    orders_in_current_cycle: int
    message: str

    def to_dict(self) -> dict:
        return _jsonable(
            {
                "isEligible": self.is_eligible,
                "discountAmount": self.discount_amount,
                "ordersInCurrentCycle": self.orders_in_current_cycle,
                "message": self.message,
            }
        )


@dataclass
class DiscountResult:
    """
    Outcome of applying a reward discount.

    ``success=False`` is a business rejection (no ledger, not eligible),
    never a system error.
    """

    success: bool
    discount_applied: Decimal
    message: str
    original_total: Decimal | None = None
    final_total: Decimal | None = None
    cycle_completed: dict | None = None

    @classmethod
    def rejected(cls, message: str) -> "DiscountResult":
        return cls(success=False, discount_applied=ZERO, message=message)

    def to_dict(self) -> dict:
        data = {
            "success": self.success,
            "discountApplied": self.discount_applied,
            "message": self.message,
        }
        if self.success:
            data.update(
                originalTotal=self.original_total,
                finalTotal=self.final_total,
                cycleCompleted=self.cycle_completed,
            )
        return _jsonable(data)


@dataclass
class RewardHistory:
    customer_code: str
    current_cycle: list[dict] = field(default_factory=list)
    completed_cycles: list[dict] = field(default_factory=list)
    total_orders_count: int = 0
    total_rewards_earned: Decimal = ZERO

    def to_dict(self) -> dict:
        return _jsonable(
            {
                "customerId": self.customer_code,
                "currentCycle": self.current_cycle,
                "completedCycles": self.completed_cycles,
                "summary": {
                    "totalOrdersCount": self.total_orders_count,
                    "totalRewardsEarned": self.total_rewards_earned,
                    "completedCyclesCount": len(self.completed_cycles),
                },
            }
        )


# =============================================================================
# Service
# =============================================================================


class RewardService:
    """
    Service for the order-cycle reward program.

    Uses @classmethod for extensibility (consistent with other services).
    Ledger mutations run inside transaction.atomic() with the customer's
    ledger row locked, so concurrent orders of one customer serialise.
    """

    @classmethod
    def cycle_size(cls) -> int:
        return laundryman_settings.REWARD_CYCLE_SIZE

    # ------------------------------------------------------------------
    # Ledger access
    # ------------------------------------------------------------------

    @classmethod
    def get_ledger(cls, customer_code: str) -> RewardLedger | None:
        """Get reward ledger for customer (None if no order was tracked yet)."""
        try:
            return RewardLedger.objects.select_related("customer").get(
                customer__code=customer_code,
            )
        except RewardLedger.DoesNotExist:
            return None

    @classmethod
    def get_or_create_ledger(cls, customer_code: str) -> RewardLedger:
        """
        Get the customer's ledger, creating a zero-valued one if missing.

        Raises:
            LaundrymanError: CUSTOMER_NOT_FOUND
        """
        customer = cls._get_customer(customer_code)
        ledger, _ = RewardLedger.objects.get_or_create(customer=customer)
        return ledger

    @classmethod
    def reset_ledger(cls, customer_code: str) -> bool:
        """Delete the customer's ledger and its cycles. Returns True if one existed."""
        deleted, _ = RewardLedger.objects.filter(customer__code=customer_code).delete()
        if deleted:
            logger.warning("Reward ledger reset for customer %s", customer_code)
        return deleted > 0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @classmethod
    def track_order(cls, customer_code: str, order_id: int, amount) -> TrackResult:
        """
        Record an order in the customer's current cycle.

        When the cycle reaches its size, the discount is computed in the
        same transaction. While a discount is pending, further orders are
        counted but not added to the (full) cycle.

        Args:
            customer_code: Customer code
            order_id: Persisted order id
            amount: Order amount (non-negative)

        Returns:
            TrackResult with the updated status

        Raises:
            LaundrymanError: REWARD_INVALID_AMOUNT, CUSTOMER_NOT_FOUND,
                REWARD_TRACKING_FAILED (storage error)
        """
        amount = _amount(amount)
        size = cls.cycle_size()
        cycle_completed = False

        try:
            with transaction.atomic():
                ledger = cls._get_or_create_ledger_for_update(customer_code)
                ledger.total_orders_count += 1
                in_cycle = ledger.entries.count()

                if ledger.is_eligible_for_discount:
                    message = (
                        f"Order counted. Reward discount of {ledger.next_discount_amount} "
                        f"is waiting to be applied."
                    )
                elif in_cycle >= size:
                    raise RewardInvariantError(
                        "Full cycle without a pending discount",
                        customer_code=customer_code,
                        orders=in_cycle,
                    )
                else:
                    RewardCycleEntry.objects.create(ledger=ledger, order_id=order_id, amount=amount)
                    in_cycle += 1
                    if in_cycle == size:
                        cls._compute_discount(ledger)
                        cycle_completed = True
                    message = f"Order tracked. {in_cycle}/{size} orders in current cycle."

                ledger.save(update_fields=[
                    "total_orders_count",
                    "is_eligible_for_discount",
                    "next_discount_amount",
                    "updated_at",
                ])
        except DatabaseError as exc:
            raise LaundrymanError(
                "REWARD_TRACKING_FAILED",
                message=f"Failed to track order for rewards: {exc}",
                customer_code=customer_code,
                order_id=order_id,
            ) from exc

        logger.info(
            "Order %s tracked for customer %s. Current cycle: %s/%s orders",
            order_id,
            customer_code,
            in_cycle,
            size,
        )
        if cycle_completed:
            reward_cycle_completed.send(
                sender=RewardLedger,
                ledger=ledger,
                discount_amount=ledger.next_discount_amount,
            )

        return TrackResult(success=True, reward_status=cls._status_for(ledger), message=message)

    @classmethod
    def apply_reward_discount(cls, customer_code: str, order_id: int, original_total) -> DiscountResult:
        """
        Apply the pending discount to an order and close the cycle.

        Args:
            customer_code: Customer code
            order_id: Order receiving the discount (not one of the cycle orders)
            original_total: Order total before the discount

        Returns:
            DiscountResult; success=False when there is no ledger or no
            pending discount (business rejection, nothing changes)

        Raises:
            LaundrymanError: REWARD_INVALID_AMOUNT, ORDER_NOT_FOUND (rolled back)
        """
        original_total = _amount(original_total)
        size = cls.cycle_size()

        with transaction.atomic():
            ledger = cls._get_ledger_for_update(customer_code)
            if ledger is None:
                return DiscountResult.rejected("No reward record found for customer")
            if not ledger.is_eligible_for_discount:
                return DiscountResult.rejected("Customer is not eligible for discount")

            entries = list(ledger.entries.all())
            if len(entries) != size:
                raise RewardInvariantError(
                    "Pending discount without a full cycle",
                    customer_code=customer_code,
                    orders=len(entries),
                )

            discount = ledger.next_discount_amount
            final_total = max(ZERO, original_total - discount)

            cycle = CompletedRewardCycle.objects.create(
                ledger=ledger,
                order_ids=[entry.order_id for entry in entries],
                total_amount=sum((entry.amount for entry in entries), ZERO),
                average_amount=discount,
                discount_applied=discount,
                discount_order_id=order_id,
            )

            # Reset for next cycle
            ledger.total_rewards_earned += discount
            ledger.entries.all().delete()
            ledger.is_eligible_for_discount = False
            ledger.next_discount_amount = ZERO
            ledger.save(update_fields=[
                "total_rewards_earned",
                "is_eligible_for_discount",
                "next_discount_amount",
                "updated_at",
            ])

            order = get_order_store().update_order(
                order_id,
                {
                    "original_total": original_total,
                    "reward_discount": discount,
                    "total": final_total,
                    "is_reward_order": True,
                },
            )
            if order is None:
                raise LaundrymanError("ORDER_NOT_FOUND", order_id=order_id)

        logger.info(
            "Reward discount of %s applied to order %s for customer %s",
            discount,
            order_id,
            customer_code,
        )
        reward_discount_applied.send(
            sender=RewardLedger,
            ledger=ledger,
            order_id=order_id,
            discount_amount=discount,
        )

        return DiscountResult(
            success=True,
            discount_applied=discount,
            original_total=original_total,
            final_total=final_total,
            cycle_completed=_cycle_dict(cycle),
            message=f"Reward discount of {discount} applied! Cycle completed.",
        )

    # ------------------------------------------------------------------
    # Queries (read-only)
    # ------------------------------------------------------------------

    @classmethod
    def check_discount_eligibility(cls, customer_code: str, lock: bool = False) -> EligibilityResult:
        """
        Whether the customer's next order should receive the reward discount.

        With ``lock=True`` the ledger row stays locked until the caller's
        transaction ends, so the answer cannot go stale before the discount
        is applied. MUST then be called inside transaction.atomic().
        """
        ledger = cls._get_ledger_for_update(customer_code) if lock else cls.get_ledger(customer_code)
        if ledger is None:
            return EligibilityResult(
                is_eligible=False,
                discount_amount=ZERO,
                orders_in_current_cycle=0,
                message="No reward record found",
            )

        in_cycle = ledger.entries.count()
        if ledger.is_eligible_for_discount:
            message = f"Customer is eligible for discount of {ledger.next_discount_amount}"
        else:
            message = f"Customer needs {cls.cycle_size() - in_cycle} more orders for discount"

        return EligibilityResult(
            is_eligible=ledger.is_eligible_for_discount,
            discount_amount=ledger.next_discount_amount,
            orders_in_current_cycle=in_cycle,
            message=message,
        )

    @classmethod
    def get_customer_reward_status(cls, customer_code: str) -> RewardStatus:
        """Current reward status. Customers without orders get zero values."""
        ledger = cls.get_ledger(customer_code)
        if ledger is None:
            return RewardStatus(
                customer_code=customer_code,
                current_cycle_order_count=0,
                orders_until_discount=cls.cycle_size(),
                is_eligible_for_discount=False,
                next_discount_amount=ZERO,
                total_orders_count=0,
                completed_cycles=0,
                total_rewards_earned=ZERO,
                current_cycle_total=ZERO,
            )
        return cls._status_for(ledger)

    @classmethod
    def get_customer_reward_history(cls, customer_code: str) -> RewardHistory:
        """Completed cycles, current cycle detail and a summary."""
        ledger = cls.get_ledger(customer_code)
        if ledger is None:
            return RewardHistory(customer_code=customer_code)

        return RewardHistory(
            customer_code=ledger.customer.code,
            current_cycle=[_entry_dict(e) for e in ledger.entries.all()],
            completed_cycles=[_cycle_dict(c) for c in ledger.cycles.all()],
            total_orders_count=ledger.total_orders_count,
            total_rewards_earned=ledger.total_rewards_earned,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @classmethod
    def _compute_discount(cls, ledger: RewardLedger) -> Decimal:
        """
        Turn a full cycle into a pending discount (average order amount).

        Entries are kept until the discount is applied. Caller saves.

        Raises:
            RewardInvariantError: If the cycle is not exactly full
        """
        size = cls.cycle_size()
        amounts = list(ledger.entries.values_list("amount", flat=True))
        if len(amounts) != size:
            raise RewardInvariantError(
                f"Cannot calculate discount: cycle must have exactly {size} orders",
                customer_code=ledger.customer.code,
                orders=len(amounts),
            )

        average = _q2(sum(amounts, ZERO) / size)
        ledger.is_eligible_for_discount = True
        ledger.next_discount_amount = average
        return average

    @classmethod
    def _status_for(cls, ledger: RewardLedger) -> RewardStatus:
        size = cls.cycle_size()
        agg = ledger.entries.aggregate(count=Count("pk"), total=Sum("amount"))
        in_cycle = agg["count"] or 0
        return RewardStatus(
            customer_code=ledger.customer.code,
            current_cycle_order_count=in_cycle,
            orders_until_discount=max(0, size - in_cycle),
            is_eligible_for_discount=ledger.is_eligible_for_discount,
            next_discount_amount=ledger.next_discount_amount,
            total_orders_count=ledger.total_orders_count,
            completed_cycles=ledger.cycles.count(),
            total_rewards_earned=ledger.total_rewards_earned,
            current_cycle_total=agg["total"] or ZERO,
        )

    @classmethod
    def _get_customer(cls, customer_code: str) -> Customer:
        try:
            return Customer.objects.get(code=customer_code, is_active=True)
        except Customer.DoesNotExist:
            raise LaundrymanError("CUSTOMER_NOT_FOUND", customer_code=customer_code)

    @classmethod
    def _get_ledger_for_update(cls, customer_code: str) -> RewardLedger | None:
        """
        Get ledger with row-level lock for mutation.

        MUST be called inside transaction.atomic().
        Prevents lost updates on concurrent track/apply for one customer.
        """
        try:
            return (
                RewardLedger.objects
                .select_for_update()
                .select_related("customer")
                .get(customer__code=customer_code)
            )
        except RewardLedger.DoesNotExist:
            return None

    @classmethod
    def _get_or_create_ledger_for_update(cls, customer_code: str) -> RewardLedger:
        """Locked variant of get_or_create_ledger(). MUST be called inside transaction.atomic()."""
        customer = cls._get_customer(customer_code)
        RewardLedger.objects.get_or_create(customer=customer)
        return (
            RewardLedger.objects
            .select_for_update()
            .select_related("customer")
            .get(customer=customer)
        )
