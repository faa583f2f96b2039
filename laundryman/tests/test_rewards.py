"""Tests for the order-cycle reward program."""

from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError, transaction

from laundryman.contrib.rewards.models import CompletedRewardCycle, RewardCycleEntry, RewardLedger
from laundryman.contrib.rewards.service import RewardService
from laundryman.exceptions import LaundrymanError, RewardInvariantError
from laundryman.gates import GateError
from laundryman.models import Order
from laundryman.signals import reward_cycle_completed, reward_discount_applied


pytestmark = pytest.mark.django_db

CYCLE_AMOUNTS = [1000, 1500, 2000, 1200, 1800, 2500, 1300, 1700, 2200, 1600]


@pytest.fixture
def track(customer, make_order):
    """Persist an order for ``customer`` and track it."""

    def _track(amount):
        order = make_order(customer, total=amount)
        return order, RewardService.track_order(customer.code, order.pk, amount)

    return _track


@pytest.fixture
def full_cycle(customer, track):
    """Ten tracked orders; returns their ids in tracking order."""
    return [track(amount)[0].pk for amount in CYCLE_AMOUNTS]


class TestTrackOrder:
    """Tests for RewardService.track_order."""

    def test_first_order_creates_ledger(self, customer, track):
        assert RewardService.get_ledger(customer.code) is None

        _, result = track(1500)

        assert result.success is True
        assert result.message == "Order tracked. 1/10 orders in current cycle."
        assert result.reward_status.current_cycle_order_count == 1
        assert result.reward_status.orders_until_discount == 9
        assert result.reward_status.current_cycle_total == Decimal("1500.00")
        assert RewardService.get_ledger(customer.code).total_orders_count == 1

    def test_seventh_order_message(self, track):
        for _ in range(6):
            track(1000)
        _, result = track(1000)
        assert result.message == "Order tracked. 7/10 orders in current cycle."

    def test_cycle_entries_keep_order(self, customer, track):
        ids = [track(amount)[0].pk for amount in (1000, 2000, 3000)]
        ledger = RewardService.get_ledger(customer.code)
        assert list(ledger.entries.values_list("order_id", flat=True)) == ids

    def test_tenth_order_makes_customer_eligible(self, customer, full_cycle):
        ledger = RewardService.get_ledger(customer.code)

        assert ledger.is_eligible_for_discount is True
        assert ledger.next_discount_amount == Decimal("1680.00")
        assert ledger.entries.count() == 10
        assert ledger.total_orders_count == 10

    def test_average_rounds_half_up(self, customer, track):
        # 9 x 1000 + 1000.05 = 10000.05 -> 1000.005 -> 1000.01
        for _ in range(9):
            track(1000)
        track(Decimal("1000.05"))
        assert RewardService.get_ledger(customer.code).next_discount_amount == Decimal("1000.01")

    def test_cycle_completed_signal(self, customer, track):
        received = []

        def handler(sender, ledger, discount_amount, **kwargs):
            received.append(discount_amount)

        reward_cycle_completed.connect(handler)
        try:
            for amount in CYCLE_AMOUNTS:
                track(amount)
        finally:
            reward_cycle_completed.disconnect(handler)

        assert received == [Decimal("1680.00")]

    def test_cycle_never_exceeds_size_while_discount_pending(self, customer, full_cycle, track):
        _, result = track(5000)

        ledger = RewardService.get_ledger(customer.code)
        assert ledger.entries.count() == 10
        assert ledger.total_orders_count == 11
        assert ledger.next_discount_amount == Decimal("1680.00")
        assert "waiting" in result.message

    def test_negative_amount_rejected(self, customer, make_order):
        order = make_order(customer)
        with pytest.raises(LaundrymanError) as exc:
            RewardService.track_order(customer.code, order.pk, -100)

        assert exc.value.code == "REWARD_INVALID_AMOUNT"
        assert RewardService.get_ledger(customer.code) is None
        assert isinstance(exc.value.__cause__, GateError)
        assert exc.value.__cause__.gate_name == "G3_AmountNonNegative"

    @pytest.mark.parametrize("amount", ["abc", None, True, float("nan")])
    def test_non_numeric_amount_rejected(self, customer, make_order, amount):
        order = make_order(customer)
        with pytest.raises(LaundrymanError) as exc:
            RewardService.track_order(customer.code, order.pk, amount)
        assert exc.value.code == "REWARD_INVALID_AMOUNT"

    def test_zero_amount_allowed(self, customer, track):
        _, result = track(0)
        assert result.reward_status.current_cycle_order_count == 1

    def test_unknown_customer(self, db):
        with pytest.raises(LaundrymanError) as exc:
            RewardService.track_order("PL999", 1, 1000)
        assert exc.value.code == "CUSTOMER_NOT_FOUND"

    def test_storage_error_is_wrapped(self, customer, make_order):
        order = make_order(customer)
        with mock.patch.object(
            RewardCycleEntry.objects, "create", side_effect=DatabaseError("disk full")
        ):
            with pytest.raises(LaundrymanError) as exc:
                RewardService.track_order(customer.code, order.pk, 1000)

        assert exc.value.code == "REWARD_TRACKING_FAILED"
        assert isinstance(exc.value.__cause__, DatabaseError)


class TestComputeDiscount:
    """Tests for the discount computation precondition."""

    def test_requires_full_cycle(self, customer, track):
        track(1000)
        ledger = RewardService.get_ledger(customer.code)

        with pytest.raises(RewardInvariantError) as exc:
            RewardService._compute_discount(ledger)

        assert exc.value.code == "REWARD_INVARIANT"
        assert "exactly 10 orders" in exc.value.message


class TestEligibility:
    """Tests for RewardService.check_discount_eligibility."""

    def test_no_ledger(self, customer):
        result = RewardService.check_discount_eligibility(customer.code)

        assert result.is_eligible is False
        assert result.discount_amount == Decimal("0")
        assert result.message == "No reward record found"

    def test_needs_more_orders(self, customer, track):
        for _ in range(3):
            track(1000)
        result = RewardService.check_discount_eligibility(customer.code)

        assert result.is_eligible is False
        assert result.orders_in_current_cycle == 3
        assert result.message == "Customer needs 7 more orders for discount"

    def test_eligible(self, customer, full_cycle):
        result = RewardService.check_discount_eligibility(customer.code)

        assert result.is_eligible is True
        assert result.discount_amount == Decimal("1680.00")
        assert result.to_dict()["discountAmount"] == 1680.0

    def test_locked_read_matches_plain_read(self, customer, full_cycle):
        with transaction.atomic():
            result = RewardService.check_discount_eligibility(customer.code, lock=True)

        assert result.is_eligible is True
        assert result.discount_amount == Decimal("1680.00")

    def test_locked_read_without_ledger(self, customer):
        with transaction.atomic():
            result = RewardService.check_discount_eligibility(customer.code, lock=True)

        assert result.is_eligible is False
        assert result.message == "No reward record found"


class TestApplyRewardDiscount:
    """Tests for RewardService.apply_reward_discount."""

    def test_no_ledger_rejected(self, customer, make_order):
        order = make_order(customer, total=3000)
        result = RewardService.apply_reward_discount(customer.code, order.pk, 3000)

        assert result.success is False
        assert result.discount_applied == Decimal("0")
        assert result.message == "No reward record found for customer"

    def test_not_eligible_rejected(self, customer, track, make_order):
        track(1000)
        order = make_order(customer, total=3000)
        result = RewardService.apply_reward_discount(customer.code, order.pk, 3000)

        assert result.success is False
        assert result.message == "Customer is not eligible for discount"

    def test_apply_discount(self, customer, full_cycle, make_order):
        order = make_order(customer, total=3000)

        result = RewardService.apply_reward_discount(customer.code, order.pk, 3000)

        assert result.success is True
        assert result.discount_applied == Decimal("1680.00")
        assert result.original_total == Decimal("3000.00")
        assert result.final_total == Decimal("1320.00")
        assert result.message == "Reward discount of 1680.00 applied! Cycle completed."

        order.refresh_from_db()
        assert order.total == Decimal("1320.00")
        assert order.original_total == Decimal("3000.00")
        assert order.reward_discount == Decimal("1680.00")
        assert order.is_reward_order is True

        ledger = RewardService.get_ledger(customer.code)
        assert ledger.is_eligible_for_discount is False
        assert ledger.next_discount_amount == Decimal("0")
        assert ledger.entries.count() == 0
        assert ledger.total_rewards_earned == Decimal("1680.00")

    def test_final_total_floored_at_zero(self, customer, full_cycle, make_order):
        order = make_order(customer, total=1000)
        result = RewardService.apply_reward_discount(customer.code, order.pk, 1000)

        assert result.final_total == Decimal("0")
        order.refresh_from_db()
        assert order.total == Decimal("0")

    def test_second_apply_is_rejected(self, customer, full_cycle, make_order):
        first = make_order(customer, total=3000)
        second = make_order(customer, total=3000)

        assert RewardService.apply_reward_discount(customer.code, first.pk, 3000).success is True
        result = RewardService.apply_reward_discount(customer.code, second.pk, 3000)

        assert result.success is False
        assert result.message == "Customer is not eligible for discount"
        second.refresh_from_db()
        assert second.is_reward_order is False
        assert RewardService.get_ledger(customer.code).total_rewards_earned == Decimal("1680.00")

    def test_completed_cycle_snapshot(self, customer, full_cycle, make_order):
        order = make_order(customer, total=3000)
        result = RewardService.apply_reward_discount(customer.code, order.pk, 3000)

        cycle = CompletedRewardCycle.objects.get(ledger__customer=customer)
        assert cycle.order_ids == full_cycle
        assert cycle.total_amount == Decimal("16800.00")
        assert cycle.average_amount == Decimal("1680.00")
        assert cycle.discount_order_id == order.pk
        assert result.cycle_completed["orderIds"] == full_cycle

    def test_missing_order_rolls_back(self, customer, full_cycle):
        missing_id = (Order.objects.order_by("-pk").first().pk) + 1000

        with pytest.raises(LaundrymanError) as exc:
            RewardService.apply_reward_discount(customer.code, missing_id, 3000)

        assert exc.value.code == "ORDER_NOT_FOUND"
        ledger = RewardService.get_ledger(customer.code)
        assert ledger.is_eligible_for_discount is True
        assert ledger.entries.count() == 10
        assert ledger.cycles.count() == 0

    def test_discount_applied_signal(self, customer, full_cycle, make_order):
        order = make_order(customer, total=3000)
        received = []

        def handler(sender, order_id, discount_amount, **kwargs):
            received.append((order_id, discount_amount))

        reward_discount_applied.connect(handler)
        try:
            RewardService.apply_reward_discount(customer.code, order.pk, 3000)
        finally:
            reward_discount_applied.disconnect(handler)

        assert received == [(order.pk, Decimal("1680.00"))]

    def test_new_cycle_starts_after_apply(self, customer, full_cycle, make_order, track):
        order = make_order(customer, total=3000)
        RewardService.apply_reward_discount(customer.code, order.pk, 3000)

        _, result = track(2000)
        assert result.message == "Order tracked. 1/10 orders in current cycle."


class TestStatusAndHistory:
    """Tests for read-only projections."""

    def test_status_for_new_customer(self, customer):
        status = RewardService.get_customer_reward_status(customer.code).to_dict()

        assert status == {
            "customerId": "PL24",
            "currentCycleOrderCount": 0,
            "ordersUntilDiscount": 10,
            "isEligibleForDiscount": False,
            "nextDiscountAmount": 0.0,
            "totalOrdersCount": 0,
            "completedCycles": 0,
            "totalRewardsEarned": 0.0,
            "currentCycleTotal": 0.0,
        }

    def test_status_after_full_cycle(self, customer, full_cycle):
        status = RewardService.get_customer_reward_status(customer.code)

        assert status.current_cycle_order_count == 10
        assert status.orders_until_discount == 0
        assert status.is_eligible_for_discount is True
        assert status.current_cycle_total == Decimal("16800.00")

    def test_history_for_new_customer(self, customer):
        history = RewardService.get_customer_reward_history(customer.code).to_dict()

        assert history["currentCycle"] == []
        assert history["completedCycles"] == []
        assert history["summary"] == {
            "totalOrdersCount": 0,
            "totalRewardsEarned": 0.0,
            "completedCyclesCount": 0,
        }

    def test_history_integrity(self, customer, full_cycle, make_order, track):
        reward_order = make_order(customer, total=3000)
        RewardService.apply_reward_discount(customer.code, reward_order.pk, 3000)
        next_order, _ = track(1200)

        history = RewardService.get_customer_reward_history(customer.code)
        ledger = RewardService.get_ledger(customer.code)

        assert len(history.completed_cycles) == 1
        assert history.completed_cycles[0]["orderIds"] == full_cycle
        assert [e["orderId"] for e in history.current_cycle] == [next_order.pk]
        assert history.total_rewards_earned == sum(
            (c["discountApplied"] for c in history.completed_cycles), Decimal("0")
        )
        assert ledger.total_orders_count == 11


class TestResetLedger:
    def test_reset(self, customer, track):
        track(1000)
        assert RewardService.reset_ledger(customer.code) is True
        assert RewardLedger.objects.filter(customer=customer).exists() is False
        assert RewardCycleEntry.objects.count() == 0

    def test_reset_without_ledger(self, customer):
        assert RewardService.reset_ledger(customer.code) is False
