"""Tests for Laundryman management commands."""

from decimal import Decimal
from io import StringIO
from unittest import mock

import pytest
from django.core.management import CommandError, call_command

from laundryman.contrib.rewards.service import RewardService
from laundryman.models import Order


pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command(*args, stdout=out)
    return out.getvalue()


class TestValidateTotals:
    def test_reports_without_fixing(self, customer, make_order):
        order = make_order(customer, total=1000)
        Order.objects.filter(pk=order.pk).update(total=Decimal("900"))

        output = run("laundryman_validate_totals")

        assert f"Order {order.pk}" in output
        assert "Found 1 mismatched" in output
        order.refresh_from_db()
        assert order.total == Decimal("900")

    def test_fix_recomputes_reward_total(self, customer, make_order):
        order = make_order(customer, total=3000)
        Order.objects.filter(pk=order.pk).update(
            is_reward_order=True,
            reward_discount=Decimal("1680"),
            total=Decimal("3000"),
        )

        output = run("laundryman_validate_totals", "--fix")

        assert "Fixed 1 mismatched" in output
        order.refresh_from_db()
        assert order.total == Decimal("1320")
        assert order.original_total == Decimal("3000")

    def test_within_tolerance(self, customer, make_order):
        order = make_order(customer, total=1000)
        Order.objects.filter(pk=order.pk).update(total=Decimal("1000.50"))

        output = run("laundryman_validate_totals")

        assert "Found 0 mismatched" in output


class TestSyncPayments:
    def test_reports_count(self):
        with mock.patch("laundryman.services.payment.sync_pending", return_value=3) as sync:
            output = run("laundryman_sync_payments", "--limit", "5")

        sync.assert_called_once_with(limit=5)
        assert "Updated 3 transactions." in output


class TestResetRewards:
    def test_reset(self, customer, make_order):
        order = make_order(customer)
        RewardService.track_order(customer.code, order.pk, 1000)

        output = run("laundryman_reset_rewards", customer.code)

        assert "deleted" in output
        assert RewardService.get_ledger(customer.code) is None

    def test_missing_ledger(self, customer):
        with pytest.raises(CommandError):
            run("laundryman_reset_rewards", customer.code)
