"""Reward models - per-customer ledger, current cycle and completed cycles."""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class RewardLedger(models.Model):
    """
    Customer reward ledger.

    One ledger per customer, created on the first tracked order. Plain data
    record: every mutation goes through ``RewardService`` under a row lock.

    - ``entries``: orders of the cycle in progress (at most one full cycle)
    - ``cycles``: completed cycles, one per applied discount
    - ``is_eligible_for_discount`` / ``next_discount_amount``: set when the
      cycle fills up, cleared when the discount is applied
    """

    customer = models.OneToOneField(
        "laundryman.Customer",
        on_delete=models.CASCADE,
        related_name="reward_ledger",
        verbose_name=_("customer"),
    )

    total_orders_count = models.PositiveIntegerField(
        _("total orders"),
        default=0,
        help_text=_("Orders ever tracked (never decreases)"),
    )
    is_eligible_for_discount = models.BooleanField(_("eligible for discount"), default=False)
    next_discount_amount = models.DecimalField(
        _("next discount"),
        max_digits=12,
        decimal_places=2,
        default=Decimal("0"),
    )
    total_rewards_earned = models.DecimalField(
        _("rewards earned"),
        max_digits=14,
        decimal_places=2,
        default=Decimal("0"),
        help_text=_("Sum of all applied discounts (never decreases)"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("reward ledger")
        verbose_name_plural = _("reward ledgers")

    def __str__(self):
        flag = " | discount pending" if self.is_eligible_for_discount else ""
        return f"{self.customer.code}: {self.total_orders_count} orders{flag}"


class RewardCycleEntry(models.Model):
    """Order recorded in the cycle currently in progress."""

    ledger = models.ForeignKey(
        RewardLedger,
        on_delete=models.CASCADE,
        related_name="entries",
        verbose_name=_("ledger"),
    )
    order = models.ForeignKey(
        "laundryman.Order",
        on_delete=models.PROTECT,
        related_name="reward_entries",
        verbose_name=_("order"),
    )
    amount = models.DecimalField(_("amount"), max_digits=12, decimal_places=2)
    recorded_at = models.DateTimeField(_("recorded at"), auto_now_add=True)

    class Meta:
        verbose_name = _("reward cycle entry")
        verbose_name_plural = _("reward cycle entries")
        ordering = ["recorded_at", "pk"]

    def __str__(self):
        return f"order #{self.order_id}: {self.amount}"


class CompletedRewardCycle(models.Model):
    """
    Immutable snapshot of a cycle closed by an applied discount.

    ``order_ids`` keeps the cycle's orders in tracking order, so the
    snapshot survives even if the orders are later archived.
    """

    ledger = models.ForeignKey(
        RewardLedger,
        on_delete=models.CASCADE,
        related_name="cycles",
        verbose_name=_("ledger"),
    )
    order_ids = models.JSONField(_("order ids"), default=list)
    total_amount = models.DecimalField(_("total amount"), max_digits=14, decimal_places=2)
    average_amount = models.DecimalField(_("average amount"), max_digits=12, decimal_places=2)
    discount_applied = models.DecimalField(_("discount applied"), max_digits=12, decimal_places=2)
    discount_order = models.ForeignKey(
        "laundryman.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reward_cycles",
        verbose_name=_("discount order"),
    )
    completed_at = models.DateTimeField(_("completed at"), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _("completed reward cycle")
        verbose_name_plural = _("completed reward cycles")
        ordering = ["completed_at", "pk"]

    def __str__(self):
        return f"{self.ledger.customer.code}: -{self.discount_applied} on order #{self.discount_order_id}"
