"""PaymentTransaction model - mobile money collections."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TransactionStatus(models.TextChoices):
    PENDING = "PENDING", _("Pending")
    SUCCESSFUL = "SUCCESSFUL", _("Successful")
    FAILED = "FAILED", _("Failed")


class PaymentTransaction(models.Model):
    """
    Mobile money collection requested from a customer.

    Created PENDING when the collector accepts the request, linked to the
    order once it exists, and reconciled later by
    ``services.payment.sync_status()``.
    """

    customer = models.ForeignKey(
        "laundryman.Customer",
        on_delete=models.PROTECT,
        related_name="payment_transactions",
        verbose_name=_("customer"),
    )
    order = models.ForeignKey(
        "laundryman.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payment_transactions",
        verbose_name=_("order"),
    )

    reference = models.CharField(_("reference"), max_length=100, unique=True)
    amount = models.DecimalField(_("amount"), max_digits=12, decimal_places=2)
    phone_number = models.CharField(_("phone number"), max_length=20, blank=True)
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
    )
    operator = models.CharField(_("operator"), max_length=50, blank=True)
    ussd_code = models.CharField(_("USSD code"), max_length=50, blank=True)
    description = models.CharField(_("description"), max_length=255, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "laundryman_payment_transaction"
        verbose_name = _("payment transaction")
        verbose_name_plural = _("payment transactions")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.reference}: {self.amount} ({self.status})"
