"""Payment service - reconciliation of mobile money collections."""

import logging

from django.db import transaction

from laundryman.adapters import get_payment_collector
from laundryman.exceptions import LaundrymanError
from laundryman.models import Order, PaymentStatus, PaymentTransaction, TransactionStatus

logger = logging.getLogger(__name__)

# Provider status -> order payment status
ORDER_PAYMENT_STATUS = {
    TransactionStatus.SUCCESSFUL: PaymentStatus.SUCCESSFUL,
    TransactionStatus.FAILED: PaymentStatus.FAILED,
}


def get_transaction(reference: str) -> PaymentTransaction | None:
    """Get transaction by provider reference."""
    try:
        return PaymentTransaction.objects.select_related("order").get(reference=reference)
    except PaymentTransaction.DoesNotExist:
        return None


def sync_status(reference: str, collector=None) -> PaymentTransaction:
    """
    Ask the provider for the status of a collection and store it.

    The linked order's payment_status follows SUCCESSFUL/FAILED outcomes.

    Raises:
        LaundrymanError: TRANSACTION_NOT_FOUND, PAYMENT_STATUS_FAILED
    """
    txn = get_transaction(reference)
    if txn is None:
        raise LaundrymanError("TRANSACTION_NOT_FOUND", reference=reference)

    collector = collector or get_payment_collector()
    try:
        status = collector.check_status(reference).upper()
    except LaundrymanError as exc:
        raise LaundrymanError(
            "PAYMENT_STATUS_FAILED",
            message=f"Failed to check payment status: {exc.message}",
            reference=reference,
        ) from exc

    if status not in TransactionStatus.values:
        logger.warning("Unknown status %r for transaction %s", status, reference)
        return txn

    with transaction.atomic():
        if txn.status != status:
            txn.status = status
            txn.save(update_fields=["status", "updated_at"])
        order_status = ORDER_PAYMENT_STATUS.get(status)
        if txn.order_id and order_status:
            Order.objects.filter(pk=txn.order_id).update(payment_status=order_status)

    logger.info("Transaction %s is %s", reference, status)
    return txn


def sync_pending(limit: int | None = None) -> int:
    """
    Reconcile PENDING transactions, oldest first.

    Individual failures are logged and skipped.

    Returns:
        Number of transactions whose status changed
    """
    qs = PaymentTransaction.objects.filter(status=TransactionStatus.PENDING).order_by("created_at", "pk")
    if limit:
        qs = qs[:limit]

    collector = get_payment_collector()
    updated = 0
    for txn in qs:
        try:
            synced = sync_status(txn.reference, collector=collector)
        except LaundrymanError:
            logger.exception("Could not sync transaction %s", txn.reference)
            continue
        if synced.status != TransactionStatus.PENDING:
            updated += 1
    return updated
