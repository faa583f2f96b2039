"""Payment collector protocol (mobile money)."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class CollectionReceipt:
    """Provider acknowledgement of a collection request."""

    reference: str
    operator: str = ""
    ussd_code: str = ""
    # Amount actually requested from the wallet, when the provider rounds
    amount: Decimal | None = None


@runtime_checkable
class PaymentCollector(Protocol):
    """
    Protocol for requesting mobile money payments.

    Treated as slow and unreliable. Implementations raise
    ``LaundrymanError("PAYMENT_PROVIDER_ERROR")`` with the provider message
    when a call fails. Implemented by adapters/campay.py.

    Configuration in settings.py:
        LAUNDRYMAN = {
            "PAYMENT_COLLECTOR_BACKEND": "laundryman.adapters.campay.CampayCollector",
        }
    """

    def collect(self, amount: Decimal, phone_number: str, description: str) -> CollectionReceipt:
        """Ask the customer's wallet for ``amount``. Returns the provider receipt."""
        ...

    def check_status(self, reference: str) -> str:
        """Return PENDING, SUCCESSFUL or FAILED for a previous collection."""
        ...
