"""Laundryman protocols."""

from laundryman.protocols.customer import Actor, Role
from laundryman.protocols.orders import OrderStore
from laundryman.protocols.payments import CollectionReceipt, PaymentCollector

__all__ = [
    # Actors
    "Actor",
    "Role",
    # Orders
    "OrderStore",
    # Payments
    "CollectionReceipt",
    "PaymentCollector",
]
