"""Laundryman models (CORE only).

CORE models are exported here. Contrib models are in their respective modules:
- laundryman.contrib.rewards: RewardLedger, RewardCycleEntry, CompletedRewardCycle
"""

from laundryman.models.sequence import Sequence
from laundryman.models.customer import Customer
from laundryman.models.order import Order, OrderItem, OrderStatus, PaymentStatus
from laundryman.models.transaction import PaymentTransaction, TransactionStatus

__all__ = [
    "Sequence",
    "Customer",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "PaymentTransaction",
    "TransactionStatus",
]
