"""Laundryman services (CORE only).

CORE services are exported here. The reward program lives in
laundryman.contrib.rewards (RewardService).
"""

from laundryman.services import customer
from laundryman.services import order
from laundryman.services import payment

__all__ = ["customer", "order", "payment"]
