"""
Laundryman signals - public event API.

Emitted signals:
- customer_created: Emitted by services.customer.create()
- order_created: Emitted by services.order.place_order()
- order_status_changed: Emitted by services.order.update_status()
- reward_cycle_completed: Emitted by RewardService when a cycle fills up
- reward_discount_applied: Emitted by RewardService.apply_reward_discount()
"""

from django.dispatch import Signal

# Customer signals (emitted by services)
customer_created = Signal()  # sender=Customer, customer=Customer

# Order signals (emitted by services)
order_created = Signal()  # sender=Order, order=Order, reward_applied=bool
order_status_changed = Signal()  # sender=Order, order=Order, old_status, new_status

# Reward signals (emitted by contrib.rewards)
reward_cycle_completed = Signal()  # sender=RewardLedger, ledger, discount_amount
reward_discount_applied = Signal()  # sender=RewardLedger, ledger, order_id, discount_amount
