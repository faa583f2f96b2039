"""
Laundryman Rewards - every tenth order earns a discount.

Orders accumulate into cycles of ten. When a cycle is full, the average
order amount becomes the discount for the customer's next order.

Usage:
    INSTALLED_APPS = [
        ...
        "laundryman",
        "laundryman.contrib.rewards",
    ]

    from laundryman.contrib.rewards import RewardService

    RewardService.track_order("PL24", order.pk, order.total)
    RewardService.check_discount_eligibility("PL24")
    RewardService.apply_reward_discount("PL24", next_order.pk, Decimal("3000"))
"""


def __getattr__(name):
    if name == "RewardService":
        from laundryman.contrib.rewards.service import RewardService

        return RewardService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RewardService"]
