"""
Django Laundryman - Laundry orders and order-cycle rewards.

Usage:
    from laundryman import RewardService
    from laundryman.gates import Gates, GateError, GateResult
    from laundryman.services import order as order_service

    placed = order_service.place_order(actor, items, pickup_date, pickup, dropoff)
    status = RewardService.get_customer_reward_status("PL24")
    eligibility = RewardService.check_discount_eligibility("PL24")

    # Gates validation
    Gates.order_has_items(items)
    Gates.location_is_valid(pickup, field="pickup_location")
"""


def __getattr__(name):
    if name == "RewardService":
        from laundryman.contrib.rewards.service import RewardService

        return RewardService
    if name == "Gates":
        from laundryman.gates import Gates

        return Gates
    if name == "GateError":
        from laundryman.gates import GateError

        return GateError
    if name == "GateResult":
        from laundryman.gates import GateResult

        return GateResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RewardService", "Gates", "GateError", "GateResult"]
__version__ = "0.3.0"
