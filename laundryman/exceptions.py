"""Laundryman exceptions."""


class LaundrymanError(Exception):
    """
    Structured exception for laundry operations.

    Carries a stable ``code``, a human message (defaulted per code) and
    arbitrary context ``data``.

    Usage:
        try:
            RewardService.track_order("PL24", order.pk, amount)
        except LaundrymanError as e:
            if e.code == "REWARD_INVALID_AMOUNT":
                handle_bad_amount()
    """

    _default_messages = {
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "NOT_AUTHORIZED": "Not authorized to create orders",
        "ORDER_NOT_FOUND": "Order not found",
        "INVALID_STATUS": "Invalid order status",
        "TRANSACTION_NOT_FOUND": "Payment transaction not found",
        "PAYMENT_INITIATION_FAILED": "Failed to initiate payment",
        "PAYMENT_STATUS_FAILED": "Failed to check payment status",
        "PAYMENT_PROVIDER_ERROR": "Payment provider error",
        "REWARD_INVALID_AMOUNT": "Reward amounts must be non-negative numbers",
        "REWARD_TRACKING_FAILED": "Failed to track order for rewards",
        "REWARD_INVARIANT": "Reward cycle invariant violated",
        "REWARD_UNAVAILABLE": "Reward discount no longer available for this order",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class RewardInvariantError(LaundrymanError):
    """
    Reward ledger reached a state the engine never produces.

    Raised on programmer errors (e.g. computing a discount for a cycle that
    is not full). Never converted into a soft failure.
    """

    def __init__(self, message: str | None = None, **data):
        super().__init__("REWARD_INVARIANT", message=message, **data)
