"""
Laundryman Gates - Validation rules.

G1: OrderHasItems - Order carries at least one well-formed line item
G2: LocationIsValid - Pickup/dropoff have an address and in-range coordinates
G3: AmountNonNegative - Money amounts are finite, non-negative numbers
G4: PaymentPhone - Mobile money number is plausible
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


class GateError(Exception):
    """Gate validation error."""

    def __init__(self, gate_name: str, message: str, details: dict | None = None):
        self.gate_name = gate_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{gate_name}] {message}")


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


def _number(value) -> Decimal | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Laundryman validation gates."""

    # =========================================================================
    # G1: Order Has Items
    # =========================================================================

    @classmethod
    def order_has_items(cls, items) -> GateResult:
        """
        G1: At least one item; each with a name, price >= 0 and quantity >= 1.

        Args:
            items: List of {name, price, quantity, item_ref?} dicts

        Raises:
            GateError: If the list is empty or an item is malformed
        """
        if not items or not isinstance(items, (list, tuple)):
            raise GateError(
                "G1_OrderHasItems",
                "Order must include at least one item.",
            )

        for index, item in enumerate(items):
            if not isinstance(item, dict) or not item.get("name"):
                raise GateError(
                    "G1_OrderHasItems",
                    "Each item needs a name.",
                    {"index": index},
                )
            price = _number(item.get("price"))
            if price is None or price < 0:
                raise GateError(
                    "G1_OrderHasItems",
                    "Item price must be a non-negative number.",
                    {"index": index, "price": item.get("price")},
                )
            quantity = item.get("quantity", 1)
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                raise GateError(
                    "G1_OrderHasItems",
                    "Quantity must be at least 1.",
                    {"index": index, "quantity": quantity},
                )

        return GateResult(True, "G1_OrderHasItems")

    @classmethod
    def check_order_has_items(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.order_has_items(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Location Is Valid
    # =========================================================================

    @classmethod
    def location_is_valid(cls, location, field: str = "location") -> GateResult:
        """
        G2: Location has an address and coordinates within range.

        Args:
            location: {"address": str, "coordinates": {"latitude", "longitude"}}
            field: Field name reported in the error (pickup_location, ...)

        Raises:
            GateError: If address or coordinates are missing or out of range
        """
        if not isinstance(location, dict) or not str(location.get("address") or "").strip():
            raise GateError(
                "G2_LocationIsValid",
                f"{field}: address is required.",
                {"field": field},
            )

        coordinates = location.get("coordinates")
        if not isinstance(coordinates, dict):
            raise GateError(
                "G2_LocationIsValid",
                f"{field}: coordinates are required.",
                {"field": field},
            )

        latitude = _number(coordinates.get("latitude"))
        if latitude is None or not -90 <= latitude <= 90:
            raise GateError(
                "G2_LocationIsValid",
                f"{field}: latitude must be between -90 and 90.",
                {"field": field, "latitude": coordinates.get("latitude")},
            )

        longitude = _number(coordinates.get("longitude"))
        if longitude is None or not -180 <= longitude <= 180:
            raise GateError(
                "G2_LocationIsValid",
                f"{field}: longitude must be between -180 and 180.",
                {"field": field, "longitude": coordinates.get("longitude")},
            )

        return GateResult(True, "G2_LocationIsValid")

    @classmethod
    def check_location_is_valid(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.location_is_valid(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G3: Amount Non-Negative
    # =========================================================================

    @classmethod
    def amount_non_negative(cls, amount, field: str = "amount") -> GateResult:
        """
        G3: Amount is a finite number >= 0.

        Raises:
            GateError: If amount is negative or not a number
        """
        number = _number(amount)
        if number is None or number < 0:
            raise GateError(
                "G3_AmountNonNegative",
                f"{field} must be a non-negative number.",
                {"field": field, "value": str(amount)},
            )
        return GateResult(True, "G3_AmountNonNegative")

    @classmethod
    def check_amount_non_negative(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.amount_non_negative(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G4: Payment Phone
    # =========================================================================

    PHONE_PATTERN = re.compile(r"^\+?\d{9,15}$")

    @staticmethod
    def normalize_phone(phone_number: str | None) -> str:
        """Strip spaces and dashes: "+237 670-000-001" -> "+237670000001"."""
        return re.sub(r"[\s-]", "", phone_number or "")

    @classmethod
    def payment_phone(cls, phone_number: str) -> GateResult:
        """
        G4: Mobile money number is 9-15 digits (optional leading +).

        Raises:
            GateError: If the number cannot be charged
        """
        normalized = cls.normalize_phone(phone_number)
        if not cls.PHONE_PATTERN.match(normalized):
            raise GateError(
                "G4_PaymentPhone",
                "Invalid mobile money number.",
                {"phone_number": phone_number},
            )
        return GateResult(True, "G4_PaymentPhone")

    @classmethod
    def check_payment_phone(cls, phone_number: str) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.payment_phone(phone_number)
            return True
        except GateError:
            return False
