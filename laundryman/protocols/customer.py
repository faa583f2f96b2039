"""Acting-user protocol for order placement."""

from dataclasses import dataclass


class Role:
    CUSTOMER = "customer"
    RECEPTIONIST = "receptionist"
    ADMIN = "admin"

    STAFF = (RECEPTIONIST, ADMIN)


@dataclass(frozen=True)
class Actor:
    """
    Who is placing an order.

    Built by the HTTP layer from the authenticated user. Customers carry
    their own ``customer_code``; staff act on behalf of a customer.
    """

    role: str
    customer_code: str | None = None
    name: str = ""

    @property
    def is_staff(self) -> bool:
        return self.role in Role.STAFF
