"""Order store protocol for cross-app communication."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from laundryman.models import Order


@runtime_checkable
class OrderStore(Protocol):
    """
    Protocol for persisting orders.

    The reward engine writes reward fields through this interface; it does
    not own order persistence. Implemented by adapters/django_orders.py.

    Configuration in settings.py:
        LAUNDRYMAN = {
            "ORDER_STORE_BACKEND": "laundryman.adapters.django_orders.DjangoOrderStore",
        }
    """

    def create_order(self, data: dict[str, Any]) -> "Order":
        """
        Persist a new order.

        Args:
            data: Order fields plus an ``items`` list of
                {item_ref, name, price, quantity} dicts

        Returns:
            Created Order
        """
        ...

    def update_order(self, order_id: int, patch: dict[str, Any]) -> "Order | None":
        """
        Apply a partial update.

        Returns:
            Updated Order, or None if it does not exist
        """
        ...

    def find_order(self, order_id: int) -> "Order | None":
        """Return the order or None."""
        ...
