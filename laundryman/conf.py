"""
Laundryman configuration.

Usage in settings.py:
    LAUNDRYMAN = {
        "REWARD_CYCLE_SIZE": 10,
        "PAYMENT_COLLECTOR_BACKEND": "laundryman.adapters.campay.CampayCollector",
        "CAMPAY_APP_ID": "...",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class LaundrymanSettings:
    """Laundryman configuration settings."""

    # Orders per reward cycle
    REWARD_CYCLE_SIZE: int = 10

    CURRENCY: str = "XAF"

    # Customer codes: PL24, PL25, ...
    CUSTOMER_CODE_PREFIX: str = "PL"
    CUSTOMER_CODE_START: int = 23

    # Backends (dotted paths)
    ORDER_STORE_BACKEND: str = "laundryman.adapters.django_orders.DjangoOrderStore"
    PAYMENT_COLLECTOR_BACKEND: str = "laundryman.adapters.campay.CampayCollector"

    # Payment gateway calls
    PAYMENT_TIMEOUT: float = 15.0
    PAYMENT_RETRIES: int = 1

    # Campay mobile money
    CAMPAY_BASE_URL: str = "https://demo.campay.net/api"
    CAMPAY_USERNAME: str = ""
    CAMPAY_PASSWORD: str = ""
    CAMPAY_APP_ID: str = ""

    # Allowed drift between stored and recomputed order totals
    TOTAL_TOLERANCE: int = 1


def get_laundryman_settings() -> LaundrymanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "LAUNDRYMAN", {})
    return LaundrymanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_laundryman_settings(), name)


laundryman_settings = _LazySettings()
