"""Default implementations of the Laundryman protocols."""

from django.utils.module_loading import import_string

from laundryman.conf import laundryman_settings


def get_order_store():
    """Instantiate the configured OrderStore."""
    return import_string(laundryman_settings.ORDER_STORE_BACKEND)()


def get_payment_collector():
    """Instantiate the configured PaymentCollector."""
    return import_string(laundryman_settings.PAYMENT_COLLECTOR_BACKEND)()
