"""Customer service - lookup, creation and actor resolution."""

import logging

from django.db import transaction

from laundryman.conf import laundryman_settings
from laundryman.exceptions import LaundrymanError
from laundryman.models import Customer, Sequence
from laundryman.protocols.customer import Actor, Role
from laundryman.signals import customer_created

logger = logging.getLogger(__name__)

CUSTOMER_SEQUENCE = "customerId"


def get(code: str) -> Customer | None:
    """Get customer by unique code."""
    try:
        return Customer.objects.get(code=code, is_active=True)
    except Customer.DoesNotExist:
        return None


def get_by_phone(phone: str) -> Customer | None:
    """Get customer by phone (digits and leading + only)."""
    phone_normalized = "".join(ch for ch in phone or "" if ch.isdigit() or ch == "+")
    if not phone_normalized:
        return None
    return Customer.objects.filter(phone=phone_normalized, is_active=True).first()


def next_code() -> str:
    """Hand out the next customer code (PL24, PL25, ...)."""
    value = Sequence.next_value(
        CUSTOMER_SEQUENCE, start=laundryman_settings.CUSTOMER_CODE_START
    )
    return f"{laundryman_settings.CUSTOMER_CODE_PREFIX}{value}"


def create(name: str, phone: str = "", email: str = "", **kwargs) -> Customer:
    """Create a new customer with a generated code."""
    with transaction.atomic():
        cust = Customer.objects.create(
            code=next_code(),
            name=name,
            phone=phone,
            email=email,
            **kwargs,
        )

    logger.info("Customer %s created", cust.code)
    customer_created.send(sender=Customer, customer=cust)
    return cust


def resolve_for_actor(actor: Actor, customer_code: str | None = None) -> Customer:
    """
    Resolve the customer an order is placed for.

    Customers always act for themselves (any ``customer_code`` passed is
    ignored). Receptionists and admins must name the customer.

    Raises:
        LaundrymanError: NOT_AUTHORIZED or CUSTOMER_NOT_FOUND
    """
    if actor.role == Role.CUSTOMER:
        code = actor.customer_code
    elif actor.role in Role.STAFF:
        code = customer_code
    else:
        raise LaundrymanError("NOT_AUTHORIZED", role=actor.role)

    if not code:
        raise LaundrymanError(
            "CUSTOMER_NOT_FOUND",
            message="Customer code is required",
            role=actor.role,
        )

    cust = get(code)
    if cust is None:
        raise LaundrymanError("CUSTOMER_NOT_FOUND", customer_code=code)
    return cust
