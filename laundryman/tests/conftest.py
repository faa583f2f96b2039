"""Pytest fixtures for Laundryman tests."""

from decimal import Decimal

import pytest
from django.utils import timezone

from laundryman.models import Customer, Order, OrderItem
from laundryman.protocols.customer import Actor, Role


@pytest.fixture
def customer(db):
    """Create a test customer."""
    return Customer.objects.create(
        code="PL24",
        name="Jean Mbarga",
        email="Jean@Example.com",
        phone="+237 670 000 001",
    )


@pytest.fixture
def other_customer(db):
    """Create a second customer."""
    return Customer.objects.create(
        code="PL25",
        name="Alice Ngo",
        phone="+237690000002",
    )


@pytest.fixture
def location():
    """A valid pickup/dropoff location."""
    return {
        "address": "Rue 1.234, Bastos, Yaounde",
        "coordinates": {"latitude": 3.8480, "longitude": 11.5021},
    }


@pytest.fixture
def items():
    """Basket worth 3000 (2 x 1000 + 1 x 1000)."""
    return [
        {"id": "shirt", "name": "Shirt", "price": 1000, "quantity": 2},
        {"id": "trousers", "name": "Trousers", "price": 1000, "quantity": 1},
    ]


@pytest.fixture
def customer_actor(customer):
    return Actor(role=Role.CUSTOMER, customer_code=customer.code, name=customer.name)


@pytest.fixture
def receptionist():
    return Actor(role=Role.RECEPTIONIST, name="Front desk")


@pytest.fixture
def make_order(db, location):
    """Factory for persisted orders (one line item worth ``total``)."""

    def _make(customer, total=Decimal("1000"), **kwargs):
        total = Decimal(str(total))
        order = Order.objects.create(
            customer=customer,
            pickup_date=timezone.now(),
            pickup_location=location,
            dropoff_location=location,
            total=total,
            **kwargs,
        )
        OrderItem.objects.create(order=order, name="Bundle", price=total, quantity=1)
        return order

    return _make
