"""Tests for Laundryman models."""

from decimal import Decimal

import pytest

from laundryman.models import Customer, OrderItem, OrderStatus, PaymentStatus, Sequence


pytestmark = pytest.mark.django_db


class TestCustomer:
    """Tests for Customer model."""

    def test_create_customer(self, customer):
        assert customer.code == "PL24"
        assert customer.is_active is True
        assert str(customer) == "Jean Mbarga (PL24)"

    def test_phone_normalized_on_save(self, customer):
        assert customer.phone == "+237670000001"

    def test_email_lowercased_on_save(self, customer):
        assert customer.email == "jean@example.com"

    def test_uuid_is_unique(self, customer, other_customer):
        assert customer.uuid != other_customer.uuid


class TestSequence:
    """Tests for Sequence counters."""

    def test_starts_after_start_value(self, db):
        assert Sequence.next_value("customerId", start=23) == 24
        assert Sequence.next_value("customerId", start=23) == 25

    def test_counters_are_independent(self, db):
        Sequence.next_value("a")
        Sequence.next_value("a")
        assert Sequence.next_value("b") == 1
        assert Sequence.objects.get(name="a").value == 2


class TestOrder:
    """Tests for Order and OrderItem."""

    def test_defaults(self, customer, make_order):
        order = make_order(customer, total=1500)

        assert order.status == OrderStatus.PENDING_PICKUP
        assert order.payment_status == PaymentStatus.PENDING
        assert order.is_reward_order is False
        assert order.reward_discount == Decimal("0")
        assert order.original_total is None

    def test_items_total(self, customer, make_order):
        order = make_order(customer, total=1000)
        OrderItem.objects.create(order=order, name="Duvet", price=Decimal("2500"), quantity=2)

        assert order.items_total == Decimal("6000")

    def test_line_total(self, customer, make_order):
        order = make_order(customer)
        item = OrderItem(order=order, name="Shirt", price=Decimal("750.50"), quantity=3)
        assert item.line_total == Decimal("2251.50")

    def test_customer_orders_relation(self, customer, make_order):
        make_order(customer)
        make_order(customer)
        assert Customer.objects.get(pk=customer.pk).orders.count() == 2
