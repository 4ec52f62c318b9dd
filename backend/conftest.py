"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import itertools
from decimal import Decimal

import pytest

from core_backend.utils.ids import SequentialIdGenerator


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/restaurant-operations/print-bill/pending/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def id_generator():
    """Deterministic ids (PBR-000001, M000002...) shared across one test."""
    return SequentialIdGenerator()


# ============================================================================
# STAFF FIXTURES
# ============================================================================

@pytest.fixture
def server(db):
    from staff.models import Staff
    return Staff.objects.create(first_name="Ana", last_name="Lopez", is_active=True)


@pytest.fixture
def second_server(db):
    from staff.models import Staff
    return Staff.objects.create(first_name="Ben", last_name="Ortiz", is_active=True)


@pytest.fixture
def inactive_server(db):
    from staff.models import Staff
    return Staff.objects.create(first_name="Cara", last_name="Diaz", is_active=False)


# ============================================================================
# TABLE FIXTURES
# ============================================================================

@pytest.fixture
def make_table(db):
    """
    Factory for tables, optionally with seats.

    Usage:
        table = make_table("T5", number=5, seats=["Occupied", "Available"])
    """
    from tables.models import Seat, Table, TableStatus

    def _make_table(table_id, number=1, name="", status=TableStatus.AVAILABLE, seats=()):
        table = Table.objects.create(table_id=table_id, number=number, name=name, status=status)
        for seat_number, seat_status in enumerate(seats, start=1):
            Seat.objects.create(table=table, seat_number=seat_number, status=seat_status)
        return table

    return _make_table


@pytest.fixture
def table_one(make_table):
    return make_table("T1", number=1, name="Window 1")


@pytest.fixture
def table_two(make_table):
    return make_table("T2", number=2, name="Window 2")


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def make_item():
    """
    Build a cart item record as stored in WaitingTransaction.items.

    Usage:
        make_item("P1", quantity=2, price="10.00", tax_amount="1.30")
    """

    def _make_item(
        product_id,
        quantity=1,
        price="10.00",
        tax_amount="0",
        name=None,
        tax_id="T1",
        taxable=True,
        discount="0",
        staff_id=None,
        modifiers=(),
    ):
        return {
            "product_id": product_id,
            "name": name or f"Product {product_id}",
            "quantity": quantity,
            "price": str(Decimal(price)),
            "discount": str(Decimal(discount)),
            "tax_id": tax_id,
            "taxable": taxable,
            "tax_amount": str(Decimal(tax_amount)),
            "staff_id": staff_id,
            "applied_modifiers": [
                {"modifier_id": modifier_id, "modifier_name": modifier_id, "price_change": "0"}
                for modifier_id in modifiers
            ],
        }

    return _make_item


@pytest.fixture
def make_transaction(db):
    """
    Factory for open waiting transactions.

    Usage:
        waiting = make_transaction(items=[make_item("P1")], table=table_one, staff=server)
    """
    from orders.models import WaitingTransaction

    counter = itertools.count(1)

    def _make_transaction(items=(), table=None, staff=None, customer_id=None, notes="", transaction_id=None):
        return WaitingTransaction.objects.create(
            transaction_id=transaction_id or f"M2025011418{next(counter):04d}",
            items=list(items),
            table=table,
            table_number=table.number if table else None,
            table_name=table.name if table else "",
            staff=staff,
            customer_id=customer_id,
            notes=notes,
        )

    return _make_transaction
