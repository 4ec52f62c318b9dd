"""
Tests for the waiting transaction store.
"""
import pytest

from core_backend.exceptions import NotFound
from orders.cart import CartItem
from orders.models import WaitingTransaction
from orders.services import WaitingTransactionService


@pytest.mark.django_db
class TestLookups:

    def test_require_missing_raises(self):
        with pytest.raises(NotFound, match="Transaction MX not found"):
            WaitingTransactionService.require("MX")

    def test_get_missing_returns_none(self):
        assert WaitingTransactionService.get("MX") is None

    def test_list_open_filters_and_orders(self, make_transaction, table_one, server, second_server):
        first = make_transaction(staff=server, table=table_one)
        second = make_transaction(staff=server)
        make_transaction(staff=second_server, table=table_one)
        done = make_transaction(staff=server)
        WaitingTransaction.objects.filter(pk=done.pk).update(
            status=WaitingTransaction.TransactionStatus.CANCELLED
        )

        assert list(WaitingTransactionService.list_open(staff_id=server.pk)) == [first, second]
        assert list(
            WaitingTransactionService.list_open(staff_id=server.pk, table_id=table_one.table_id)
        ) == [first]

    def test_list_owned_by_ignores_status(self, make_transaction, server, second_server):
        first = make_transaction(staff=server)
        done = make_transaction(staff=server)
        make_transaction(staff=second_server)
        WaitingTransaction.objects.filter(pk=done.pk).update(
            status=WaitingTransaction.TransactionStatus.COMPLETED
        )

        assert list(WaitingTransactionService.list_owned_by(server.pk)) == [first, done]

    def test_require_many_keeps_caller_order(self, make_transaction):
        first = make_transaction()
        second = make_transaction()

        locked = WaitingTransactionService.require_many(
            [second.transaction_id, first.transaction_id]
        )

        assert locked == [second, first]

    def test_require_many_reports_first_missing_id(self, make_transaction):
        waiting = make_transaction()

        with pytest.raises(NotFound, match="Transaction MX not found"):
            WaitingTransactionService.require_many([waiting.transaction_id, "MX", "MY"])


@pytest.mark.django_db
class TestWrites:

    def test_insert_and_save_items(self, server):
        waiting = WaitingTransactionService.insert(
            "M1", [CartItem(product_id="P1", name="Tea", quantity=1, price=2)], staff=server
        )

        items = waiting.get_items()
        items[0].quantity = 5
        WaitingTransactionService.save_items(waiting, items)

        stored = WaitingTransaction.objects.get(pk="M1")
        assert stored.get_items()[0].quantity == 5
        assert stored.staff == server
        assert stored.status == WaitingTransaction.TransactionStatus.PENDING

    def test_insert_refuses_existing_id(self, make_transaction):
        from django.db import IntegrityError, transaction

        waiting = make_transaction()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                WaitingTransactionService.insert(waiting.transaction_id, [])

    def test_delete_many(self, make_transaction):
        first, second, kept = make_transaction(), make_transaction(), make_transaction()

        deleted = WaitingTransactionService.delete_many([first.pk, second.pk])

        assert deleted == 2
        assert list(WaitingTransaction.objects.all()) == [kept]
