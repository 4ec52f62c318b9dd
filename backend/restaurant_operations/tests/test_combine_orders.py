"""
Combine Orders Tests

Combining folds two or more open orders into one new order on a target
table. These tests cover the merge result, de-duplication of the input ids,
referential cleanup and the all-or-nothing guarantee.
"""
from decimal import Decimal
from unittest import mock

import pytest

from core_backend.exceptions import InactiveEntity, InvalidArgument, NotFound
from orders.models import WaitingTransaction
from restaurant_operations.models import (
    PayEntireBillRequest,
    PrintBillRequest,
    TaxAdjustmentAuditLog,
)
from restaurant_operations.services import (
    BillRequestQueueService,
    OrderCombinationService,
    TaxAdjustmentService,
)
from tables.models import TableStatus


@pytest.mark.django_db
class TestCombineOrders:

    def test_duplicate_items_are_merged(self, make_transaction, make_item, table_one, server, id_generator):
        """
        CRITICAL: P1 x2 + P1 x1 become a single P1 x3.

        Scenario:
        - T1 has P1 qty 2 at 10.00, T2 has P1 qty 1 at 10.00, no modifiers
        - Combine [T1, T2]
        - Expected: one item with quantity 3, merged count 1, sources deleted
        """
        first = make_transaction(items=[make_item("P1", quantity=2, price="10.00")])
        second = make_transaction(items=[make_item("P1", quantity=1, price="10.00")])

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        combined = WaitingTransaction.objects.get(pk=result["new_transaction_id"])
        items = combined.get_items()
        assert len(items) == 1
        assert items[0].product_id == "P1"
        assert items[0].quantity == 3
        assert result["merged_items_count"] == 1
        assert result["total_items"] == 1
        assert result["total_amount"] == Decimal("30.00")
        assert not WaitingTransaction.objects.filter(
            pk__in=[first.transaction_id, second.transaction_id]
        ).exists()

    def test_new_order_takes_target_table_and_staff(
        self, make_transaction, make_item, table_one, table_two, server, second_server, id_generator
    ):
        first = make_transaction(
            items=[make_item("P1")], table=table_two, staff=second_server, customer_id="C-7"
        )
        second = make_transaction(items=[make_item("P2")], customer_id="C-9")

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            notes="Birthday party",
            id_generator=id_generator,
        )

        combined = WaitingTransaction.objects.get(pk=result["new_transaction_id"])
        assert result["new_transaction_id"] == "M000001"
        assert combined.customer_id == "C-7"
        assert combined.table_id == table_one.table_id
        assert combined.table_number == 1
        assert combined.table_name == "Window 1"
        assert combined.staff_id == server.pk
        assert combined.status == WaitingTransaction.TransactionStatus.PENDING
        assert combined.notes == "Birthday party"
        assert result["combined_from_ids"] == [first.transaction_id, second.transaction_id]
        assert result["message"] == "Successfully combined 2 orders into 1 (merged 0 duplicate items)"

        table_one.refresh_from_db()
        assert table_one.status == TableStatus.OCCUPIED
        assert table_one.current_transaction_id == "M000001"

    def test_target_table_customer_is_left_alone(self, make_transaction, make_item, table_one, server, id_generator):
        """
        Scenario:
        - Target table already points at customer C-1
        - First source order has no customer
        - Expected: the table is Occupied by the new order and still points at C-1
        """
        table_one.current_customer_id = "C-1"
        table_one.save(update_fields=["current_customer_id"])
        first = make_transaction(items=[make_item("P1")])
        second = make_transaction(items=[make_item("P2")], customer_id="C-9")

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        table_one.refresh_from_db()
        assert table_one.status == TableStatus.OCCUPIED
        assert table_one.current_transaction_id == result["new_transaction_id"]
        assert table_one.current_customer_id == "C-1"
        combined = WaitingTransaction.objects.get(pk=result["new_transaction_id"])
        assert combined.customer_id is None

    def test_items_follow_caller_order_not_key_order(
        self, make_transaction, make_item, table_one, server, id_generator
    ):
        first = make_transaction(items=[make_item("P1")], customer_id="C-1")
        second = make_transaction(items=[make_item("P2")], customer_id="C-2")

        result = OrderCombinationService.combine_orders(
            [second.transaction_id, first.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        combined = WaitingTransaction.objects.get(pk=result["new_transaction_id"])
        assert [item.product_id for item in combined.get_items()] == ["P2", "P1"]
        assert combined.customer_id == "C-2"
        assert result["combined_from_ids"] == [second.transaction_id, first.transaction_id]

    def test_repeated_ids_are_ignored(self, make_transaction, make_item, table_one, server, id_generator):
        """
        [T1, T1, T2] behaves exactly like [T1, T2].
        """
        first = make_transaction(items=[make_item("P1", quantity=2)])
        second = make_transaction(items=[make_item("P1", quantity=1)])

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        combined = WaitingTransaction.objects.get(pk=result["new_transaction_id"])
        assert combined.get_items()[0].quantity == 3
        assert result["merged_items_count"] == 1
        assert result["combined_from_ids"] == [first.transaction_id, second.transaction_id]

    def test_single_distinct_id_is_rejected(self, make_transaction, make_item, table_one, server):
        """
        CRITICAL: Fewer than two distinct ids fails before any change.
        """
        waiting = make_transaction(items=[make_item("P1")])

        with pytest.raises(InvalidArgument, match="At least 2 unique transactions"):
            OrderCombinationService.combine_orders(
                [waiting.transaction_id, waiting.transaction_id], table_one.table_id, server.pk
            )

        assert WaitingTransaction.objects.count() == 1
        table_one.refresh_from_db()
        assert table_one.status == TableStatus.AVAILABLE

    def test_missing_transaction(self, make_transaction, table_one, server):
        waiting = make_transaction()

        with pytest.raises(NotFound, match="Transaction MGONE not found"):
            OrderCombinationService.combine_orders(
                [waiting.transaction_id, "MGONE"], table_one.table_id, server.pk
            )

        assert WaitingTransaction.objects.filter(pk=waiting.transaction_id).exists()

    def test_missing_target_table(self, make_transaction, server):
        first, second = make_transaction(), make_transaction()

        with pytest.raises(NotFound, match="Target table T404 not found"):
            OrderCombinationService.combine_orders(
                [first.transaction_id, second.transaction_id], "T404", server.pk
            )

    def test_inactive_target_staff(self, make_transaction, table_one, inactive_server):
        first, second = make_transaction(), make_transaction()

        with pytest.raises(InactiveEntity, match="Target staff Cara Diaz is not active"):
            OrderCombinationService.combine_orders(
                [first.transaction_id, second.transaction_id], table_one.table_id, inactive_server.pk
            )

        assert WaitingTransaction.objects.count() == 2

    def test_related_rows_are_removed(self, make_transaction, make_item, table_one, server, id_generator):
        """
        Scenario:
        - T1 has a pending print request and a tax audit row
        - T2 has a pending payment request
        - Expected: all three are removed together with the sources
        """
        first = make_transaction(items=[make_item("P1", tax_amount="1.00")])
        second = make_transaction(items=[make_item("P2")])
        BillRequestQueueService.create_print_bill_request(
            first.transaction_id, server.pk, id_generator=id_generator
        )
        BillRequestQueueService.create_pay_entire_bill_request(
            second.transaction_id, server.pk, id_generator=id_generator
        )
        TaxAdjustmentService.remove_taxes_and_fees(
            first.transaction_id, server.pk, "Exempt", id_generator=id_generator
        )

        OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        assert not PrintBillRequest.objects.exists()
        assert not PayEntireBillRequest.objects.exists()
        assert not TaxAdjustmentAuditLog.objects.exists()

    def test_failure_rolls_everything_back(self, make_transaction, make_item, table_one, server, id_generator):
        """
        CRITICAL: A failure in the last step leaves the sources and table untouched.
        """
        first = make_transaction(items=[make_item("P1")])
        second = make_transaction(items=[make_item("P2")])

        with mock.patch(
            "restaurant_operations.services.combine_service.TableDirectory.set_status",
            side_effect=RuntimeError("table service down"),
        ):
            with pytest.raises(RuntimeError):
                OrderCombinationService.combine_orders(
                    [first.transaction_id, second.transaction_id],
                    table_one.table_id,
                    server.pk,
                    id_generator=id_generator,
                )

        assert set(WaitingTransaction.objects.values_list("pk", flat=True)) == {
            first.transaction_id,
            second.transaction_id,
        }

    def test_total_includes_cached_tax(self, make_transaction, make_item, table_one, server, id_generator):
        first = make_transaction(items=[make_item("P1", quantity=2, price="10.00", tax_amount="1.60")])
        second = make_transaction(items=[make_item("P2", quantity=1, price="4.50", tax_amount="0.36")])

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        assert result["total_amount"] == Decimal("26.46")

    def test_modifier_order_respected_by_default(self, make_transaction, make_item, table_one, server, id_generator):
        first = make_transaction(items=[make_item("P1", modifiers=["cheese", "bacon"])])
        second = make_transaction(items=[make_item("P1", modifiers=["bacon", "cheese"])])

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id],
            table_one.table_id,
            server.pk,
            id_generator=id_generator,
        )

        assert result["total_items"] == 2
        assert result["merged_items_count"] == 0

    def test_modifier_order_normalised_when_configured(self, make_transaction, make_item, table_one, server, settings):
        settings.RESTAURANT_OPERATIONS = {
            "ID_GENERATOR": "core_backend.utils.ids.SequentialIdGenerator",
            "NORMALIZE_MODIFIER_ORDER": True,
            "CURRENCY": "USD",
        }
        first = make_transaction(items=[make_item("P1", modifiers=["cheese", "bacon"])])
        second = make_transaction(items=[make_item("P1", modifiers=["bacon", "cheese"])])

        result = OrderCombinationService.combine_orders(
            [first.transaction_id, second.transaction_id], table_one.table_id, server.pk
        )

        assert result["new_transaction_id"] == "M000001"
        assert result["total_items"] == 1
        assert result["merged_items_count"] == 1
