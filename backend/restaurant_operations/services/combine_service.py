import logging
from typing import List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import InvalidArgument
from core_backend.utils.ids import get_id_generator
from core_backend.utils.money import quantize
from orders.models import WaitingTransaction
from orders.services import WaitingTransactionService
from staff.services import StaffDirectory
from tables.models import TableStatus
from tables.services import TableDirectory
from restaurant_operations.merging import merge_cart_items, order_total
from restaurant_operations.models import (
    PayEntireBillRequest,
    PrintBillRequest,
    TaxAdjustmentAuditLog,
)

logger = logging.getLogger(__name__)


def unique_ids(transaction_ids) -> List[str]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(transaction_ids or []))


class OrderCombinationService:
    """Fold several open orders into one new order on a target table."""

    @staticmethod
    @transaction.atomic
    def combine_orders(
        transaction_ids: List[str],
        target_table_id: str,
        target_staff_id: int,
        notes: Optional[str] = None,
        id_generator=None,
    ) -> dict:
        """
        Combine two or more transactions into a single new transaction.

        Items from all sources are concatenated in source order and duplicate
        lines are coalesced (see restaurant_operations.merging). The new order
        inherits the first source's customer. Source transactions, their bill
        requests and their tax audit rows are deleted, and the target table is
        marked Occupied by the new order without touching its customer
        pointer. Either all of that happens or none.

        Args:
            transaction_ids: Source transaction ids; duplicates are ignored
            target_table_id: Table the combined order is seated at
            target_staff_id: Server who owns the combined order
            notes: Optional notes for the combined order

        Raises:
            InvalidArgument: fewer than 2 distinct transaction ids
            NotFound: a transaction, the target table or the target staff is missing
            InactiveEntity: the target staff member is not active
        """
        source_ids = unique_ids(transaction_ids)
        if len(source_ids) < 2:
            raise InvalidArgument("At least 2 unique transactions required to combine")

        sources = WaitingTransactionService.require_many(source_ids)

        target_table = TableDirectory.require(target_table_id, label="Target table")
        target_staff = StaffDirectory.require_active(target_staff_id, label="Target staff")

        all_items = []
        for source in sources:
            all_items.extend(source.get_items())

        normalize = getattr(settings, "RESTAURANT_OPERATIONS", {}).get(
            "NORMALIZE_MODIFIER_ORDER", False
        )
        merged_items = merge_cart_items(all_items, normalize_modifiers=normalize)
        merged_count = len(all_items) - len(merged_items)
        total_amount = quantize(order_total(merged_items))

        id_generator = id_generator or get_id_generator()
        new_transaction_id = id_generator.new_transaction_id()
        customer_id = sources[0].customer_id

        WaitingTransactionService.insert(
            new_transaction_id,
            merged_items,
            customer_id=customer_id,
            table=target_table,
            table_number=target_table.number,
            table_name=target_table.name,
            staff=target_staff,
            status=WaitingTransaction.TransactionStatus.PENDING,
            notes=notes or "",
        )

        # Rows referencing the sources go first, then the sources themselves
        PrintBillRequest.objects.filter(transaction_id__in=source_ids).delete()
        PayEntireBillRequest.objects.filter(transaction_id__in=source_ids).delete()
        TaxAdjustmentAuditLog.objects.filter(transaction_id__in=source_ids).delete()
        WaitingTransactionService.delete_many(source_ids)

        # The table keeps whichever customer it already points at
        TableDirectory.set_status(
            target_table.table_id,
            TableStatus.OCCUPIED,
            customer_id=target_table.current_customer_id,
            transaction_id=new_transaction_id,
        )

        message = (
            f"Successfully combined {len(source_ids)} orders into 1 "
            f"(merged {merged_count} duplicate items)"
        )
        logger.info(
            f"Combined {source_ids} into {new_transaction_id} at table {target_table_id} "
            f"for staff {target_staff_id}: {len(merged_items)} item(s), {merged_count} merged"
        )
        return {
            "new_transaction_id": new_transaction_id,
            "combined_from_ids": source_ids,
            "total_items": len(merged_items),
            "total_amount": total_amount,
            "merged_items_count": merged_count,
            "timestamp": timezone.now(),
            "message": message,
        }
