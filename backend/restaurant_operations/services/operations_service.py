import logging
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import Conflict, InvalidArgument
from orders.models import WaitingTransaction
from orders.services import WaitingTransactionService
from staff.models import Staff
from staff.services import StaffDirectory
from tables.models import TableStatus
from tables.services import TableDirectory

logger = logging.getLogger(__name__)


class RestaurantOperationsService:
    """
    Floor operations on open orders: notes, server transfers, shift handover,
    table moves and kitchen refires.
    """

    @staticmethod
    @transaction.atomic
    def add_notes(transaction_id: str, note_text: str, added_by_staff_id: Optional[int] = None) -> dict:
        """
        Append a note line to an order, never overwriting earlier notes.

        Lines are prefixed with "[First Last - HH:MM] " when the adding staff
        member is known.
        """
        waiting = WaitingTransactionService.require(transaction_id, for_update=True)

        prefix = ""
        if added_by_staff_id:
            staff = StaffDirectory.get_by_id(added_by_staff_id)
            if staff is not None:
                prefix = f"[{staff.full_name} - {timezone.localtime():%H:%M}] "

        line = f"{prefix}{note_text}"
        waiting.notes = f"{waiting.notes}\n{line}" if waiting.notes else line
        waiting.save(update_fields=["notes", "modified_at"])

        logger.info(f"Note added to {transaction_id} by staff {added_by_staff_id or 'unknown'}")
        return {
            "transaction_id": waiting.transaction_id,
            "note_text": note_text,
            "note_line": line,
            "added_at": timezone.now(),
            "message": "Note added successfully",
        }

    @staticmethod
    @transaction.atomic
    def transfer_server(transaction_id: str, new_staff_id: int, reason: Optional[str] = None) -> dict:
        """
        Hand one order to another server.

        Every cart item is re-attributed to the new server as well.

        Raises:
            NotFound: transaction or staff member does not exist
            InactiveEntity: the new server is not active
        """
        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        new_staff = StaffDirectory.require_active(new_staff_id)
        previous_staff = waiting.staff

        RestaurantOperationsService._reassign(waiting, new_staff)

        previous_name = previous_staff.full_name if previous_staff else None
        logger.info(
            f"Transaction {transaction_id} transferred from "
            f"{previous_name or 'unassigned'} to {new_staff.full_name}"
            + (f" ({reason})" if reason else "")
        )
        return {
            "transaction_id": waiting.transaction_id,
            "previous_staff_id": previous_staff.pk if previous_staff else None,
            "previous_staff_name": previous_name or "None",
            "new_staff_id": new_staff.pk,
            "new_staff_name": new_staff.full_name,
            "transferred_at": timezone.now(),
            "message": f"Order transferred from {previous_name or 'unassigned'} to {new_staff.full_name}",
        }

    @staticmethod
    @transaction.atomic
    def shift_handover(current_staff_id: int, new_staff_id: int, reason: Optional[str] = None) -> dict:
        """
        Transfer every order owned by the outgoing server to the incoming one,
        whatever its status.

        Having nothing to transfer is not an error.
        """
        current_staff = StaffDirectory.require(current_staff_id, label="Current staff member")
        new_staff = StaffDirectory.require_active(new_staff_id, label="New staff member")

        owned_orders = list(
            WaitingTransactionService.list_owned_by(current_staff.pk, for_update=True)
        )
        transferred_ids = []
        for waiting in owned_orders:
            RestaurantOperationsService._reassign(waiting, new_staff)
            transferred_ids.append(waiting.transaction_id)

        if transferred_ids:
            message = (
                f"Successfully transferred {len(transferred_ids)} order(s) "
                f"from {current_staff.first_name} to {new_staff.first_name}"
            )
        else:
            message = "No orders to transfer"

        logger.info(
            f"Shift handover {current_staff_id} -> {new_staff_id}: "
            f"{len(transferred_ids)} order(s)" + (f" ({reason})" if reason else "")
        )
        return {
            "current_staff_id": current_staff.pk,
            "current_staff_name": current_staff.full_name,
            "new_staff_id": new_staff.pk,
            "new_staff_name": new_staff.full_name,
            "orders_transferred": len(transferred_ids),
            "transaction_ids": transferred_ids,
            "handover_at": timezone.now(),
            "message": message,
        }

    @staticmethod
    @transaction.atomic
    def move_order(transaction_id: str, target_table_id: str, reason: Optional[str] = None) -> dict:
        """
        Move an order to another table.

        The source table (if any) is freed and the target table becomes
        Occupied by the order's customer.

        Raises:
            NotFound: transaction or target table does not exist
            Conflict: the target table is occupied or has an occupied seat
        """
        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        source_table = waiting.table
        target_table = TableDirectory.require(target_table_id, label="Target table")

        if target_table.is_occupied:
            raise Conflict(
                f"Target table {target_table.display_name} is already occupied. "
                "Please select an available table."
            )
        if TableDirectory.any_seat_occupied(target_table.table_id):
            raise Conflict(
                f"Target table {target_table.display_name} has occupied seats. "
                "Please free all seats before moving order."
            )

        waiting.table = target_table
        waiting.table_number = target_table.number
        waiting.table_name = target_table.name
        waiting.save(update_fields=["table", "table_number", "table_name", "modified_at"])

        if source_table is not None:
            TableDirectory.set_status(source_table.table_id, TableStatus.AVAILABLE)
        TableDirectory.set_status(
            target_table.table_id,
            TableStatus.OCCUPIED,
            customer_id=waiting.customer_id,
            transaction_id=waiting.transaction_id,
        )

        from_name = source_table.display_name if source_table else "Unknown"
        logger.info(
            f"Transaction {transaction_id} moved from {from_name} to {target_table.display_name}"
            + (f" ({reason})" if reason else "")
        )
        return {
            "transaction_id": waiting.transaction_id,
            "from_table_id": source_table.table_id if source_table else None,
            "from_table_name": from_name,
            "to_table_id": target_table.table_id,
            "to_table_name": target_table.display_name,
            "moved_at": timezone.now(),
            "message": f"Order moved from {from_name} to {target_table.display_name}",
        }

    @staticmethod
    @transaction.atomic
    def refire_to_kitchen(
        transaction_id: str,
        staff_id: int,
        reason: str,
        item_indices: Optional[List[int]] = None,
    ) -> dict:
        """
        Mark an order (or some of its items) to be resent to the kitchen.

        Args:
            item_indices: Positions in the cart to refire; empty means all items

        Raises:
            NotFound: transaction or staff does not exist
            InvalidArgument: blank reason, empty order, or an index out of range
        """
        reason = (reason or "").strip()
        if not reason:
            raise InvalidArgument("A reason is required to refire an order")

        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        staff = StaffDirectory.require(staff_id)

        items = waiting.get_items()
        if not items:
            raise InvalidArgument("Transaction has no items")

        indices = list(item_indices or [])
        for index in indices:
            if index < 0 or index >= len(items):
                raise InvalidArgument(f"Invalid item index: {index}")
        items_refired = len(indices) if indices else len(items)

        refired_at = timezone.now()
        waiting.is_refired = True
        waiting.refire_reason = reason
        waiting.refired_at = refired_at
        waiting.refired_by = staff
        waiting.refired_by_name = staff.full_name
        waiting.refired_item_indices = indices
        waiting.save(
            update_fields=[
                "is_refired",
                "refire_reason",
                "refired_at",
                "refired_by",
                "refired_by_name",
                "refired_item_indices",
                "modified_at",
            ]
        )

        logger.info(f"Transaction {transaction_id} refired by staff {staff_id}: {items_refired} item(s)")
        return {
            "transaction_id": waiting.transaction_id,
            "items_refired": items_refired,
            "item_indices": indices,
            "refired_by": staff.full_name,
            "refired_at": refired_at,
            "message": f"Order marked as refired. {items_refired} item(s) will be reprinted.",
        }

    @staticmethod
    def _reassign(waiting: WaitingTransaction, new_staff: Staff) -> None:
        items = waiting.get_items()
        for item in items:
            item.staff_id = new_staff.pk
        waiting.staff = new_staff
        WaitingTransactionService.save_items(waiting, items, extra_fields=["staff"])
