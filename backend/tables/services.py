import logging
from typing import Optional

from core_backend.exceptions import NotFound
from .models import Table, TableStatus, Seat, SeatStatus

logger = logging.getLogger(__name__)


class TableDirectory:
    """Table and seat lookups plus the table status updates operations need."""

    @staticmethod
    def get_by_id(table_id) -> Optional[Table]:
        if not table_id:
            return None
        return Table.objects.filter(pk=table_id).first()

    @staticmethod
    def require(table_id, label: str = "Table") -> Table:
        table = TableDirectory.get_by_id(table_id)
        if table is None:
            raise NotFound(f"{label} {table_id} not found")
        return table

    @staticmethod
    def any_seat_occupied(table_id) -> bool:
        return Seat.objects.filter(table_id=table_id, status=SeatStatus.OCCUPIED).exists()

    @staticmethod
    def set_status(
        table_id,
        status: str,
        customer_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> bool:
        """
        Set a table's status along with its current customer/transaction pointers.

        Returns:
            True if the table exists and was updated
        """
        if status not in TableStatus.values:
            raise ValueError(f"'{status}' is not a valid table status.")

        updated = Table.objects.filter(pk=table_id).update(
            status=status,
            current_customer_id=customer_id,
            current_transaction_id=transaction_id,
        )
        if updated:
            logger.info(
                f"Table {table_id} set to {status} "
                f"(customer={customer_id}, transaction={transaction_id})"
            )
        return bool(updated)
