import logging
from typing import Iterable, List, Optional

from django.db.models import QuerySet

from core_backend.exceptions import NotFound
from orders.cart import CartItem
from orders.models import WaitingTransaction

logger = logging.getLogger(__name__)


class WaitingTransactionService:
    """
    Store operations on waiting transactions.

    Callers own the unit of work: wrap calls in transaction.atomic when several
    writes must land together.
    """

    @staticmethod
    def get(transaction_id: str, for_update: bool = False) -> Optional[WaitingTransaction]:
        queryset = WaitingTransaction.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(pk=transaction_id).first()

    @staticmethod
    def require(transaction_id: str, for_update: bool = False) -> WaitingTransaction:
        """
        Fetch a transaction or raise NotFound.

        Args:
            transaction_id: Transaction id (e.g. "M20250114183022")
            for_update: Lock the row until the surrounding atomic block ends
        """
        waiting = WaitingTransactionService.get(transaction_id, for_update=for_update)
        if waiting is None:
            raise NotFound(f"Transaction {transaction_id} not found")
        return waiting

    @staticmethod
    def list_open(staff_id=None, table_id=None, for_update: bool = False) -> QuerySet:
        """Open (Pending) transactions, oldest first, optionally narrowed."""
        queryset = WaitingTransaction.objects.filter(
            status=WaitingTransaction.TransactionStatus.PENDING
        )
        if staff_id is not None:
            queryset = queryset.filter(staff_id=staff_id)
        if table_id is not None:
            queryset = queryset.filter(table_id=table_id)
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.order_by("created_at", "transaction_id")

    @staticmethod
    def list_owned_by(staff_id, for_update: bool = False) -> QuerySet:
        """Every transaction assigned to a staff member, whatever its status."""
        queryset = WaitingTransaction.objects.filter(staff_id=staff_id)
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.order_by("created_at", "transaction_id")

    @staticmethod
    def require_many(transaction_ids: List[str]) -> List[WaitingTransaction]:
        """
        Lock several transactions and return them in the order asked for.

        Rows are locked in one query sorted by primary key, so concurrent
        callers passing the same ids in a different order queue up instead of
        deadlocking.

        Raises:
            NotFound: the first id (in caller order) that does not exist
        """
        locked = {
            waiting.pk: waiting
            for waiting in WaitingTransaction.objects.filter(pk__in=transaction_ids)
            .order_by("pk")
            .select_for_update()
        }
        for transaction_id in transaction_ids:
            if transaction_id not in locked:
                raise NotFound(f"Transaction {transaction_id} not found")
        return [locked[transaction_id] for transaction_id in transaction_ids]

    @staticmethod
    def save_items(
        waiting: WaitingTransaction,
        cart_items: List[CartItem],
        extra_fields: Iterable[str] = (),
    ) -> WaitingTransaction:
        """Rewrite the embedded cart (plus any other changed fields)."""
        waiting.set_items(cart_items)
        waiting.save(update_fields=["items", "modified_at", *extra_fields])
        return waiting

    @staticmethod
    def insert(transaction_id: str, cart_items: List[CartItem], **fields) -> WaitingTransaction:
        waiting = WaitingTransaction(transaction_id=transaction_id, **fields)
        waiting.set_items(cart_items)
        waiting.save(force_insert=True)
        logger.info(f"Inserted waiting transaction {transaction_id} with {len(cart_items)} item(s)")
        return waiting

    @staticmethod
    def delete_many(transaction_ids: Iterable[str]) -> int:
        count, _ = WaitingTransaction.objects.filter(pk__in=list(transaction_ids)).delete()
        return count
