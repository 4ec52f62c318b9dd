import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from core_backend.exceptions import Conflict
from core_backend.utils.ids import get_id_generator
from orders.models import WaitingTransaction
from orders.services import WaitingTransactionService
from staff.models import Staff
from staff.services import StaffDirectory
from tables.services import TableDirectory
from restaurant_operations.models import (
    PayEntireBillRequest,
    PrintBillRequest,
    RequestStatus,
)

logger = logging.getLogger(__name__)

PRINT_BILL_PREFIX = "PBR"
PAY_ENTIRE_BILL_PREFIX = "PEBR"


class BillRequestQueueService:
    """
    Polled request queue between mobile devices and the desktop terminal.

    Mobile devices create print-bill and pay-entire-bill requests; the desktop
    polls the pending list and completes or cancels them. Each transaction has
    at most one Pending request of each kind, guaranteed by a partial unique
    constraint and by locking the transaction row while checking.
    """

    @staticmethod
    @transaction.atomic
    def create_print_bill_request(
        transaction_id: str,
        staff_id: int,
        notes: Optional[str] = None,
        id_generator=None,
    ) -> dict:
        """
        Ask the desktop to print a bill.

        Returns the already pending print request instead of creating a second
        one, so mobile retries are safe.

        Raises:
            NotFound: transaction or staff does not exist
            Conflict: a payment request is already pending for the transaction
        """
        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        staff = StaffDirectory.require(staff_id)

        if BillRequestQueueService._pending_for(PayEntireBillRequest, transaction_id) is not None:
            logger.info(
                f"Print bill for {transaction_id} refused: payment request already pending"
            )
            raise Conflict(
                f"A payment request is already pending for transaction {transaction_id}. "
                "Cannot create a print-bill request at the same time."
            )

        return BillRequestQueueService._create_or_reuse(
            PrintBillRequest,
            PRINT_BILL_PREFIX,
            waiting,
            staff,
            notes,
            id_generator or get_id_generator(),
            created_message="Print bill request created successfully",
            reused_message="Existing pending print bill request returned (no duplicate created)",
        )

    @staticmethod
    @transaction.atomic
    def create_print_bills_for_table(
        table_id: str,
        staff_id: int,
        notes: Optional[str] = None,
        id_generator=None,
    ) -> dict:
        """
        Request a bill for every open order on a table.

        Orders with a pending payment request are skipped, and orders that
        already have a pending print request contribute that request's id.

        Raises:
            NotFound: staff or table does not exist
            Conflict: the table has no open orders
        """
        staff = StaffDirectory.require(staff_id)
        table = TableDirectory.require(table_id)
        id_generator = id_generator or get_id_generator()

        open_orders = list(WaitingTransactionService.list_open(table_id=table_id, for_update=True))
        if not open_orders:
            raise Conflict(f"No open orders found for table {table.display_name}")

        request_ids = []
        for waiting in open_orders:
            if BillRequestQueueService._pending_for(PayEntireBillRequest, waiting.pk) is not None:
                logger.info(f"Skipping {waiting.pk}: payment request already pending")
                continue

            result = BillRequestQueueService._create_or_reuse(
                PrintBillRequest,
                PRINT_BILL_PREFIX,
                waiting,
                staff,
                notes,
                id_generator,
            )
            request_ids.append(result["request"].request_id)

        if request_ids:
            message = f"Created {len(request_ids)} print bill request(s) for {table.display_name}"
        else:
            message = (
                "No new print requests created "
                "(payment requests already pending for all orders)"
            )

        logger.info(
            f"Print bill fan-out for table {table_id} by staff {staff_id}: "
            f"{len(request_ids)} of {len(open_orders)} order(s)"
        )
        return {
            "table_id": table.table_id,
            "table_name": table.display_name,
            "request_count": len(request_ids),
            "request_ids": request_ids,
            "message": message,
        }

    @staticmethod
    @transaction.atomic
    def create_pay_entire_bill_request(
        transaction_id: str,
        staff_id: int,
        notes: Optional[str] = None,
        id_generator=None,
    ) -> dict:
        """
        Ask the desktop to take full payment for a transaction.

        A pending print request does not block payment. An already pending
        payment request is returned as is.
        """
        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        staff = StaffDirectory.require(staff_id)

        return BillRequestQueueService._create_or_reuse(
            PayEntireBillRequest,
            PAY_ENTIRE_BILL_PREFIX,
            waiting,
            staff,
            notes,
            id_generator or get_id_generator(),
            created_message="Pay entire bill request created successfully",
            reused_message="Existing pending pay entire bill request returned (no duplicate created)",
        )

    @staticmethod
    def list_pending(model) -> QuerySet:
        """Pending requests of one kind, oldest first."""
        return model.objects.filter(status=RequestStatus.PENDING).order_by(
            "requested_at", "request_id"
        )

    @staticmethod
    def complete(model, request_id: str, completed_by: Optional[str] = None) -> bool:
        """
        Pending -> Completed.

        Returns False when the request does not exist or is already terminal;
        the stored completion stamp is left untouched in that case.
        """
        updated = model.objects.filter(
            pk=request_id, status=RequestStatus.PENDING
        ).update(
            status=RequestStatus.COMPLETED,
            completed_at=timezone.now(),
            completed_by=completed_by,
        )
        if updated:
            logger.info(f"{model.__name__} {request_id} completed by {completed_by or 'desktop'}")
        else:
            logger.info(f"{model.__name__} {request_id} not pending, nothing to complete")
        return bool(updated)

    @staticmethod
    def cancel(model, request_id: str) -> bool:
        """Pending -> Cancelled. Same not-found / not-pending semantics as complete()."""
        updated = model.objects.filter(
            pk=request_id, status=RequestStatus.PENDING
        ).update(status=RequestStatus.CANCELLED)
        if updated:
            logger.info(f"{model.__name__} {request_id} cancelled")
        else:
            logger.info(f"{model.__name__} {request_id} not pending, nothing to cancel")
        return bool(updated)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _pending_for(model, transaction_id: str):
        return model.objects.filter(
            transaction_id=transaction_id, status=RequestStatus.PENDING
        ).first()

    @staticmethod
    def _create_or_reuse(
        model,
        prefix: str,
        waiting: WaitingTransaction,
        staff: Staff,
        notes: Optional[str],
        id_generator,
        created_message: str = "",
        reused_message: str = "",
    ) -> dict:
        existing = BillRequestQueueService._pending_for(model, waiting.pk)
        if existing is not None:
            logger.info(f"Reusing pending {model.__name__} {existing.request_id} for {waiting.pk}")
            return {"request": existing, "created": False, "message": reused_message}

        bill_request = model(
            request_id=id_generator.new_id(prefix),
            transaction=waiting,
            staff=staff,
            staff_name=staff.full_name,
            table_id=waiting.table_id,
            table_name=waiting.table_name or None,
            status=RequestStatus.PENDING,
            notes=notes or None,
        )
        try:
            with transaction.atomic():
                bill_request.save(force_insert=True)
        except IntegrityError:
            # Lost the race to a concurrent request for the same transaction
            existing = BillRequestQueueService._pending_for(model, waiting.pk)
            if existing is None:
                raise
            logger.warning(
                f"Concurrent {model.__name__} for {waiting.pk}; returning {existing.request_id}"
            )
            return {"request": existing, "created": False, "message": reused_message}

        logger.info(
            f"{model.__name__} {bill_request.request_id} created for {waiting.pk} "
            f"by staff {staff.pk}"
        )
        return {"request": bill_request, "created": True, "message": created_message}
