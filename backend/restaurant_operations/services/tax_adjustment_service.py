import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import InvalidArgument
from core_backend.utils.ids import get_id_generator
from orders.services import WaitingTransactionService
from staff.services import StaffDirectory
from restaurant_operations.models import TaxAdjustmentAuditLog

logger = logging.getLogger(__name__)

AUDIT_PREFIX = "AUDIT"


class TaxAdjustmentService:

    @staticmethod
    @transaction.atomic
    def remove_taxes_and_fees(transaction_id: str, staff_id: int, reason: str, id_generator=None) -> dict:
        """
        Zero the cached tax on every item of an order and audit the change.

        The item update and the audit row are written in one atomic block.
        Running it again on an already tax-free order changes nothing but
        still records an audit row with an original amount of 0.

        Raises:
            InvalidArgument: blank reason, or the order has no items
            NotFound: transaction or staff does not exist
        """
        reason = (reason or "").strip()
        if not reason:
            raise InvalidArgument("A reason is required to remove taxes and fees")

        waiting = WaitingTransactionService.require(transaction_id, for_update=True)
        staff = StaffDirectory.require(staff_id)

        items = waiting.get_items()
        if not items:
            raise InvalidArgument("Transaction has no items")

        original_tax_amount = sum((item.tax_amount for item in items), Decimal("0"))
        items_affected = 0
        for item in items:
            if item.tax_amount > 0:
                item.tax_amount = Decimal("0")
                item.taxable = False
                items_affected += 1

        WaitingTransactionService.save_items(waiting, items)

        id_generator = id_generator or get_id_generator()
        audit = TaxAdjustmentAuditLog.objects.create(
            audit_id=id_generator.new_id(AUDIT_PREFIX),
            transaction=waiting,
            staff=staff,
            staff_name=staff.full_name,
            action=TaxAdjustmentAuditLog.Action.REMOVE,
            apply_to=TaxAdjustmentAuditLog.ApplyTo.ORDER,
            original_tax_amount=original_tax_amount,
            new_tax_amount=Decimal("0"),
            reason=reason,
        )

        logger.info(
            f"Tax removed from {transaction_id} by staff {staff_id}: "
            f"{original_tax_amount} across {items_affected} item(s), audit {audit.audit_id}"
        )
        return {
            "transaction_id": waiting.transaction_id,
            "original_tax_amount": original_tax_amount,
            "tax_removed": original_tax_amount,
            "items_affected": items_affected,
            "removed_by": staff.full_name,
            "audit_log_id": audit.audit_id,
            "timestamp": timezone.now(),
            "message": f"Taxes and fees removed successfully. {items_affected} item(s) affected.",
        }
