from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class RequestStatus(models.TextChoices):
    """Lifecycle of a cross-device request. Completed and Cancelled are terminal."""
    PENDING = "Pending", _("Pending")
    COMPLETED = "Completed", _("Completed")
    CANCELLED = "Cancelled", _("Cancelled")


class BillRequest(models.Model):
    """
    A ticket raised by a mobile device and fulfilled by the desktop terminal.

    Staff and table details are snapshotted at creation so the desktop queue
    renders correctly even if the table or staff record changes afterwards.
    Rows are never deleted by the queue itself; terminal rows stay for audit.
    """

    request_id = models.CharField(max_length=50, primary_key=True)
    transaction = models.ForeignKey(
        "orders.WaitingTransaction",
        on_delete=models.PROTECT,
        related_name="+",
    )
    staff = models.ForeignKey(
        "staff.Staff",
        on_delete=models.PROTECT,
        related_name="+",
    )
    staff_name = models.CharField(max_length=200)
    table_id = models.CharField(max_length=50, null=True, blank=True)
    table_name = models.CharField(max_length=100, null=True, blank=True)
    requested_at = models.DateTimeField(default=timezone.now, db_index=True)
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
    )
    notes = models.CharField(max_length=200, null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    completed_by = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        abstract = True
        ordering = ["requested_at"]

    def __str__(self):
        return f"{self.request_id} ({self.status})"

    @property
    def is_pending(self):
        return self.status == RequestStatus.PENDING


class PrintBillRequest(BillRequest):
    """Ask the desktop to print a physical bill for a transaction."""

    class Meta(BillRequest.Meta):
        verbose_name = _("Print Bill Request")
        verbose_name_plural = _("Print Bill Requests")
        constraints = [
            models.UniqueConstraint(
                fields=["transaction"],
                condition=Q(status="Pending"),
                name="unique_pending_print_bill_per_transaction",
            )
        ]


class PayEntireBillRequest(BillRequest):
    """Ask the desktop to take full payment for a transaction."""

    class Meta(BillRequest.Meta):
        verbose_name = _("Pay Entire Bill Request")
        verbose_name_plural = _("Pay Entire Bill Requests")
        constraints = [
            models.UniqueConstraint(
                fields=["transaction"],
                condition=Q(status="Pending"),
                name="unique_pending_pay_entire_bill_per_transaction",
            )
        ]


class TaxAdjustmentAuditLog(models.Model):
    """
    Append-only record of every tax removal.

    Rows cannot be edited or deleted one at a time; the only removal path is
    the queryset delete issued when the referenced transaction is folded into
    a combined order.
    """

    class Action(models.TextChoices):
        REMOVE = "Remove", _("Remove")

    class ApplyTo(models.TextChoices):
        ORDER = "Order", _("Order")

    audit_id = models.CharField(max_length=50, primary_key=True)
    transaction = models.ForeignKey(
        "orders.WaitingTransaction",
        on_delete=models.PROTECT,
        related_name="tax_adjustments",
    )
    staff = models.ForeignKey(
        "staff.Staff",
        on_delete=models.PROTECT,
        related_name="tax_adjustments",
    )
    staff_name = models.CharField(max_length=200)
    action = models.CharField(max_length=20, choices=Action.choices, default=Action.REMOVE)
    apply_to = models.CharField(max_length=20, choices=ApplyTo.choices, default=ApplyTo.ORDER)
    original_tax_amount = models.DecimalField(max_digits=14, decimal_places=4)
    new_tax_amount = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    reason = models.CharField(max_length=200)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = _("Tax Adjustment Audit Log")
        verbose_name_plural = _("Tax Adjustment Audit Log")
        ordering = ["timestamp"]

    def __str__(self):
        return f"{self.audit_id}: {self.action} tax on {self.transaction_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Tax adjustment audit entries cannot be modified")
        if not (self.reason or "").strip():
            raise ValidationError("A reason is required for tax adjustments")
        kwargs["force_insert"] = True
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Tax adjustment audit entries cannot be deleted")
