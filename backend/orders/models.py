from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .cart import load_items, dump_items


class WaitingTransaction(models.Model):
    """
    An order that has been submitted (from a mobile device or the desktop)
    but not yet paid.

    The cart is embedded as a JSON record array in ``items``; see
    orders.cart for the record layout. Table number/name are denormalized so
    the desktop can render a ticket without a join.
    """

    class TransactionStatus(models.TextChoices):
        PENDING = "Pending", _("Pending")
        COMPLETED = "Completed", _("Completed")
        CANCELLED = "Cancelled", _("Cancelled")

    transaction_id = models.CharField(max_length=50, primary_key=True)
    customer_id = models.CharField(max_length=50, null=True, blank=True)

    table = models.ForeignKey(
        "tables.Table",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="waiting_transactions",
    )
    table_number = models.PositiveIntegerField(null=True, blank=True)
    table_name = models.CharField(max_length=100, blank=True)

    staff = models.ForeignKey(
        "staff.Staff",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="waiting_transactions",
        help_text=_("Server currently responsible for the order"),
    )

    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
    )
    notes = models.TextField(blank=True)
    items = models.JSONField(default=list, blank=True, encoder=DjangoJSONEncoder)

    # Refire metadata
    is_refired = models.BooleanField(default=False)
    refire_reason = models.CharField(max_length=200, blank=True)
    refired_at = models.DateTimeField(null=True, blank=True)
    refired_by = models.ForeignKey(
        "staff.Staff",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="refired_transactions",
    )
    refired_by_name = models.CharField(max_length=200, blank=True)
    refired_item_indices = models.JSONField(
        default=list,
        blank=True,
        help_text=_("Indices of the refired items; empty means the whole order"),
    )

    created_at = models.DateTimeField(default=timezone.now)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Waiting Transaction")
        verbose_name_plural = _("Waiting Transactions")
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["staff", "status"], name="orders_wait_staff_i_3c1f0a_idx"),
            models.Index(fields=["table", "status"], name="orders_wait_table_i_8d2b4e_idx"),
        ]

    def __str__(self):
        return f"{self.transaction_id} ({self.status})"

    def get_items(self):
        """Decode the embedded cart into CartItem objects."""
        return load_items(self.items)

    def set_items(self, cart_items):
        """Replace the embedded cart wholesale."""
        self.items = dump_items(cart_items)
