from django.contrib import admin
from .models import PayEntireBillRequest, PrintBillRequest, TaxAdjustmentAuditLog


class BillRequestAdmin(admin.ModelAdmin):
    list_display = (
        "request_id",
        "transaction",
        "staff_name",
        "table_name",
        "status",
        "requested_at",
        "completed_at",
    )
    list_filter = ("status",)
    search_fields = ("request_id", "transaction__transaction_id", "staff_name", "table_name")
    readonly_fields = ("requested_at", "completed_at", "completed_by")
    ordering = ("-requested_at",)


@admin.register(PrintBillRequest)
class PrintBillRequestAdmin(BillRequestAdmin):
    pass


@admin.register(PayEntireBillRequest)
class PayEntireBillRequestAdmin(BillRequestAdmin):
    pass


@admin.register(TaxAdjustmentAuditLog)
class TaxAdjustmentAuditLogAdmin(admin.ModelAdmin):
    """Read-only view of the tax audit trail."""

    list_display = (
        "audit_id",
        "transaction",
        "staff_name",
        "original_tax_amount",
        "new_tax_amount",
        "reason",
        "timestamp",
    )
    search_fields = ("audit_id", "transaction__transaction_id", "staff_name", "reason")
    ordering = ("-timestamp",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
