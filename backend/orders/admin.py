from django.contrib import admin
from .models import WaitingTransaction


@admin.register(WaitingTransaction)
class WaitingTransactionAdmin(admin.ModelAdmin):
    """
    Admin configuration for waiting transactions.

    The cart is edited by the POS clients, so it is shown read-only here.
    """

    list_display = (
        "transaction_id",
        "table_name",
        "staff",
        "status",
        "item_count",
        "is_refired",
        "created_at",
    )
    list_display_links = ("transaction_id",)
    list_filter = ("status", "is_refired")
    search_fields = ("transaction_id", "table_name", "customer_id")
    readonly_fields = ("items", "created_at", "modified_at", "refired_at", "refired_by_name")
    ordering = ("-created_at",)

    def item_count(self, obj):
        return len(obj.items or [])

    item_count.short_description = "Items"
