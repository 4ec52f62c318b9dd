from django.contrib import admin
from .models import Table, Seat


class SeatInline(admin.TabularInline):
    model = Seat
    extra = 0
    fields = ("seat_number", "status", "customer_id")


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("table_id", "display_name", "number", "capacity", "status", "current_transaction_id")
    list_filter = ("status", "is_active")
    search_fields = ("table_id", "name")
    inlines = [SeatInline]
