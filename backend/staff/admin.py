from django.contrib import admin
from .models import Staff


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "phone", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("first_name", "last_name", "email", "phone")
    ordering = ("first_name", "last_name")
