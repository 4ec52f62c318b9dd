from django.db import models
from django.utils.translation import gettext_lazy as _


class TableStatus(models.TextChoices):
    AVAILABLE = "Available", _("Available")
    OCCUPIED = "Occupied", _("Occupied")
    RESERVED = "Reserved", _("Reserved")
    NOT_AVAILABLE = "Not Available", _("Not Available")


class SeatStatus(models.TextChoices):
    AVAILABLE = "Available", _("Available")
    OCCUPIED = "Occupied", _("Occupied")
    RESERVED = "Reserved", _("Reserved")
    NOT_AVAILABLE = "Not Available", _("Not Available")


class Table(models.Model):
    """
    A dining table on the floor plan.

    current_customer_id / current_transaction_id point at whoever is seated
    and the open order driving the Occupied status. They are plain ids rather
    than foreign keys: the order app already depends on this one.
    """

    table_id = models.CharField(max_length=50, primary_key=True)
    name = models.CharField(max_length=100, blank=True)
    number = models.PositiveIntegerField(default=0)
    capacity = models.PositiveIntegerField(default=2)
    status = models.CharField(
        max_length=20,
        choices=TableStatus.choices,
        default=TableStatus.AVAILABLE,
        db_index=True,
    )
    current_customer_id = models.CharField(max_length=50, null=True, blank=True)
    current_transaction_id = models.CharField(max_length=50, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Table")
        verbose_name_plural = _("Tables")
        ordering = ["number"]

    def __str__(self):
        return f"{self.display_name} ({self.status})"

    @property
    def display_name(self):
        return self.name or f"Table {self.number}"

    @property
    def is_occupied(self):
        return self.status == TableStatus.OCCUPIED


class Seat(models.Model):
    table = models.ForeignKey(Table, on_delete=models.CASCADE, related_name="seats")
    seat_number = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20,
        choices=SeatStatus.choices,
        default=SeatStatus.AVAILABLE,
    )
    customer_id = models.CharField(max_length=50, null=True, blank=True)

    class Meta:
        ordering = ["table", "seat_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["table", "seat_number"], name="unique_seat_number_per_table"
            )
        ]

    def __str__(self):
        return f"{self.table.display_name} seat {self.seat_number} ({self.status})"
