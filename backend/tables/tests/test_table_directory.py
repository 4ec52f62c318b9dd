"""
Tests for table lookups and status updates.
"""
import pytest

from core_backend.exceptions import NotFound
from tables.models import SeatStatus, Table, TableStatus
from tables.services import TableDirectory


@pytest.mark.django_db
class TestTableDirectory:

    def test_require_missing_table(self):
        with pytest.raises(NotFound, match="Table T404 not found"):
            TableDirectory.require("T404")

    def test_display_name_falls_back_to_number(self, make_table):
        assert make_table("T8", number=8).display_name == "Table 8"
        assert make_table("T9", number=9, name="Patio").display_name == "Patio"

    def test_any_seat_occupied(self, make_table):
        free = make_table("T1", seats=[SeatStatus.AVAILABLE, SeatStatus.RESERVED])
        busy = make_table("T2", seats=[SeatStatus.AVAILABLE, SeatStatus.OCCUPIED])

        assert TableDirectory.any_seat_occupied(free.table_id) is False
        assert TableDirectory.any_seat_occupied(busy.table_id) is True

    def test_set_status_updates_pointers(self, table_one):
        assert TableDirectory.set_status(table_one.table_id, TableStatus.OCCUPIED, "C-1", "M1") is True

        table_one.refresh_from_db()
        assert table_one.status == TableStatus.OCCUPIED
        assert table_one.current_customer_id == "C-1"
        assert table_one.current_transaction_id == "M1"

    def test_set_status_clears_pointers(self, make_table):
        table = make_table("T3", status=TableStatus.OCCUPIED)
        Table.objects.filter(pk="T3").update(current_transaction_id="M1")

        TableDirectory.set_status("T3", TableStatus.AVAILABLE)

        table.refresh_from_db()
        assert table.current_transaction_id is None

    def test_set_status_unknown_table(self):
        assert TableDirectory.set_status("T404", TableStatus.AVAILABLE) is False

    def test_set_status_rejects_unknown_status(self, table_one):
        with pytest.raises(ValueError):
            TableDirectory.set_status(table_one.table_id, "Dirty")
