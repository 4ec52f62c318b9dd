from django_filters import rest_framework as filters

from .models import PayEntireBillRequest, PrintBillRequest


class BillRequestFilter(filters.FilterSet):
    """
    Narrow the desktop's pending queue.

    Supports filtering by:
    - transaction_id (exact)
    - table_id (exact)
    - requested_after (datetime)
    """

    transaction_id = filters.CharFilter(
        field_name="transaction_id",
        help_text="Filter by waiting transaction id",
    )

    table_id = filters.CharFilter(
        field_name="table_id",
        help_text="Filter by the table snapshotted on the request",
    )

    requested_after = filters.IsoDateTimeFilter(
        field_name="requested_at",
        lookup_expr="gte",
        help_text="Only requests raised at or after this datetime",
    )


class PrintBillRequestFilter(BillRequestFilter):
    class Meta:
        model = PrintBillRequest
        fields = ["transaction_id", "table_id", "requested_after"]


class PayEntireBillRequestFilter(BillRequestFilter):
    class Meta:
        model = PayEntireBillRequest
        fields = ["transaction_id", "table_id", "requested_after"]
