from rest_framework import serializers

from .models import PayEntireBillRequest, PrintBillRequest


# ===== INPUT SERIALIZERS =====

class AddNotesSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=50)
    note_text = serializers.CharField(max_length=500)
    added_by_staff_id = serializers.IntegerField(required=False, allow_null=True)


class TransferServerSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=50)
    new_staff_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class ShiftHandoverSerializer(serializers.Serializer):
    current_staff_id = serializers.IntegerField(min_value=1)
    new_staff_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class MoveOrderSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=50)
    target_table_id = serializers.CharField(max_length=50)
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class BillRequestCreateSerializer(serializers.Serializer):
    """Body of print-bill and pay-entire-bill requests."""
    transaction_id = serializers.CharField(max_length=50)
    staff_id = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class PrintBillByTableSerializer(serializers.Serializer):
    table_id = serializers.CharField(max_length=50)
    staff_id = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class CompleteBillRequestSerializer(serializers.Serializer):
    completed_by = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)


class RefireToKitchenSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=50)
    staff_id = serializers.IntegerField(min_value=1)
    item_indices = serializers.ListField(
        child=serializers.IntegerField(), required=False, allow_empty=True
    )
    reason = serializers.CharField(max_length=200)


class CombineOrdersSerializer(serializers.Serializer):
    transaction_ids = serializers.ListField(
        child=serializers.CharField(max_length=50),
        min_length=2,
        error_messages={"min_length": "At least 2 transactions required"},
    )
    target_table_id = serializers.CharField(max_length=50)
    target_staff_id = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class RemoveTaxesAndFeesSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=50)
    staff_id = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=200)


# ===== READ SERIALIZERS =====

BILL_REQUEST_FIELDS = [
    "request_id",
    "transaction_id",
    "staff_id",
    "staff_name",
    "table_id",
    "table_name",
    "requested_at",
    "status",
    "notes",
    "completed_at",
    "completed_by",
]


class PrintBillRequestSerializer(serializers.ModelSerializer):
    transaction_id = serializers.CharField(read_only=True)
    staff_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = PrintBillRequest
        fields = BILL_REQUEST_FIELDS
        read_only_fields = BILL_REQUEST_FIELDS


class PayEntireBillRequestSerializer(serializers.ModelSerializer):
    transaction_id = serializers.CharField(read_only=True)
    staff_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = PayEntireBillRequest
        fields = BILL_REQUEST_FIELDS
        read_only_fields = BILL_REQUEST_FIELDS
