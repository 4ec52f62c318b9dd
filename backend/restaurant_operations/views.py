import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .filters import PayEntireBillRequestFilter, PrintBillRequestFilter
from .models import PayEntireBillRequest, PrintBillRequest
from .serializers import (
    AddNotesSerializer,
    BillRequestCreateSerializer,
    CombineOrdersSerializer,
    CompleteBillRequestSerializer,
    MoveOrderSerializer,
    PayEntireBillRequestSerializer,
    PrintBillByTableSerializer,
    PrintBillRequestSerializer,
    RefireToKitchenSerializer,
    RemoveTaxesAndFeesSerializer,
    ShiftHandoverSerializer,
    TransferServerSerializer,
)
from .services import (
    BillRequestQueueService,
    OrderCombinationService,
    RestaurantOperationsService,
    TaxAdjustmentService,
)

logger = logging.getLogger(__name__)


class RestaurantOperationsViewSet(viewsets.ViewSet):
    """
    Floor operations triggered from staff devices.

    Endpoints:
    - POST /api/restaurant-operations/add-notes/
    - POST /api/restaurant-operations/transfer-server/
    - POST /api/restaurant-operations/shift-handover/
    - POST /api/restaurant-operations/move-order/
    - POST /api/restaurant-operations/refire-to-kitchen/
    - POST /api/restaurant-operations/combine-orders/
    - POST /api/restaurant-operations/remove-taxes-and-fees/

    Service failures (NotFound, Conflict, InvalidArgument) are rendered by
    core_backend.exceptions.operations_exception_handler.
    """

    @action(detail=False, methods=["post"], url_path="add-notes")
    def add_notes(self, request):
        serializer = AddNotesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RestaurantOperationsService.add_notes(
            transaction_id=data["transaction_id"],
            note_text=data["note_text"],
            added_by_staff_id=data.get("added_by_staff_id"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="transfer-server")
    def transfer_server(self, request):
        serializer = TransferServerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RestaurantOperationsService.transfer_server(
            transaction_id=data["transaction_id"],
            new_staff_id=data["new_staff_id"],
            reason=data.get("reason"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="shift-handover")
    def shift_handover(self, request):
        serializer = ShiftHandoverSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RestaurantOperationsService.shift_handover(
            current_staff_id=data["current_staff_id"],
            new_staff_id=data["new_staff_id"],
            reason=data.get("reason"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="move-order")
    def move_order(self, request):
        serializer = MoveOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RestaurantOperationsService.move_order(
            transaction_id=data["transaction_id"],
            target_table_id=data["target_table_id"],
            reason=data.get("reason"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="refire-to-kitchen")
    def refire_to_kitchen(self, request):
        serializer = RefireToKitchenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = RestaurantOperationsService.refire_to_kitchen(
            transaction_id=data["transaction_id"],
            staff_id=data["staff_id"],
            reason=data["reason"],
            item_indices=data.get("item_indices"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="combine-orders")
    def combine_orders(self, request):
        serializer = CombineOrdersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = OrderCombinationService.combine_orders(
            transaction_ids=data["transaction_ids"],
            target_table_id=data["target_table_id"],
            target_staff_id=data["target_staff_id"],
            notes=data.get("notes"),
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="remove-taxes-and-fees")
    def remove_taxes_and_fees(self, request):
        serializer = RemoveTaxesAndFeesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = TaxAdjustmentService.remove_taxes_and_fees(
            transaction_id=data["transaction_id"],
            staff_id=data["staff_id"],
            reason=data["reason"],
        )
        return Response(result, status=status.HTTP_200_OK)


class BillRequestViewSet(viewsets.GenericViewSet):
    """
    Shared create / poll / complete / cancel flow for desktop hand-off requests.

    Subclasses set the model, serializers and filterset and implement
    create_request().
    """

    model = None
    lookup_field = "request_id"

    def get_queryset(self):
        return BillRequestQueueService.list_pending(self.model)

    def create_request(self, data):
        raise NotImplementedError

    def create(self, request, *args, **kwargs):
        """201 for a new request, 200 when the pending one is returned again."""
        serializer = BillRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = self.create_request(serializer.validated_data)
        body = self.get_serializer(result["request"]).data
        body["message"] = result["message"]
        return Response(
            body,
            status=status.HTTP_201_CREATED if result["created"] else status.HTTP_200_OK,
        )

    @action(detail=False, methods=["get"])
    def pending(self, request):
        """Pending requests, oldest first. Polled by the desktop terminal."""
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=["put"])
    def complete(self, request, request_id=None):
        serializer = CompleteBillRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        completed = BillRequestQueueService.complete(
            self.model,
            request_id,
            completed_by=serializer.validated_data.get("completed_by") or None,
        )
        message = (
            "Request marked as completed"
            if completed
            else "Request not found or already completed"
        )
        return Response({"success": completed, "request_id": request_id, "message": message})

    def destroy(self, request, request_id=None):
        cancelled = BillRequestQueueService.cancel(self.model, request_id)
        message = (
            "Request cancelled"
            if cancelled
            else "Request not found or already completed"
        )
        return Response({"success": cancelled, "request_id": request_id, "message": message})


class PrintBillRequestViewSet(BillRequestViewSet):
    """
    Print bill hand-off.

    Endpoints:
    - POST /api/restaurant-operations/print-bill/
    - POST /api/restaurant-operations/print-bill/by-table/
    - GET /api/restaurant-operations/print-bill/pending/?transaction_id=&table_id=
    - PUT /api/restaurant-operations/print-bill/<request_id>/complete/
    - DELETE /api/restaurant-operations/print-bill/<request_id>/
    """

    model = PrintBillRequest
    serializer_class = PrintBillRequestSerializer
    filterset_class = PrintBillRequestFilter

    def create_request(self, data):
        return BillRequestQueueService.create_print_bill_request(
            transaction_id=data["transaction_id"],
            staff_id=data["staff_id"],
            notes=data.get("notes"),
        )

    @action(detail=False, methods=["post"], url_path="by-table")
    def by_table(self, request):
        serializer = PrintBillByTableSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = BillRequestQueueService.create_print_bills_for_table(
            table_id=data["table_id"],
            staff_id=data["staff_id"],
            notes=data.get("notes"),
        )
        return Response(result, status=status.HTTP_200_OK)


class PayEntireBillRequestViewSet(BillRequestViewSet):
    """
    Pay entire bill hand-off. Same endpoints as print-bill, without by-table.
    """

    model = PayEntireBillRequest
    serializer_class = PayEntireBillRequestSerializer
    filterset_class = PayEntireBillRequestFilter

    def create_request(self, data):
        return BillRequestQueueService.create_pay_entire_bill_request(
            transaction_id=data["transaction_id"],
            staff_id=data["staff_id"],
            notes=data.get("notes"),
        )
