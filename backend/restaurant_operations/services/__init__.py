from .bill_request_service import BillRequestQueueService
from .combine_service import OrderCombinationService
from .operations_service import RestaurantOperationsService
from .tax_adjustment_service import TaxAdjustmentService

__all__ = [
    "BillRequestQueueService",
    "OrderCombinationService",
    "RestaurantOperationsService",
    "TaxAdjustmentService",
]
