from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    PayEntireBillRequestViewSet,
    PrintBillRequestViewSet,
    RestaurantOperationsViewSet,
)

router = DefaultRouter()
router.register(r"print-bill", PrintBillRequestViewSet, basename="print-bill")
router.register(r"pay-entire-bill", PayEntireBillRequestViewSet, basename="pay-entire-bill")
router.register(r"", RestaurantOperationsViewSet, basename="restaurant-operations")

urlpatterns = [
    path("", include(router.urls)),
]
