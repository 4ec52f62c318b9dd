"""
URL configuration for core_backend project.

Mobile staff devices and the desktop terminal talk to the restaurant
operations endpoints under /api/restaurant-operations/.
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health_check(request):
    """Unauthenticated liveness probe used by staff devices before syncing."""
    return JsonResponse({"status": "ok", "service": "restaurant-operations"})


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/restaurant-operations/", include("restaurant_operations.urls")),
]
