from django.apps import AppConfig


class RestaurantOperationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "restaurant_operations"
    verbose_name = "Restaurant Operations"
