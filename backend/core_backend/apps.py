from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """Validate the restaurant operations configuration at startup."""
        from django.conf import settings
        from django.utils.module_loading import import_string

        config = getattr(settings, "RESTAURANT_OPERATIONS", {})
        generator_path = config.get("ID_GENERATOR")
        if generator_path:
            # Fail at startup rather than on the first request
            import_string(generator_path)
        logger.debug(
            f"Restaurant operations configured: id generator={generator_path}, "
            f"normalize modifier order={config.get('NORMALIZE_MODIFIER_ORDER', False)}"
        )
