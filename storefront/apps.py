from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class StorefrontConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "storefront"

    def ready(self):
        """
        Log which storefront API this instance talks to.
        A missing base URL is reported but does not stop startup.
        """
        api_url = getattr(settings, "STOREFRONT_API_URL", "")
        if not api_url:
            logger.error("STOREFRONT_API_URL is not set; every API call will fail.")
        else:
            logger.info("Storefront API at %s (timeout %ss)", api_url, settings.STOREFRONT_API_TIMEOUT)
