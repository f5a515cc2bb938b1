"""Test settings for shopfront."""

from shopfront.settings import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key-not-for-production"
DEBUG = False

STOREFRONT_API_URL = "http://api.test"
STOREFRONT_API_TIMEOUT = 1.0

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
ORDER_CONFIRMATION_EMAILS = False
