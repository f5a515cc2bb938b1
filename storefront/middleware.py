# storefront/middleware.py
from django.utils.deprecation import MiddlewareMixin

from .session import ShopperSession


class ShopperSessionMiddleware(MiddlewareMixin):
    """
    Attach the signed-in shopper (or None) as request.shopper.
    Must run after SessionMiddleware.
    """
    def process_request(self, request):
        request.shopper = ShopperSession.from_request(request)
