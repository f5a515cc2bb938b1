# storefront/store_utils.py
from .cart import SessionCart


def get_cart_count(request):
    """
    Returns the total item count in the session cart.
    """
    return SessionCart(request).count()


def storefront_context(request):
    """Context processor: cart badge and the signed-in shopper."""
    return {
        'cart_count': get_cart_count(request),
        'shopper': getattr(request, 'shopper', None),
    }
