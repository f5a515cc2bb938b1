# storefront/cart.py
import logging
from decimal import Decimal

from . import api
from .models import CartEntry, money

logger = logging.getLogger(__name__)

CART_SESSION_KEY = 'cart'
CHECKOUT_FLAG_KEY = 'checkout_in_flight'


class CheckoutError(Exception):
    pass


class SessionCart:
    """
    Ordered cart entries kept in the visitor's session.

    Entries are product snapshots taken when the product was added, so a
    later price change on the server does not reprice the cart.
    """

    def __init__(self, request):
        self.request = request
        self.session = request.session

    def _raw(self):
        return self.session.get(CART_SESSION_KEY) or []

    def _save(self, raw):
        self.session[CART_SESSION_KEY] = raw
        self.session.modified = True

    @property
    def entries(self):
        return [CartEntry.from_session(e) for e in self._raw()]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self._raw())

    def is_empty(self):
        return len(self) == 0

    def count(self):
        return sum(int(e.get('quantity') or 0) for e in self._raw())

    def total(self):
        total = Decimal('0.00')
        for entry in self.entries:
            total += entry.price * entry.quantity
        return money(total)

    def add(self, product, quantity=1):
        raw = self._raw()
        for entry in raw:
            if entry['product'] == product.id:
                entry['quantity'] += quantity
                break
        else:
            raw.append(CartEntry(
                product=product.id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                image=product.image,
            ).to_session())
        self._save(raw)

    def update(self, product_id, action):
        raw = self._raw()
        for entry in raw:
            if entry['product'] != product_id:
                continue
            if action == 'increase':
                entry['quantity'] += 1
            elif action == 'decrease':
                entry['quantity'] -= 1
            elif action == 'remove':
                entry['quantity'] = 0
            else:
                raise ValueError(f"Unknown cart action: {action}")
        self._save([e for e in raw if e['quantity'] >= 1])

    def remove(self, product_id):
        self._save([e for e in self._raw() if e['product'] != product_id])

    def clear(self):
        self._save([])

    @property
    def checkout_in_flight(self):
        return bool(self.session.get(CHECKOUT_FLAG_KEY))

    @checkout_in_flight.setter
    def checkout_in_flight(self, value):
        if value:
            self.session[CHECKOUT_FLAG_KEY] = True
        else:
            self.session.pop(CHECKOUT_FLAG_KEY, None)
        # Persist now so a concurrent request sees the flag
        self.session.save()


def build_order_payload(entries, shipping_address, total_price):
    return {
        'orderItems': [entry.to_order_item() for entry in entries],
        'shippingAddress': shipping_address,
        'totalPrice': float(total_price),
    }


def place_order(shopper, cart, shipping_address):
    """
    Post the cart as an order and clear it.

    The cart is left untouched on every failure so the shopper can retry.
    """
    if not (shipping_address or '').strip():
        raise CheckoutError('Please enter a shipping address')
    if cart.checkout_in_flight:
        raise CheckoutError('Your order is already being processed')

    payload = build_order_payload(cart.entries, shipping_address, cart.total())
    cart.checkout_in_flight = True
    try:
        order = api.create_order(shopper, payload)
    except (api.StorefrontAPIError, api.StorefrontAPIUnavailable) as e:
        raise CheckoutError(e.user_message('Failed to place order')) from e
    finally:
        cart.checkout_in_flight = False

    cart.clear()
    logger.info("Order placed for %s (%s items, total %s)", shopper.email, len(payload['orderItems']), payload['totalPrice'])
    return order
