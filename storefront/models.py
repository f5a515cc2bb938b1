"""
Records returned by the storefront API.

Products and orders live server-side; these are the transient snapshots the
views render. Nothing here is backed by a database table.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

CENTS = Decimal('0.01')


def to_decimal(value):
    if value in (None, ''):
        return Decimal('0.00')
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal('0.00')


def money(value):
    return to_decimal(value).quantize(CENTS)


def display_or_na(value):
    """Default render for optional display fields."""
    if value is None or value == '':
        return 'N/A'
    return value


def _record_id(data):
    return str(data.get('_id') or data.get('id') or '')


def _parse_datetime(value):
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None


# ------------------------------
# PRODUCT
# ------------------------------
@dataclass
class Product:
    id: str
    name: str
    price: Decimal
    description: str = ''
    image: str = ''
    category: str = ''
    stock: int = 0

    @classmethod
    def from_api(cls, data):
        return cls(
            id=_record_id(data),
            name=data.get('name', ''),
            price=to_decimal(data.get('price')),
            description=data.get('description', ''),
            image=data.get('image') or '',
            category=data.get('category', ''),
            stock=int(data.get('stock') or 0),
        )

    def editable_fields(self):
        """Fields the admin form edits, in the shape the API accepts."""
        return product_fields(
            name=self.name,
            price=self.price,
            description=self.description,
            image=self.image,
            category=self.category,
            stock=self.stock,
        )

    def __str__(self):
        return self.name


def product_fields(name, price, description, image, category, stock):
    return {
        'name': name,
        'price': float(to_decimal(price)),
        'description': description,
        'image': image or '',
        'category': category,
        'stock': int(stock),
    }


# ------------------------------
# ORDER
# ------------------------------
@dataclass
class OrderUser:
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass
class OrderItem:
    product: str
    name: str
    quantity: int
    price: Decimal
    image: str = ''

    @classmethod
    def from_api(cls, data):
        product = data.get('product')
        if isinstance(product, dict):
            product = _record_id(product)
        return cls(
            product=str(product or ''),
            name=data.get('name', ''),
            quantity=int(data.get('quantity') or 1),
            price=to_decimal(data.get('price')),
            image=data.get('image') or '',
        )

    @property
    def line_total(self):
        return money(self.price * self.quantity)

    def __str__(self):
        return f"{self.name} × {self.quantity}"


@dataclass
class Order:
    id: str
    total_price: Decimal
    is_paid: bool = False
    shipping_address: str = ''
    user: Optional[OrderUser] = None
    created_at: Optional[datetime] = None
    items: list = field(default_factory=list)

    @classmethod
    def from_api(cls, data):
        user = data.get('user')
        return cls(
            id=_record_id(data),
            total_price=to_decimal(data.get('totalPrice')),
            is_paid=bool(data.get('isPaid')),
            shipping_address=data.get('shippingAddress', ''),
            user=OrderUser(user.get('name'), user.get('email')) if isinstance(user, dict) else None,
            created_at=_parse_datetime(data.get('createdAt')),
            items=[OrderItem.from_api(i) for i in data.get('orderItems') or []],
        )

    @property
    def customer_name(self):
        return display_or_na(self.user.name if self.user else None)

    @property
    def customer_email(self):
        return display_or_na(self.user.email if self.user else None)

    def __str__(self):
        return f"Order #{self.id} - {self.customer_name}"


# ------------------------------
# CART ENTRY
# ------------------------------
@dataclass
class CartEntry:
    product: str
    name: str
    price: Decimal
    quantity: int = 1
    image: str = ''

    @classmethod
    def from_session(cls, data):
        return cls(
            product=str(data['product']),
            name=data.get('name', ''),
            price=to_decimal(data.get('price')),
            quantity=int(data.get('quantity') or 1),
            image=data.get('image') or '',
        )

    def to_session(self):
        return {
            'product': self.product,
            'name': self.name,
            'price': str(self.price),
            'quantity': self.quantity,
            'image': self.image,
        }

    @property
    def item_total(self):
        return money(self.price * self.quantity)

    def to_order_item(self):
        return {
            'product': self.product,
            'name': self.name,
            'quantity': self.quantity,
            'price': float(self.price),
            'image': self.image,
        }
