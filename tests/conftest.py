"""Shared pytest fixtures for shopfront tests."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from storefront.session import TOKEN_SESSION_KEY, USER_SESSION_KEY, ShopperSession


ADMIN_PROFILE = {
    "_id": "u-admin",
    "name": "Ada Admin",
    "email": "admin@example.com",
    "isAdmin": True,
}

SHOPPER_PROFILE = {
    "_id": "u-shopper",
    "name": "Sam Shopper",
    "email": "sam@example.com",
    "isAdmin": False,
}


def sign_in_client(client, profile, token):
    session = client.session
    session[USER_SESSION_KEY] = profile
    session[TOKEN_SESSION_KEY] = token
    session.save()


def set_cart(client, entries):
    session = client.session
    session["cart"] = entries
    session.save()


@pytest.fixture
def admin_client(client):
    """Client signed in as an admin."""
    sign_in_client(client, ADMIN_PROFILE, "admin-token")
    return client


@pytest.fixture
def shopper_client(client):
    """Client signed in as a regular shopper."""
    sign_in_client(client, SHOPPER_PROFILE, "shopper-token")
    return client


@pytest.fixture
def admin_session():
    return ShopperSession(
        name="Ada Admin", email="admin@example.com", token="admin-token", is_admin=True, user_id="u-admin",
    )


@pytest.fixture
def shopper_session():
    return ShopperSession(
        name="Sam Shopper", email="sam@example.com", token="shopper-token", user_id="u-shopper",
    )


@pytest.fixture
def products_data():
    return [
        {
            "_id": "p1",
            "name": "Espresso Machine",
            "price": 199.99,
            "description": "Pulls a decent shot.",
            "image": "https://img.example.com/espresso.jpg",
            "category": "Kitchen",
            "stock": 4,
        },
        {
            "_id": "p2",
            "name": "Milk Jug",
            "price": 12.5,
            "description": "Stainless steel.",
            "image": "",
            "category": "Kitchen",
            "stock": 0,
        },
    ]


@pytest.fixture
def orders_data():
    return [
        {
            "_id": "o1",
            "user": {"name": "Sam Shopper", "email": "sam@example.com"},
            "createdAt": "2026-03-01T10:15:00.000Z",
            "orderItems": [
                {"product": "p1", "name": "Espresso Machine", "quantity": 1, "price": 199.99, "image": ""},
                {"product": "p2", "name": "Milk Jug", "quantity": 2, "price": 12.5, "image": ""},
            ],
            "shippingAddress": "1 Main St\nSpringfield",
            "totalPrice": 224.99,
            "isPaid": False,
        },
        {
            "_id": "o2",
            "user": None,
            "createdAt": "2026-03-02T08:00:00.000Z",
            "orderItems": [],
            "shippingAddress": "2 Side St",
            "totalPrice": 10,
            "isPaid": True,
        },
    ]


@pytest.fixture
def mock_api():
    """Patch every storefront API call; tests set return values as needed."""
    names = [
        "list_products", "create_product", "update_product", "delete_product",
        "list_orders", "list_my_orders", "update_order", "create_order", "login",
    ]
    patchers = {name: patch(f"storefront.api.{name}") for name in names}
    mocks = {name: p.start() for name, p in patchers.items()}
    for name in ("list_products", "list_orders", "list_my_orders"):
        mocks[name].return_value = []
    yield SimpleNamespace(**mocks)
    for p in patchers.values():
        p.stop()
