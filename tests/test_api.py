"""Tests for the storefront REST client."""

import json
from unittest.mock import patch

import httpx
import pytest

from storefront import api


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, payload=None, exc=None):
        self.status_code = status_code
        self.payload = payload
        self.exc = exc
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self):
        return self.requests[-1]


@pytest.fixture
def transport():
    recorder = Recorder()

    def make_client():
        return httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(recorder))

    with patch("storefront.api._get_client", side_effect=make_client):
        yield recorder


class TestRequests:
    def test_list_products_is_anonymous(self, transport, products_data):
        transport.payload = products_data

        assert api.list_products() == products_data
        assert transport.last.method == "GET"
        assert transport.last.url.path == "/api/products"
        assert "Authorization" not in transport.last.headers

    def test_create_product_sends_bearer_and_fields(self, transport, admin_session):
        transport.status_code = 201
        transport.payload = {"_id": "p9"}
        fields = {"name": "Tamper", "price": 25.0, "description": "58mm", "image": "", "category": "Tools", "stock": 3}

        assert api.create_product(admin_session, fields) == {"_id": "p9"}
        assert transport.last.method == "POST"
        assert transport.last.headers["Authorization"] == "Bearer admin-token"
        assert json.loads(transport.last.content) == fields

    def test_update_product_targets_id(self, transport, admin_session):
        transport.payload = {"_id": "p1"}

        api.update_product(admin_session, "p1", {"name": "x"})

        assert transport.last.method == "PUT"
        assert transport.last.url.path == "/api/products/p1"

    def test_delete_product_accepts_empty_body(self, transport, admin_session):
        transport.status_code = 204

        assert api.delete_product(admin_session, "p1") == {}
        assert transport.last.method == "DELETE"
        assert transport.last.url.path == "/api/products/p1"

    def test_update_order_sends_only_paid_flag(self, transport, admin_session):
        transport.payload = {"_id": "o1", "isPaid": True}

        api.update_order(admin_session, "o1", True)

        assert transport.last.url.path == "/api/orders/o1"
        assert json.loads(transport.last.content) == {"isPaid": True}

    def test_list_orders_sends_bearer(self, transport, admin_session):
        transport.payload = []

        api.list_orders(admin_session)

        assert transport.last.url.path == "/api/orders"
        assert transport.last.headers["Authorization"] == "Bearer admin-token"

    def test_create_order(self, transport, shopper_session):
        transport.status_code = 201
        transport.payload = {"_id": "o3"}
        payload = {"orderItems": [], "shippingAddress": "1 Main St", "totalPrice": 0.0}

        api.create_order(shopper_session, payload)

        assert transport.last.method == "POST"
        assert transport.last.url.path == "/api/orders"
        assert transport.last.headers["Authorization"] == "Bearer shopper-token"


class TestErrors:
    def test_server_message_is_kept(self, transport, admin_session):
        transport.status_code = 400
        transport.payload = {"message": "Product name already exists"}

        with pytest.raises(api.StorefrontAPIError) as excinfo:
            api.create_product(admin_session, {})

        assert excinfo.value.status_code == 400
        assert excinfo.value.user_message("Failed to save product") == "Product name already exists"

    def test_fallback_without_message(self, transport, admin_session):
        transport.status_code = 500

        with pytest.raises(api.StorefrontAPIError) as excinfo:
            api.delete_product(admin_session, "p1")

        assert excinfo.value.server_message is None
        assert excinfo.value.user_message("Failed to delete product") == "Failed to delete product"

    def test_unreachable_api(self, transport):
        transport.exc = httpx.ConnectError("connection refused")

        with pytest.raises(api.StorefrontAPIUnavailable) as excinfo:
            api.list_products()

        assert excinfo.value.user_message("Failed to fetch products") == "Failed to fetch products"
