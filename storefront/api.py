"""HTTP client for the storefront REST API.

Every call opens a short-lived httpx client against STOREFRONT_API_URL.
Authenticated calls take the shopper session explicitly and send its bearer
token; nothing is looked up from module state.
"""

import logging
from typing import Any

import httpx
from django.conf import settings

from .session import ShopperSession

logger = logging.getLogger(__name__)


class StorefrontAPIError(Exception):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, server_message: str | None = None):
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(server_message or f"Storefront API returned {status_code}")

    def user_message(self, fallback: str) -> str:
        return self.server_message or fallback


class StorefrontAPIUnavailable(Exception):
    """The API could not be reached."""

    def user_message(self, fallback: str) -> str:
        return fallback


def _get_client() -> httpx.Client:
    """Get a configured httpx client."""
    return httpx.Client(
        base_url=settings.STOREFRONT_API_URL,
        timeout=settings.STOREFRONT_API_TIMEOUT,
    )


def _handle_response(response: httpx.Response) -> Any:
    if response.is_success:
        if not response.content:
            return {}
        return response.json()

    message = None
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
    raise StorefrontAPIError(response.status_code, message)


def _request(
    method: str,
    path: str,
    session: ShopperSession | None = None,
    payload: Any = None,
) -> Any:
    headers = session.auth_headers if session else {}
    try:
        with _get_client() as client:
            response = client.request(method, path, json=payload, headers=headers)
    except httpx.RequestError as e:
        logger.error("Storefront API unavailable (%s %s): %s", method, path, e)
        raise StorefrontAPIUnavailable(str(e)) from e

    try:
        return _handle_response(response)
    except StorefrontAPIError as e:
        logger.warning("%s %s failed with %s: %s", method, path, e.status_code, e)
        raise


# Products

def list_products() -> list[dict]:
    return _request("GET", "/api/products")


def create_product(session: ShopperSession, fields: dict) -> dict:
    return _request("POST", "/api/products", session, fields)


def update_product(session: ShopperSession, product_id: str, fields: dict) -> dict:
    return _request("PUT", f"/api/products/{product_id}", session, fields)


def delete_product(session: ShopperSession, product_id: str) -> dict:
    return _request("DELETE", f"/api/products/{product_id}", session)


# Orders

def list_orders(session: ShopperSession) -> list[dict]:
    return _request("GET", "/api/orders", session)


def list_my_orders(session: ShopperSession) -> list[dict]:
    return _request("GET", "/api/orders/myorders", session)


def update_order(session: ShopperSession, order_id: str, is_paid: bool) -> dict:
    return _request("PUT", f"/api/orders/{order_id}", session, {"isPaid": is_paid})


def create_order(session: ShopperSession, payload: dict) -> dict:
    """Place an order.

    Args:
        session: The signed-in shopper
        payload: {orderItems, shippingAddress, totalPrice}

    Returns:
        The created order as returned by the API

    Raises:
        StorefrontAPIError: On a rejected order
        StorefrontAPIUnavailable: If the API is unreachable
    """
    return _request("POST", "/api/orders", session, payload)


# Users

def login(email: str, password: str) -> dict:
    """Exchange credentials for a profile carrying a bearer token."""
    return _request("POST", "/api/users/login", payload={"email": email, "password": password})
