from functools import wraps
import json
import logging
import threading

from anymail.message import AnymailMessage
from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import render, redirect, reverse
from django.template.loader import render_to_string
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from . import api
from .cart import SessionCart, CheckoutError, place_order
from .forms import LoginForm
from .models import Order, Product
from .panel import AdminPanel, PRODUCTS, ORDERS
from .session import sign_in, sign_out

logger = logging.getLogger(__name__)


def _safe_next(request, candidate, fallback):
    """Only follow redirect targets on this host."""
    if candidate and url_has_allowed_host_and_scheme(
        candidate, allowed_hosts={request.get_host()}, require_https=request.is_secure(),
    ):
        return candidate
    return fallback


def _fetch_products(request):
    try:
        return [Product.from_api(p) for p in api.list_products()]
    except (api.StorefrontAPIError, api.StorefrontAPIUnavailable):
        messages.error(request, "Failed to fetch products")
        return []


# -------------------------------
# Browsing
# -------------------------------
def home(request):
    return render(request, 'storefront/home.html', {'products': _fetch_products(request)})


# -------------------------------
# CART SYSTEM
# -------------------------------
@require_POST
def add_to_cart(request, product_id):
    product = next((p for p in _fetch_products(request) if p.id == product_id), None)
    if product is None:
        messages.error(request, "That product is no longer available.")
        return redirect('home')

    SessionCart(request).add(product)
    next_url = _safe_next(request, request.POST.get('next'), reverse('cart'))
    return redirect(f"{next_url}?added=1")


@require_POST
def remove_from_cart(request):
    SessionCart(request).remove(request.POST.get('product_id', ''))
    return redirect('cart')


@require_POST
def update_cart_item(request):
    try:
        data = json.loads(request.body)
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object")
        cart = SessionCart(request)
        cart.update(str(data.get('product_id')), data.get('action'))
    except (ValueError, TypeError) as e:
        return JsonResponse({'status': 'error', 'message': str(e)}, status=400)

    return JsonResponse({
        'status': 'success',
        'cart_count': cart.count(),
        'total_price': f"{cart.total():.2f}",
    })


def _render_cart(request, shipping_address='', error='', status=200):
    cart = SessionCart(request)
    return render(request, 'storefront/cart.html', {
        'cart_items': cart.entries,
        'total_price': cart.total(),
        'shipping_address': shipping_address,
        'error': error,
        'checkout_in_flight': cart.checkout_in_flight,
    }, status=status)


def cart_view(request):
    return _render_cart(request)


# -------------------------------
# CHECKOUT
# -------------------------------
def _send_order_confirmation(order, email, name):
    try:
        ctx = {
            "order": order,
            "name": name or "Customer",
            "site_url": settings.STOREFRONT_SITE_URL,
        }
        plain = render_to_string("storefront/emails/order_confirmation.txt", ctx)
        html = render_to_string("storefront/emails/order_confirmation.html", ctx)

        msg = AnymailMessage(
            subject=f"Order confirmation #{order.id}",
            body=plain,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[email],
        )
        msg.attach_alternative(html, "text/html")
        msg.send()
    except Exception:
        logger.exception("Order confirmation send failed for order %s", order.id)


@require_POST
def checkout(request):
    shopper = request.shopper
    if shopper is None:
        return redirect(f"{reverse('login')}?next={reverse('cart')}")

    cart = SessionCart(request)
    if cart.is_empty():
        return redirect('cart')

    shipping_address = request.POST.get('shipping_address', '')
    try:
        created = place_order(shopper, cart, shipping_address)
    except CheckoutError as e:
        return _render_cart(request, shipping_address, str(e))

    if settings.ORDER_CONFIRMATION_EMAILS and shopper.email:
        order = Order.from_api(created if isinstance(created, dict) else {})
        threading.Thread(
            target=_send_order_confirmation,
            args=(order, shopper.email, shopper.name),
            daemon=True,
        ).start()
        logger.info("Started customer confirmation thread for order %s", order.id)

    messages.success(request, "Order placed successfully!")
    return redirect('my_orders')


# -------------------------------
# ORDERS
# -------------------------------
def my_orders(request):
    shopper = request.shopper
    if shopper is None:
        return redirect(f"{reverse('login')}?next={reverse('my_orders')}")

    try:
        orders = [Order.from_api(o) for o in api.list_my_orders(shopper)]
    except (api.StorefrontAPIError, api.StorefrontAPIUnavailable):
        messages.error(request, "Failed to fetch orders")
        orders = []

    return render(request, 'storefront/my_orders.html', {'orders': orders})


# -------------------------------
# Login
# -------------------------------
def login_view(request):
    next_url = _safe_next(
        request, request.POST.get('next') or request.GET.get('next'), reverse('home'),
    )
    form = LoginForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            profile = api.login(form.cleaned_data['email'], form.cleaned_data['password'])
        except (api.StorefrontAPIError, api.StorefrontAPIUnavailable) as e:
            form.add_error(None, e.user_message("Invalid email or password"))
        else:
            sign_in(request, profile)
            return redirect(next_url)

    return render(request, 'storefront/login.html', {'form': form, 'next': next_url})


@require_POST
def logout_view(request):
    sign_out(request)
    return redirect('home')


# -------------------------------
# ADMIN PANEL
# -------------------------------
def admin_required(view):
    """Only admins get the panel; everyone else is sent home."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        shopper = request.shopper
        if shopper is None or not shopper.is_admin:
            messages.error(request, "Access denied. Admin only.")
            return redirect('home')
        return view(request, AdminPanel(request, shopper), *args, **kwargs)
    return wrapper


def _render_panel(request, panel, form=None, status=200):
    return render(request, 'storefront/admin_panel.html', {
        'panel': panel,
        'tab': panel.tab,
        'mode': panel.mode,
        'form': form or panel.form(),
        'products': panel.products,
        'orders': panel.orders,
        'error': panel.error,
    }, status=status)


def _panel_url(tab, anchor=''):
    return f"{reverse('admin_panel')}?tab={tab}{anchor}"


@admin_required
def admin_panel(request, panel):
    panel.mount(request.GET.get('tab'))
    return _render_panel(request, panel)


@require_POST
@admin_required
def admin_product_submit(request, panel):
    saved, form = panel.submit_product(request.POST)
    if saved:
        return redirect(_panel_url(PRODUCTS))
    return _render_panel(request, panel, form)


@require_POST
@admin_required
def admin_product_edit(request, panel, product_id):
    if panel.edit_product(product_id) is None:
        return _render_panel(request, panel)
    return redirect(_panel_url(PRODUCTS, '#product-form'))


@require_POST
@admin_required
def admin_product_cancel(request, panel):
    panel.cancel_edit()
    return redirect(_panel_url(PRODUCTS))


@admin_required
def admin_product_delete(request, panel, product_id):
    product = panel.get_product(product_id)
    if request.method != 'POST':
        return render(request, 'storefront/admin_confirm_delete.html', {'product': product, 'product_id': product_id})

    if not panel.delete_product(product_id, confirmed=request.POST.get('confirm') == 'yes'):
        return _render_panel(request, panel)
    return redirect(_panel_url(PRODUCTS))


@require_POST
@admin_required
def admin_order_toggle(request, panel, order_id):
    if not panel.toggle_order_paid(order_id):
        return _render_panel(request, panel)
    return redirect(_panel_url(ORDERS))
