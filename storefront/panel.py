"""
Admin panel state.

The panel keeps its own view state in the admin's session: the active tab,
the last fetched product and order snapshots, the form mode and the current
error. A failed fetch or mutation leaves the snapshots as they were; every
successful mutation refetches the whole collection.
"""
import logging
from dataclasses import dataclass

from django.contrib import messages

from . import api
from .forms import ProductForm
from .models import Order, Product

logger = logging.getLogger(__name__)

PANEL_SESSION_KEY = 'admin_panel'

PRODUCTS = 'products'
ORDERS = 'orders'
TABS = (PRODUCTS, ORDERS)

# Fetch states
IDLE = 'idle'
LOADING = 'loading'
POPULATED = 'populated'
ERROR_SHOWN = 'error-shown'

API_ERRORS = (api.StorefrontAPIError, api.StorefrontAPIUnavailable)


@dataclass(frozen=True)
class CreateMode:
    heading = 'Add New Product'
    submit_label = 'Add Product'
    success_message = 'Product added successfully'


@dataclass(frozen=True)
class EditMode:
    product_id: str

    heading = 'Edit Product'
    submit_label = 'Update Product'
    success_message = 'Product updated successfully'


class AdminPanel:
    def __init__(self, request, shopper):
        self.request = request
        self.shopper = shopper
        self.state = request.session.setdefault(PANEL_SESSION_KEY, {
            'tab': PRODUCTS,
            'products': [],
            'orders': [],
            'edit': None,
            'error': '',
        })
        self.status = IDLE

    def _changed(self):
        self.request.session.modified = True

    # ------------------------------
    # State
    # ------------------------------
    @property
    def tab(self):
        return self.state['tab']

    @property
    def products(self):
        return [Product.from_api(p) for p in self.state['products']]

    @property
    def orders(self):
        return [Order.from_api(o) for o in self.state['orders']]

    @property
    def error(self):
        return self.state['error']

    def _set_error(self, message):
        self.state['error'] = message
        self.status = ERROR_SHOWN
        self._changed()

    @property
    def mode(self):
        if self.state['edit']:
            return EditMode(self.state['edit'])
        return CreateMode()

    def _set_mode(self, mode):
        self.state['edit'] = mode.product_id if isinstance(mode, EditMode) else None
        self._changed()

    def get_product(self, product_id):
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def get_order(self, order_id):
        for order in self.orders:
            if order.id == order_id:
                return order
        return None

    def form(self):
        """Unbound form for the current mode."""
        mode = self.mode
        if isinstance(mode, EditMode):
            product = self.get_product(mode.product_id)
            if product is not None:
                return ProductForm.for_product(product)
            self._set_mode(CreateMode())
        return ProductForm()

    # ------------------------------
    # Fetching
    # ------------------------------
    def mount(self, tab=None):
        """
        Load the panel for a page view.

        A page view right after a successful mutation reuses the collection
        that mutation just refetched instead of fetching it twice.
        """
        if tab not in TABS:
            tab = self.tab
        if self.state.pop('fresh', None) == tab:
            self.status = POPULATED
            self._changed()
            return
        self.state['error'] = ''
        self.switch_tab(tab)

    def _refresh_after_mutation(self, collection):
        self.state['error'] = ''
        fetched = self.fetch_orders() if collection == ORDERS else self.fetch_products()
        if fetched:
            self.state['fresh'] = collection
            self._changed()

    def switch_tab(self, tab):
        if tab not in TABS:
            tab = PRODUCTS
        self.state['tab'] = tab
        self._changed()
        self.fetch_active()

    def fetch_active(self):
        if self.tab == ORDERS:
            self.fetch_orders()
        else:
            self.fetch_products()

    def fetch_products(self):
        self.status = LOADING
        try:
            self.state['products'] = list(api.list_products())
        except API_ERRORS:
            self._set_error('Failed to fetch products')
            return False
        if self.state['edit'] and self.get_product(self.state['edit']) is None:
            self._set_mode(CreateMode())
        self.status = POPULATED
        self._changed()
        return True

    def fetch_orders(self):
        self.status = LOADING
        try:
            self.state['orders'] = list(api.list_orders(self.shopper))
        except API_ERRORS:
            self._set_error('Failed to fetch orders')
            return False
        self.status = POPULATED
        self._changed()
        return True

    # ------------------------------
    # Products
    # ------------------------------
    def submit_product(self, data):
        """
        Create or update a product from submitted form data.

        Returns (saved, form). On failure the bound form is returned so its
        contents can be corrected and resubmitted.
        """
        self.state['error'] = ''
        self._changed()

        form = ProductForm(data)
        if not form.is_valid():
            return False, form

        mode = self.mode
        try:
            if isinstance(mode, EditMode):
                api.update_product(self.shopper, mode.product_id, form.to_payload())
            else:
                api.create_product(self.shopper, form.to_payload())
        except API_ERRORS as e:
            self._set_error(e.user_message('Failed to save product'))
            return False, form

        logger.info("%s: %s", mode.success_message, form.cleaned_data['name'])
        messages.success(self.request, mode.success_message)
        self._set_mode(CreateMode())
        self._refresh_after_mutation(PRODUCTS)
        return True, ProductForm()

    def edit_product(self, product_id):
        product = self.get_product(product_id)
        if product is None:
            self._set_error('Product not found')
            return None
        self._set_mode(EditMode(product.id))
        return product

    def cancel_edit(self):
        self._set_mode(CreateMode())

    def delete_product(self, product_id, confirmed):
        if not confirmed:
            return False
        try:
            api.delete_product(self.shopper, product_id)
        except API_ERRORS:
            self._set_error('Failed to delete product')
            return False

        messages.success(self.request, 'Product deleted successfully')
        if self.state['edit'] == product_id:
            self._set_mode(CreateMode())
        self._refresh_after_mutation(PRODUCTS)
        return True

    # ------------------------------
    # Orders
    # ------------------------------
    def toggle_order_paid(self, order_id):
        order = self.get_order(order_id)
        if order is None:
            self._set_error('Failed to update order')
            return False
        try:
            api.update_order(self.shopper, order.id, not order.is_paid)
        except API_ERRORS:
            self._set_error('Failed to update order')
            return False

        messages.success(self.request, 'Order status updated')
        self._refresh_after_mutation(ORDERS)
        return True
