from django import template
from django.conf import settings

from ..models import money

register = template.Library()


@register.filter
def usd(value):
    """Format an amount as dollars with two decimals."""
    return f"${money(value)}"


@register.filter
def line_total(item):
    return f"${money(item.price * item.quantity)}"


@register.filter
def or_placeholder(image_url):
    return image_url or settings.STOREFRONT_PLACEHOLDER_IMAGE
