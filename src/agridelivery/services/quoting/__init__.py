"""Delivery quoting and recommendation."""

from .optimal import get_optimal_delivery_option
from .preview import delivery_preview, nearest_products
from .quotes import get_delivery_quotes, quote_provider
from .sellers import quote_seller_groups
from .weights import calculate_order_weight, unit_weight

__all__ = [
    "get_optimal_delivery_option",
    "delivery_preview",
    "nearest_products",
    "get_delivery_quotes",
    "quote_provider",
    "quote_seller_groups",
    "calculate_order_weight",
    "unit_weight",
]
