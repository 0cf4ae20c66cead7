"""Cart decomposition helpers."""

from .grouping import group_by_seller, line_total, seller_id_for, summarize_cart
from .service import CartService

__all__ = ["group_by_seller", "line_total", "seller_id_for", "summarize_cart", "CartService"]
