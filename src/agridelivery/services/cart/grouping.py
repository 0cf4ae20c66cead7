"""Seller-grouped projection over cart items."""

from __future__ import annotations

import re
from typing import Sequence

from ...errors import InvalidInputError
from ...models.domain import CartItem, CartSummary, SellerGroup


def seller_id_for(vendor: str) -> str:
    """Stable seller id derived from the vendor display name."""
    return "seller-" + re.sub(r"\s+", "-", vendor.strip().lower())


def validate_line(item: CartItem) -> None:
    if item.quantity <= 0:
        raise InvalidInputError(f"Quantity for product '{item.product.id}' must be positive, got {item.quantity}.")
    if item.product.price < 0:
        raise InvalidInputError(f"Product '{item.product.id}' has a negative price.")


def line_total(item: CartItem) -> float:
    return item.product.price * item.quantity


def group_by_seller(items: Sequence[CartItem]) -> list[SellerGroup]:
    """Group items by seller in first-seen order.

    Pure: builds fresh groups on every call and never touches the items.
    Raises InvalidInputError for a non-positive quantity or a negative price.
    """
    groups: dict[str, SellerGroup] = {}
    for item in items:
        validate_line(item)
        seller_id = item.seller_id or seller_id_for(item.product.vendor)
        group = groups.get(seller_id)
        if group is None:
            group = SellerGroup(
                seller_id=seller_id,
                seller_name=item.seller_name or item.product.vendor,
                seller_location=item.seller_location or item.product.location,
                items=[],
                subtotal=0.0,
                seller_coordinates=item.product.coordinates,
            )
            groups[seller_id] = group
        elif group.seller_coordinates is None:
            group.seller_coordinates = item.product.coordinates
        group.items.append(item)
        group.subtotal += line_total(item)
    return list(groups.values())


def summarize_cart(
    items: Sequence[CartItem],
    groups: Sequence[SellerGroup] | None = None,
    *,
    discount: float = 0.0,
) -> CartSummary:
    """Totals for the cart.

    Subtotal and delivery fee are both sums over the groups, so the subtotal
    always equals the sum of the group subtotals.
    """
    for item in items:
        validate_line(item)
    if groups is None:
        groups = group_by_seller(items)
    subtotal = sum(group.subtotal for group in groups)
    delivery_fee = sum(group.delivery_fee for group in groups)
    seller_count = len(groups)
    return CartSummary(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        discount=discount,
        total=subtotal + delivery_fee - discount,
        item_count=sum(item.quantity for item in items),
        seller_count=seller_count,
        is_split_order=seller_count > 1,
    )
