"""Persisted shopping cart."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ...errors import InvalidInputError, PersistenceError
from ...models.domain import CartItem, CartSummary, Product, SellerGroup
from ...persistence.codec import CART_ADAPTER, load_value, save_value
from ...persistence.storage import KeyValueStore, StorageKeys
from .grouping import group_by_seller, seller_id_for, summarize_cart

logger = logging.getLogger(__name__)


class CartService:
    """Cart items for one session, persisted as a single list.

    Mutators run one at a time under ``_lock``. Each derives the new list from
    the current one and swaps it in memory once the write returns.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._items: list[CartItem] = []
        self._lock = asyncio.Lock()

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    async def load(self) -> list[CartItem]:
        async with self._lock:
            try:
                self._items = await load_value(self.store, StorageKeys.CART, CART_ADAPTER, [])
            except PersistenceError as exc:
                logger.warning(f"Failed to load cart, starting empty: {exc}")
                self._items = []
        return self.items

    async def _commit(self, items: list[CartItem]) -> None:
        try:
            await save_value(self.store, StorageKeys.CART, CART_ADAPTER, items)
        except PersistenceError as exc:
            logger.warning(f"Cart change kept in memory only: {exc}")
        self._items = items

    async def add_to_cart(self, product: Product, quantity: int = 1) -> CartItem:
        if quantity <= 0:
            raise InvalidInputError(f"quantity must be positive, got {quantity}")
        if product.price < 0:
            raise InvalidInputError(f"Product '{product.id}' has a negative price.")

        async with self._lock:
            items = list(self._items)
            for index, item in enumerate(items):
                if item.product.id == product.id:
                    updated = replace(item, quantity=item.quantity + quantity)
                    items[index] = updated
                    break
            else:
                updated = CartItem(
                    product=product,
                    quantity=quantity,
                    seller_id=seller_id_for(product.vendor),
                    seller_name=product.vendor,
                    seller_location=product.location,
                )
                items.append(updated)
            await self._commit(items)

        logger.info(f"Added {quantity} x '{product.name}' from {product.vendor} to cart")
        return updated

    async def remove_from_cart(self, product_id: str) -> None:
        async with self._lock:
            await self._commit([item for item in self._items if item.product.id != product_id])

    async def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        async with self._lock:
            if quantity <= 0:
                items = [item for item in self._items if item.product.id != product_id]
            else:
                items = [
                    replace(item, quantity=quantity) if item.product.id == product_id else item
                    for item in self._items
                ]
            await self._commit(items)

    async def clear_cart(self) -> None:
        async with self._lock:
            await self._commit([])

    def grouped_by_seller(self) -> list[SellerGroup]:
        return group_by_seller(self._items)

    def summary(self) -> CartSummary:
        return summarize_cart(self._items)
