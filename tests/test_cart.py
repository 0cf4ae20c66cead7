import asyncio

import pytest

from src.agridelivery.errors import InvalidInputError, PersistenceError
from src.agridelivery.models.domain import CartItem, GeoCoordinates, Product
from src.agridelivery.persistence import MemoryStore, StorageKeys
from src.agridelivery.services.cart import CartService, group_by_seller, seller_id_for, summarize_cart


def _product(pid: str, vendor: str, price: float, unit: str = "kg", location: str = "Kiambu") -> Product:
    return Product(
        id=pid,
        name=f"Product {pid}",
        vendor=vendor,
        price=price,
        unit=unit,
        coordinates=GeoCoordinates(lat=-1.17, lng=36.83),
        location=location,
    )


def _item(pid: str, vendor: str, price: float, quantity: int) -> CartItem:
    return CartItem(product=_product(pid, vendor, price), quantity=quantity)


class FailingStore(MemoryStore):
    async def set_item(self, key: str, value: str) -> None:
        raise PersistenceError("disk full")


def test_single_vendor_cart_is_one_group():
    items = [_item("p1", "GreenFarm", 100, 2), _item("p2", "GreenFarm", 50, 3)]

    groups = group_by_seller(items)
    summary = summarize_cart(items, groups)

    assert len(groups) == 1
    assert groups[0].seller_id == "seller-greenfarm"
    assert groups[0].subtotal == 350
    assert summary.is_split_order is False
    assert summary.seller_count == 1


def test_two_vendor_cart_is_split_order():
    items = [
        _item("p1", "GreenFarm", 100, 2),
        _item("p2", "AgroMax", 80, 1),
        _item("p3", "GreenFarm", 20, 5),
    ]

    groups = group_by_seller(items)
    summary = summarize_cart(items, groups)

    assert [group.seller_name for group in groups] == ["GreenFarm", "AgroMax"]
    assert summary.seller_count == 2
    assert summary.is_split_order is True
    assert summary.item_count == 8


def test_group_subtotals_add_up_to_line_totals():
    items = [
        _item("p1", "GreenFarm", 99.5, 3),
        _item("p2", "AgroMax", 12.25, 4),
        _item("p3", "Shamba Fresh", 1000, 1),
        _item("p4", "AgroMax", 0, 7),
    ]

    groups = group_by_seller(items)

    assert sum(group.subtotal for group in groups) == pytest.approx(
        sum(item.product.price * item.quantity for item in items)
    )


def test_grouping_is_idempotent_and_does_not_touch_items():
    items = [_item("p1", "GreenFarm", 100, 2), _item("p2", "AgroMax", 80, 1)]
    before = [CartItem(product=item.product, quantity=item.quantity) for item in items]

    assert group_by_seller(items) == group_by_seller(items)
    assert items == before


def test_seller_id_uses_item_override():
    item = _item("p1", "GreenFarm", 100, 1)
    item.seller_id = "seller-42"

    assert group_by_seller([item])[0].seller_id == "seller-42"
    assert seller_id_for("  Green  Farm ") == "seller-green-farm"


def test_summary_applies_group_fees_and_discount():
    items = [_item("p1", "GreenFarm", 100, 2), _item("p2", "AgroMax", 80, 1)]
    groups = group_by_seller(items)
    groups[0].delivery_fee = 150
    groups[1].delivery_fee = 120

    summary = summarize_cart(items, groups, discount=30)

    assert summary.subtotal == 280
    assert summary.delivery_fee == 270
    assert summary.total == 520


def test_empty_cart_summary():
    summary = summarize_cart([])

    assert summary.total == 0
    assert summary.seller_count == 0
    assert summary.is_split_order is False


def test_cart_service_merges_and_persists():
    async def scenario():
        store = MemoryStore()
        cart = CartService(store)
        await cart.add_to_cart(_product("p1", "GreenFarm", 100), 2)
        await cart.add_to_cart(_product("p1", "GreenFarm", 100), 1)
        await cart.add_to_cart(_product("p2", "AgroMax", 80))

        reloaded = CartService(store)
        await reloaded.load()
        return cart, reloaded, store

    cart, reloaded, store = asyncio.run(scenario())

    assert [(item.product.id, item.quantity) for item in cart.items] == [("p1", 3), ("p2", 1)]
    assert reloaded.items == cart.items
    assert cart.items[0].seller_id == "seller-greenfarm"
    assert asyncio.run(store.get_item(StorageKeys.CART)) is not None
    assert cart.summary().is_split_order is True


def test_cart_service_update_remove_and_clear():
    async def scenario():
        cart = CartService(MemoryStore())
        await cart.add_to_cart(_product("p1", "GreenFarm", 100), 2)
        await cart.add_to_cart(_product("p2", "AgroMax", 80), 1)
        await cart.update_quantity("p1", 5)
        after_update = [(item.product.id, item.quantity) for item in cart.items]
        await cart.update_quantity("p2", 0)
        after_zero = [item.product.id for item in cart.items]
        await cart.remove_from_cart("p1")
        after_remove = cart.items
        await cart.add_to_cart(_product("p3", "AgroMax", 10), 1)
        await cart.clear_cart()
        return after_update, after_zero, after_remove, cart.items

    after_update, after_zero, after_remove, after_clear = asyncio.run(scenario())

    assert after_update == [("p1", 5), ("p2", 1)]
    assert after_zero == ["p1"]
    assert after_remove == []
    assert after_clear == []


@pytest.mark.parametrize("quantity,price", [(0, 100), (-1, 100), (1, -5)])
def test_cart_service_rejects_bad_lines(quantity, price):
    cart = CartService(MemoryStore())

    with pytest.raises(InvalidInputError):
        asyncio.run(cart.add_to_cart(_product("p1", "GreenFarm", price), quantity))
    assert cart.items == []


def test_cart_service_keeps_change_when_store_fails():
    cart = CartService(FailingStore())

    asyncio.run(cart.add_to_cart(_product("p1", "GreenFarm", 100), 2))

    assert [item.product.id for item in cart.items] == ["p1"]


def test_cart_service_ignores_corrupt_payload():
    store = MemoryStore({StorageKeys.CART: "{not json"})
    cart = CartService(store)

    assert asyncio.run(cart.load()) == []


class SlowStore(MemoryStore):
    async def set_item(self, key: str, value: str) -> None:
        await asyncio.sleep(0.01)
        await super().set_item(key, value)


def test_concurrent_cart_changes_are_all_kept():
    store = SlowStore()
    cart = CartService(store)

    async def scenario():
        await asyncio.gather(
            cart.add_to_cart(_product("p1", "GreenFarm", 100), 2),
            cart.add_to_cart(_product("p2", "AgroMax", 80), 1),
            cart.add_to_cart(_product("p1", "GreenFarm", 100), 1),
        )
        reloaded = CartService(store)
        await reloaded.load()
        return reloaded

    reloaded = asyncio.run(scenario())

    assert sorted((item.product.id, item.quantity) for item in cart.items) == [("p1", 3), ("p2", 1)]
    assert reloaded.items == cart.items


@pytest.mark.parametrize("price,quantity", [(100, 0), (100, -5), (-1, 2)])
def test_projection_rejects_bad_lines(price, quantity):
    items = [_item("p1", "GreenFarm", 50, 1), _item("p2", "AgroMax", price, quantity)]

    with pytest.raises(InvalidInputError):
        group_by_seller(items)
    with pytest.raises(InvalidInputError):
        summarize_cart(items)


def test_summary_subtotal_matches_group_subtotals_exactly():
    items = [
        _item("p1", "GreenFarm", 0.1, 1),
        _item("p2", "AgroMax", 0.2, 1),
        _item("p3", "GreenFarm", 0.3, 1),
    ]

    groups = group_by_seller(items)
    summary = summarize_cart(items, groups)

    assert summary.subtotal == sum(group.subtotal for group in groups)
