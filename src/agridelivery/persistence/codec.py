"""JSON (de)serialisation of persisted aggregates."""

from __future__ import annotations

import logging
from typing import Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..models.domain import CartItem, DeliveryOrder, UserLocation
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

CART_ADAPTER: TypeAdapter[list[CartItem]] = TypeAdapter(list[CartItem])
DELIVERY_ORDERS_ADAPTER: TypeAdapter[list[DeliveryOrder]] = TypeAdapter(list[DeliveryOrder])
LOCATION_ADAPTER: TypeAdapter[Optional[UserLocation]] = TypeAdapter(Optional[UserLocation])


def dumps(adapter: TypeAdapter[T], value: T) -> str:
    """Serialise with datetimes as ISO-8601 strings."""
    return adapter.dump_json(value).decode("utf-8")


def loads(adapter: TypeAdapter[T], payload: str | None, default: T) -> T:
    if payload is None:
        return default
    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        logger.warning(f"Discarding unreadable stored payload: {exc.error_count()} validation errors")
        return default


async def load_value(store: KeyValueStore, key: str, adapter: TypeAdapter[T], default: T) -> T:
    return loads(adapter, await store.get_item(key), default)


async def save_value(store: KeyValueStore, key: str, adapter: TypeAdapter[T], value: T) -> None:
    await store.set_item(key, dumps(adapter, value))
