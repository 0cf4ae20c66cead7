"""Delivery order creation, status tracking and queries."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ...config import settings
from ...errors import DeliveryNotFoundError, IllegalTransitionError, InvalidInputError, PersistenceError
from ...models.domain import DeliveryOrder, DeliveryProvider, DeliveryStatus, TrackingUpdate
from ...persistence.codec import DELIVERY_ORDERS_ADAPTER, load_value, save_value
from ...persistence.storage import KeyValueStore, StorageKeys
from .states import ACTIVE_STATUSES, can_transition

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12].upper()}"


class DeliveryOrderService:
    """Owns the persisted list of delivery orders for a session.

    Mutations run one at a time under ``_lock``: the new list is derived from
    the current one and swapped in only after the write returns. A failed
    write is logged and the in-memory list still becomes authoritative.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
        eta_offset: timedelta | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.eta_offset = eta_offset or timedelta(minutes=settings.delivery_eta_offset_minutes)
        self._orders: list[DeliveryOrder] = []
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def orders(self) -> list[DeliveryOrder]:
        return list(self._orders)

    async def load(self) -> list[DeliveryOrder]:
        async with self._lock:
            await self._load()
        return self.orders

    async def ensure_loaded(self) -> None:
        async with self._lock:
            if not self._loaded:
                await self._load()

    async def _load(self) -> None:
        try:
            self._orders = await load_value(self.store, StorageKeys.DELIVERY_ORDERS, DELIVERY_ORDERS_ADAPTER, [])
        except PersistenceError as exc:
            logger.warning(f"Failed to load delivery orders, starting empty: {exc}")
            self._orders = []
        self._loaded = True

    async def _commit(self, orders: list[DeliveryOrder]) -> None:
        try:
            await save_value(self.store, StorageKeys.DELIVERY_ORDERS, DELIVERY_ORDERS_ADAPTER, orders)
        except PersistenceError as exc:
            logger.warning(f"Delivery orders kept in memory only: {exc}")
        self._orders = orders

    async def create_delivery_order(
        self,
        order_id: str,
        provider: DeliveryProvider,
        pickup_address: str,
        delivery_address: str,
        delivery_fee: float,
        distance_km: float,
        special_instructions: Optional[str] = None,
    ) -> DeliveryOrder:
        if delivery_fee < 0:
            raise InvalidInputError(f"delivery_fee must be non-negative, got {delivery_fee}")
        if distance_km < 0:
            raise InvalidInputError(f"distance_km must be non-negative, got {distance_km}")

        async with self._lock:
            if not self._loaded:
                await self._load()
            order = self._new_order(
                order_id, provider, pickup_address, delivery_address, delivery_fee, distance_km, special_instructions
            )
            await self._commit([order, *self._orders])
        logger.info(f"Created delivery {order.id} for order {order_id} with provider {provider.id}")
        return order

    def _new_order(
        self,
        order_id: str,
        provider: DeliveryProvider,
        pickup_address: str,
        delivery_address: str,
        delivery_fee: float,
        distance_km: float,
        special_instructions: Optional[str],
    ) -> DeliveryOrder:
        now = self.clock()
        return DeliveryOrder(
            id=_new_id("DEL"),
            order_id=order_id,
            provider_id=provider.id,
            driver_name=provider.driver.name,
            driver_phone=provider.driver.phone,
            vehicle_plate=provider.vehicle.license_plate,
            status=DeliveryStatus.ASSIGNED,
            pickup_address=pickup_address,
            delivery_address=delivery_address,
            estimated_delivery=now + self.eta_offset,
            delivery_fee=delivery_fee,
            distance=distance_km,
            tracking_updates=[
                TrackingUpdate(
                    id=_new_id("TU"),
                    timestamp=now,
                    status=DeliveryStatus.ASSIGNED,
                    message=f"Delivery assigned to {provider.driver.name}",
                    location=pickup_address,
                )
            ],
            special_instructions=special_instructions,
        )

    async def update_delivery_status(
        self,
        delivery_id: str,
        new_status: DeliveryStatus | str,
        message: str,
        location: Optional[str] = None,
    ) -> DeliveryOrder:
        """Append a tracking update and move the delivery to ``new_status``.

        Raises IllegalTransitionError for edges missing from the transition
        table, which includes any move out of delivered or cancelled.
        """
        try:
            status = DeliveryStatus(new_status)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown delivery status '{new_status}'.") from exc

        async with self._lock:
            if not self._loaded:
                await self._load()
            updated = await self._apply_status(delivery_id, status, message, location)
        logger.info(f"Delivery {delivery_id} is now {status.value}")
        return updated

    async def _apply_status(
        self,
        delivery_id: str,
        status: DeliveryStatus,
        message: str,
        location: Optional[str],
    ) -> DeliveryOrder:
        index, current = self._find(delivery_id)
        if not can_transition(current.status, status):
            logger.warning(f"Rejected transition {current.status.value} -> {status.value} for {delivery_id}")
            raise IllegalTransitionError(delivery_id, current.status.value, status.value)

        now = self.clock()
        if current.tracking_updates and now < current.tracking_updates[-1].timestamp:
            now = current.tracking_updates[-1].timestamp
        update = TrackingUpdate(
            id=_new_id("TU"),
            timestamp=now,
            status=status,
            message=message,
            location=location,
        )
        updated = replace(
            current,
            status=status,
            tracking_updates=[*current.tracking_updates, update],
            actual_delivery=now if status is DeliveryStatus.DELIVERED else None,
        )

        orders = list(self._orders)
        orders[index] = updated
        await self._commit(orders)
        return updated

    def _find(self, delivery_id: str) -> tuple[int, DeliveryOrder]:
        for index, order in enumerate(self._orders):
            if order.id == delivery_id:
                return index, order
        raise DeliveryNotFoundError(f"Delivery '{delivery_id}' not found.")

    def get_delivery(self, delivery_id: str) -> DeliveryOrder:
        return self._find(delivery_id)[1]

    def get_delivery_by_order_id(self, order_id: str) -> Optional[DeliveryOrder]:
        return next((order for order in self._orders if order.order_id == order_id), None)

    def get_active_deliveries(self) -> list[DeliveryOrder]:
        return [order for order in self._orders if order.status in ACTIVE_STATUSES]
