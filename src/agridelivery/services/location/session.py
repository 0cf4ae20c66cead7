"""Buyer location state: acquisition, manual entry, persistence and change events."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from ...errors import GeolocationError, LocationResolutionError, PersistenceError
from ...models.domain import UserLocation
from ...persistence.codec import LOCATION_ADAPTER, load_value, save_value
from ...persistence.storage import KeyValueStore, StorageKeys
from ..geospatial import validate_coordinates
from .areas import find_county
from .events import LocationEvents, LocationListener
from .geolocation import GeolocationProvider

logger = logging.getLogger(__name__)

CURRENT_LOCATION_LABEL = "Current Location"
PERMISSION_DENIED_MESSAGE = (
    "Please enable location services to get accurate delivery estimates and find nearby sellers."
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocationSession:
    """Owns the active buyer location for one session.

    Failures to acquire a position never raise: ``get_current_location``
    returns ``None`` and records the reason in ``last_error``. A location
    change is committed as one step (persist, swap, broadcast) that is
    shielded from caller cancellation.
    """

    def __init__(
        self,
        store: KeyValueStore,
        provider: GeolocationProvider,
        *,
        events: LocationEvents | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.provider = provider
        self.events = events or LocationEvents()
        self.clock = clock
        self._current: Optional[UserLocation] = None
        self._last_error: Optional[str] = None
        self._permission_granted = False
        self._loading = False

    @property
    def current(self) -> Optional[UserLocation]:
        return self._current

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def permission_granted(self) -> bool:
        return self._permission_granted

    @property
    def is_loading(self) -> bool:
        return self._loading

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        return self.events.subscribe(listener)

    async def load_saved_location(self) -> Optional[UserLocation]:
        try:
            saved = await load_value(self.store, StorageKeys.LOCATION, LOCATION_ADAPTER, None)
        except PersistenceError as exc:
            logger.warning(f"Failed to load saved location: {exc}")
            return self._current
        if saved is not None:
            self._current = saved
            self.events.publish(saved)
        return self._current

    async def request_permission(self) -> bool:
        try:
            granted = await self.provider.request_permission()
        except GeolocationError as exc:
            logger.warning(f"Location permission request failed: {exc}")
            granted = False
        self._permission_granted = granted
        if not granted:
            self._last_error = PERMISSION_DENIED_MESSAGE
        return granted

    async def get_current_location(self) -> Optional[UserLocation]:
        self._loading = True
        try:
            if not await self.request_permission():
                return None
            try:
                position = await self.provider.current_position()
            except GeolocationError as exc:
                logger.warning(f"Failed to get current location: {exc}")
                self._last_error = str(exc)
                return None

            location = UserLocation(
                coordinates=position,
                label=CURRENT_LOCATION_LABEL,
                timestamp=self.clock(),
            )
            await asyncio.shield(self._commit(location))
            self._last_error = None
            logger.info(f"Got current location: {position.lat:.4f}, {position.lng:.4f}")
            return location
        finally:
            self._loading = False

    async def set_manual_location(self, location: UserLocation) -> UserLocation:
        """Accept a user-entered location, filling coordinates from its county.

        Raises LocationResolutionError when no coordinates are given and none
        can be derived from the county, sub-county or ward identifiers.
        """
        resolved = self._resolve(location)
        await asyncio.shield(self._commit(resolved))
        logger.info(f"Set manual location: {resolved.label or resolved.city or resolved.county}")
        return resolved

    def _resolve(self, location: UserLocation) -> UserLocation:
        if location.coordinates is not None:
            try:
                validate_coordinates(location.coordinates)
            except ValueError as exc:
                raise LocationResolutionError(str(exc)) from exc
            resolved = location
        else:
            county = None
            for key in (location.county_id, location.sub_county_id, location.ward_id, location.county):
                county = find_county(key)
                if county is not None:
                    break
            if county is None:
                raise LocationResolutionError("Location must have valid coordinates")
            resolved = replace(
                location,
                coordinates=county.coordinates,
                county=location.county or county.name,
                county_id=location.county_id or county.id,
            )
            logger.debug(f"Enriched location with coordinates of {county.name}")

        if resolved.timestamp is None:
            resolved = replace(resolved, timestamp=self.clock())
        return resolved

    async def _commit(self, location: UserLocation) -> None:
        try:
            await save_value(self.store, StorageKeys.LOCATION, LOCATION_ADAPTER, location)
        except PersistenceError as exc:
            logger.warning(f"Location kept in memory only: {exc}")
        self._current = location
        self.events.publish(location)
