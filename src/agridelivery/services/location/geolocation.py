"""Sources of the device's current position."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Optional, Protocol

import httpx

from ...config import settings
from ...errors import GeolocationUnavailableError, PermissionDeniedError
from ...models.domain import GeoCoordinates

logger = logging.getLogger(__name__)

LAT_KEYS = ("lat", "latitude")
LNG_KEYS = ("lng", "lon", "longitude")


class GeolocationProvider(Protocol):
    async def request_permission(self) -> bool:
        ...

    async def current_position(self) -> GeoCoordinates:
        ...


class StaticGeolocationProvider:
    """Returns a fixed position, or refuses as if the user denied access."""

    def __init__(
        self,
        position: Optional[GeoCoordinates] = None,
        *,
        permission_granted: bool = True,
        delay_seconds: float = 0.0,
    ) -> None:
        self.position = position
        self.permission_granted = permission_granted
        self.delay_seconds = delay_seconds

    async def request_permission(self) -> bool:
        return self.permission_granted

    async def current_position(self) -> GeoCoordinates:
        if not self.permission_granted:
            raise PermissionDeniedError("Location permission denied")
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.position is None:
            raise GeolocationUnavailableError("No position available")
        return self.position


def _first(payload: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def parse_position(payload: Any) -> GeoCoordinates:
    """Read a lat/lng pair from a JSON object, accepting the common key spellings."""
    if not isinstance(payload, dict):
        raise GeolocationUnavailableError("Geolocation response is not a JSON object")
    if isinstance(payload.get("coords"), dict):
        payload = payload["coords"]
    try:
        lat = float(_first(payload, LAT_KEYS))
        lng = float(_first(payload, LNG_KEYS))
    except (TypeError, ValueError) as exc:
        raise GeolocationUnavailableError("Geolocation response is missing coordinates") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)) or abs(lat) > 90 or abs(lng) > 180:
        raise GeolocationUnavailableError(f"Geolocation returned invalid coordinates ({lat}, {lng})")
    return GeoCoordinates(lat=lat, lng=lng)


class HttpGeolocationProvider:
    """Asks an HTTP endpoint for the caller's position.

    Timeouts, network errors and 5xx responses are retried up to
    ``max_retries`` times with exponential backoff. Other 4xx responses fail
    at once; 401 and 403 count as a permission refusal.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url or settings.geolocation_url
        if not self.url:
            raise ValueError("Geolocation URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.geolocation_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geolocation_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geolocation_backoff_seconds
        self._client = client
        self._permission_denied = False

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=5.0))

    async def request_permission(self) -> bool:
        return not self._permission_denied

    async def current_position(self) -> GeoCoordinates:
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = await client.get(self.url)
                    if response.status_code in (401, 403):
                        self._permission_denied = True
                        raise PermissionDeniedError(f"Geolocation endpoint refused access ({response.status_code})")
                    response.raise_for_status()
                    return parse_position(response.json())
                except httpx.HTTPStatusError as exc:
                    if exc.response.status_code < 500:
                        logger.warning(f"Geolocation endpoint rejected the request: {exc}")
                        raise GeolocationUnavailableError(f"Location services unavailable: {exc}") from exc
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Geolocation request failed after {attempt} attempts: {exc}")
                        raise GeolocationUnavailableError(f"Location services unavailable: {exc}") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geolocation server error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    await asyncio.sleep(wait_time)
                except (httpx.TimeoutException, httpx.NetworkError) as exc:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Geolocation request failed after {attempt} attempts: {exc}")
                        raise GeolocationUnavailableError(f"Location services unavailable: {exc}") from exc
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Geolocation request failed, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    await asyncio.sleep(wait_time)
                except ValueError as exc:
                    raise GeolocationUnavailableError("Geolocation response is not valid JSON") from exc
        finally:
            if client is not self._client:
                await client.aclose()
