"""Provider eligibility filtering and ranking."""

from __future__ import annotations

import logging
import math
from typing import Protocol, Sequence

from ...errors import InvalidInputError
from ...models.domain import DeliveryProvider
from .providers import DELIVERY_PROVIDERS

logger = logging.getLogger(__name__)


class AreaMatcher(Protocol):
    def matches(self, requested_area: str, service_areas: Sequence[str]) -> bool:
        ...


class SubstringAreaMatcher:
    """Case-insensitive substring match in either direction."""

    def matches(self, requested_area: str, service_areas: Sequence[str]) -> bool:
        requested = requested_area.strip().lower()
        if not requested:
            return False
        for area in service_areas:
            candidate = area.lower()
            if requested in candidate or candidate in requested:
                return True
        return False


class ExactAreaMatcher:
    """Match only identical area names after normalisation."""

    def matches(self, requested_area: str, service_areas: Sequence[str]) -> bool:
        requested = requested_area.strip().lower()
        return any(requested == area.strip().lower() for area in service_areas)


def _validate_request(order_weight_kg: float, distance_km: float) -> None:
    for name, value in (("order_weight_kg", order_weight_kg), ("distance_km", distance_km)):
        if value is None or math.isnan(value) or value < 0:
            raise InvalidInputError(f"{name} must be a non-negative number, got {value!r}")


def is_eligible(
    provider: DeliveryProvider,
    order_weight_kg: float,
    distance_km: float,
    delivery_area: str,
    matcher: AreaMatcher,
) -> bool:
    if not provider.available:
        return False
    if order_weight_kg > provider.max_weight:
        return False
    if distance_km > provider.max_distance:
        return False
    return matcher.matches(delivery_area, provider.service_areas)


def ranking_key(provider: DeliveryProvider) -> tuple:
    """Recommended first, then higher rating, then cheaper base cost; id breaks remaining ties."""
    return (not provider.banda_recommended, -provider.rating, provider.base_cost, provider.id)


def get_available_providers(
    order_weight_kg: float,
    distance_km: float,
    delivery_area: str,
    *,
    providers: Sequence[DeliveryProvider] = DELIVERY_PROVIDERS,
    matcher: AreaMatcher | None = None,
) -> list[DeliveryProvider]:
    _validate_request(order_weight_kg, distance_km)
    matcher = matcher or SubstringAreaMatcher()

    eligible = [
        provider
        for provider in providers
        if is_eligible(provider, order_weight_kg, distance_km, delivery_area, matcher)
    ]
    if not eligible:
        logger.info(
            f"No eligible providers for {order_weight_kg:.1f}kg over {distance_km:.1f}km to '{delivery_area}'"
        )
    return sorted(eligible, key=ranking_key)
