"""Fee quotes for eligible providers."""

from __future__ import annotations

import math
from typing import Sequence

from ...errors import InvalidInputError
from ...models.domain import DeliveryProvider, DeliveryQuote, DeliveryZone
from ..catalog.matching import AreaMatcher, get_available_providers
from ..catalog.providers import DELIVERY_PROVIDERS
from ..catalog.zones import get_zone
from ..geospatial import eta_for

RECOMMENDED_DISCOUNT_RATE = 0.10


def quote_provider(
    provider: DeliveryProvider,
    distance_km: float,
    order_value: float,
    zone: DeliveryZone,
) -> DeliveryQuote:
    """Price one provider for a distance and order value.

    Recommended providers carry a 10% discount. Orders at or above the zone's
    free-delivery threshold are quoted at zero.
    """
    base_fee = provider.base_cost
    distance_fee = distance_km * provider.cost_per_km
    before_discount = base_fee + distance_fee
    discount = before_discount * RECOMMENDED_DISCOUNT_RATE if provider.banda_recommended else 0.0
    is_free = order_value >= zone.free_delivery_threshold
    eta = eta_for(distance_km, provider.vehicle_type)
    return DeliveryQuote(
        provider=provider,
        base_fee=base_fee,
        distance_fee=distance_fee,
        total_fee=0.0 if is_free else before_discount - discount,
        is_free_delivery=is_free,
        banda_discount=discount,
        estimated_time=eta.text,
        eta_minutes=eta.minutes,
    )


def get_delivery_quotes(
    order_value: float,
    order_weight_kg: float,
    distance_km: float,
    delivery_area: str,
    zone: str | DeliveryZone = "ZONE_1",
    *,
    providers: Sequence[DeliveryProvider] = DELIVERY_PROVIDERS,
    matcher: AreaMatcher | None = None,
) -> list[DeliveryQuote]:
    """Quotes for every eligible provider, in provider ranking order.

    An empty list means no provider can take the order; it is not an error.
    """
    if order_value is None or math.isnan(order_value) or order_value < 0:
        raise InvalidInputError(f"order_value must be a non-negative number, got {order_value!r}")
    zone_obj = zone if isinstance(zone, DeliveryZone) else get_zone(zone)
    eligible = get_available_providers(
        order_weight_kg, distance_km, delivery_area, providers=providers, matcher=matcher
    )
    return [quote_provider(provider, distance_km, order_value, zone_obj) for provider in eligible]
