"""Single-shot vehicle recommendation from aggregate order characteristics."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import GeoCoordinates, OptimalDeliveryOption, SellerStop, UserLocation, VehicleType
from ..geospatial import delivery_fee, distance, eta_for, round_half_up

VEHICLE_MULTIPLIERS: dict[str, float] = {
    "boda": 1.0,
    "van": 1.3,
    "truck": 1.8,
    "pickup": 1.4,
}

NEARBY_DISTANCE_KM = 10.0
SMALL_ORDER_VALUE = 2000.0
LARGE_ORDER_VALUE = 10000.0
MAX_SELLERS_BEFORE_TRUCK = 3
LONG_DISTANCE_KM = 50.0


def choose_vehicle(avg_distance_km: float, total_value: float, seller_count: int) -> tuple[VehicleType, str]:
    """First matching rule wins."""
    if avg_distance_km < NEARBY_DISTANCE_KM and total_value < SMALL_ORDER_VALUE:
        return "boda", "Fast delivery for nearby orders"
    if total_value > LARGE_ORDER_VALUE or seller_count > MAX_SELLERS_BEFORE_TRUCK:
        return "truck", "Large order requires truck capacity"
    if avg_distance_km > LONG_DISTANCE_KM:
        return "pickup", "Long distance delivery"
    return "van", "Balanced speed and capacity"


def get_optimal_delivery_option(
    sellers: Sequence[SellerStop],
    buyer_location: UserLocation | GeoCoordinates | None,
) -> Optional[OptimalDeliveryOption]:
    """Recommend one vehicle class for the whole order.

    Returns None when there is no buyer position or no seller. This is a coarse
    recommendation and may disagree with the ranked provider quotes.
    """
    if buyer_location is None or not sellers:
        return None
    buyer = buyer_location.coordinates if isinstance(buyer_location, UserLocation) else buyer_location
    if buyer is None:
        return None

    avg_distance = sum(distance(buyer, seller.coordinates) for seller in sellers) / len(sellers)
    total_value = sum(seller.order_value for seller in sellers)
    vehicle_type, reason = choose_vehicle(avg_distance, total_value, len(sellers))

    total_fee = round_half_up(delivery_fee(avg_distance) * VEHICLE_MULTIPLIERS[vehicle_type] * len(sellers))
    eta = eta_for(avg_distance, vehicle_type)
    return OptimalDeliveryOption(
        provider_id=f"provider-{vehicle_type}-optimal",
        provider_name=f"TradeGuard {vehicle_type.capitalize()}",
        vehicle_type=vehicle_type,
        total_fee=total_fee,
        estimated_time=eta.text,
        distance_km=avg_distance,
        reason=reason,
    )
