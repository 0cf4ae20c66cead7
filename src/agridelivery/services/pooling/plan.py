"""Cost comparison for running several orders as one pooled delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from ...errors import InvalidInputError
from ...models.domain import GeoCoordinates, VehicleType
from ..geospatial import VEHICLE_SPEED_KMH, delivery_fee, distance, format_eta, round_half_up
from ..quoting.optimal import VEHICLE_MULTIPLIERS
from .base import PoolCandidate

DETOUR_FACTOR = 1.3


@dataclass(frozen=True, slots=True)
class RouteStop:
    kind: Literal["pickup", "dropoff"]
    reference: str
    location: GeoCoordinates


@dataclass(slots=True)
class PooledDeliveryPlan:
    vehicle_type: VehicleType
    order_count: int
    seller_count: int
    total_distance_km: float
    pooled_fee: int
    fee_per_order: int
    individual_fee_total: float
    total_savings: float
    savings_per_order: int
    savings_percentage: int
    eta_minutes: int
    estimated_time: str
    stops: list[RouteStop] = field(default_factory=list)


def _centroid(points: Sequence[GeoCoordinates]) -> GeoCoordinates:
    return GeoCoordinates(
        lat=sum(point.lat for point in points) / len(points),
        lng=sum(point.lng for point in points) / len(points),
    )


def plan_pooled_delivery(orders: Sequence[PoolCandidate], vehicle_type: VehicleType = "van") -> PooledDeliveryPlan:
    """Price a single run collecting from every seller and dropping at every buyer.

    The route is approximated as sellers -> buyers' centroid -> each buyer.
    """
    if not orders:
        raise InvalidInputError("No orders provided for pooling")
    if vehicle_type not in VEHICLE_MULTIPLIERS:
        raise InvalidInputError(f"Unknown vehicle type '{vehicle_type}'.")

    sellers: dict[str, GeoCoordinates] = {}
    for order in orders:
        for seller in order.sellers:
            sellers.setdefault(seller.seller_id, seller.coordinates)

    buyers = [order.buyer_location for order in orders]
    centroid = _centroid(buyers)
    total_distance = sum(distance(point, centroid) for point in sellers.values())
    total_distance += sum(distance(centroid, buyer) for buyer in buyers)

    pooled_fee = round_half_up(delivery_fee(total_distance) * VEHICLE_MULTIPLIERS[vehicle_type])
    individual_total = sum(
        delivery_fee(distance(seller.coordinates, order.buyer_location))
        for order in orders
        for seller in order.sellers
    )
    savings = max(0.0, individual_total - pooled_fee)
    eta_minutes = round_half_up(total_distance / VEHICLE_SPEED_KMH[vehicle_type] * 60 * DETOUR_FACTOR)

    stops = [RouteStop("pickup", seller_id, point) for seller_id, point in sellers.items()]
    stops += [RouteStop("dropoff", order.order_id, order.buyer_location) for order in orders]

    return PooledDeliveryPlan(
        vehicle_type=vehicle_type,
        order_count=len(orders),
        seller_count=len(sellers),
        total_distance_km=round(total_distance, 1),
        pooled_fee=pooled_fee,
        fee_per_order=round_half_up(pooled_fee / len(orders)),
        individual_fee_total=individual_total,
        total_savings=savings,
        savings_per_order=round_half_up(savings / len(orders)),
        savings_percentage=round_half_up(savings / individual_total * 100) if individual_total else 0,
        eta_minutes=eta_minutes,
        estimated_time=format_eta(eta_minutes),
        stops=stops,
    )
