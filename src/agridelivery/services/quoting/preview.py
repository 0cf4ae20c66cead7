"""Product-level delivery previews for browsing screens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...models.domain import GeoCoordinates, Product
from ..cart.grouping import seller_id_for
from ..geospatial import delivery_fee, distance, eta_for


@dataclass(slots=True)
class DeliveryPreview:
    distance_km: float
    delivery_fee: float
    estimated_time: str
    seller_id: str
    seller_name: str


@dataclass(slots=True)
class NearbyProduct:
    product: Product
    distance_km: float
    delivery_fee: float


def delivery_preview(product: Product, buyer: Optional[GeoCoordinates]) -> Optional[DeliveryPreview]:
    if buyer is None or product.coordinates is None:
        return None
    distance_km = distance(buyer, product.coordinates)
    return DeliveryPreview(
        distance_km=distance_km,
        delivery_fee=delivery_fee(distance_km),
        estimated_time=eta_for(distance_km, "van").text,
        seller_id=seller_id_for(product.vendor),
        seller_name=product.vendor,
    )


def nearest_products(
    products: Sequence[Product],
    buyer: Optional[GeoCoordinates],
    radius_km: float = 50.0,
) -> list[NearbyProduct]:
    """Products within ``radius_km`` of the buyer, nearest first."""
    if buyer is None:
        return []
    nearby: list[NearbyProduct] = []
    for product in products:
        if product.coordinates is None:
            continue
        distance_km = distance(buyer, product.coordinates)
        if distance_km <= radius_km:
            nearby.append(NearbyProduct(product, distance_km, delivery_fee(distance_km)))
    nearby.sort(key=lambda entry: (entry.distance_km, entry.product.id))
    return nearby
