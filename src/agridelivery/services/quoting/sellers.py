"""Per-seller delivery quoting for split orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ...models.domain import DeliveryQuote, DeliveryZone, GeoCoordinates, SellerGroup
from ..catalog.matching import AreaMatcher
from ..geospatial import distance
from .quotes import get_delivery_quotes
from .weights import calculate_order_weight

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SellerDeliveryQuote:
    seller_id: str
    seller_location: str
    distance_km: Optional[float]
    weight_kg: float
    quotes: list[DeliveryQuote]

    @property
    def recommended(self) -> Optional[DeliveryQuote]:
        return self.quotes[0] if self.quotes else None


@dataclass(slots=True)
class SellerQuoteResult:
    seller_quotes: list[SellerDeliveryQuote]
    groups: list[SellerGroup]

    @property
    def total_fee(self) -> float:
        return sum(group.delivery_fee for group in self.groups)


def quote_seller_groups(
    groups: Sequence[SellerGroup],
    buyer: GeoCoordinates,
    *,
    delivery_area: str,
    zone: str | DeliveryZone = "ZONE_1",
    matcher: AreaMatcher | None = None,
) -> SellerQuoteResult:
    """Quote each seller group separately and project the recommended fee onto it.

    Groups are copied, never modified in place. A group without coordinates
    gets no quotes and keeps a zero fee.
    """
    seller_quotes: list[SellerDeliveryQuote] = []
    quoted_groups: list[SellerGroup] = []
    for group in groups:
        weight = calculate_order_weight(group.items)
        if group.seller_coordinates is None:
            logger.warning(f"Seller '{group.seller_id}' has no coordinates; skipping quotes")
            seller_quotes.append(
                SellerDeliveryQuote(group.seller_id, group.seller_location, None, weight, [])
            )
            quoted_groups.append(replace(group, items=list(group.items)))
            continue

        distance_km = distance(group.seller_coordinates, buyer)
        quotes = get_delivery_quotes(
            group.subtotal, weight, distance_km, delivery_area, zone, matcher=matcher
        )
        entry = SellerDeliveryQuote(group.seller_id, group.seller_location, distance_km, weight, quotes)
        seller_quotes.append(entry)

        best = entry.recommended
        quoted_groups.append(
            replace(
                group,
                items=list(group.items),
                delivery_fee=best.total_fee if best else 0.0,
                estimated_delivery=best.estimated_time if best else None,
            )
        )
    return SellerQuoteResult(seller_quotes=seller_quotes, groups=quoted_groups)
